#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render router
=============
POST /api/v1/render/posts                      — render a batch of stored posts
GET  /api/v1/render?content=...&format=...     — live preview for the editor
GET  /api/v1/render/highlight.css              — stylesheet for code blocks
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Query
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from blogrender.core.config import get_settings
from blogrender.schemas import PreviewResponse, RenderedPost, RenderRequest
from blogrender.services.highlight import highlight_css
from blogrender.services.renderer import render, render_content

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/render", tags=["render"])


# -----------------------------------------------------------------------------

@router.post("/posts", response_model=list[RenderedPost])
async def render_posts(
    payload: RenderRequest,
    accept_language: Optional[str] = Header(default=None),
):
    """Render stored posts; an empty list means the batch could not be rendered."""
    settings = get_settings()
    update: dict = {"reply_markdown": settings.reply_enable_markdown_support}
    if not payload.options.accept_language and accept_language:
        update["accept_language"] = accept_language
    options = payload.options.model_copy(update=update)
    return await run_in_threadpool(render, payload.posts, options)


# -----------------------------------------------------------------------------

@router.get("", response_model=PreviewResponse)
async def render_preview(
    content: str  = Query(default="", max_length=1_000_000),
    format:  str  = Query(default="markdown"),
    preview: bool = Query(default=False),
):
    """Return rendered HTML for a single post body, used by the live editor preview."""
    try:
        html, more = await run_in_threadpool(render_content, content, format, preview=preview)
    except Exception as exc:
        log.warning("Preview rendering failed for format %r: %s", format, exc)
        raise HTTPException(status_code=422, detail="Content could not be rendered") from exc
    return PreviewResponse(html=html, format=format, more=more)


# -----------------------------------------------------------------------------

@router.get("/highlight.css")
async def code_stylesheet():
    css = highlight_css(get_settings().highlight_style)
    return Response(content=css, media_type="text/css")


# -----------------------------------------------------------------------------
