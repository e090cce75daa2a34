#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pydantic v2 models for stored posts, render options and rendered output.

Stored records may carry fields this package knows nothing about (ids,
slugs, tags …); those are allowed and carried through to the output.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Stored records
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class BlogPostBody(BaseModel):
    """One language rendition of a post."""
    language: str
    title: str = ""
    content: str = ""
    format: str = "markdown"
    default: bool = False


# -----------------------------------------------------------------------------

class Reply(BaseModel):
    content: Optional[str] = None
    markdown: bool = False

    model_config = ConfigDict(extra="allow")


# -----------------------------------------------------------------------------

class BlogPost(BaseModel):
    date: datetime
    body: list[BlogPostBody] = Field(default_factory=list)
    password: Optional[str] = None
    replies: Optional[list[Reply]] = None

    model_config = ConfigDict(extra="allow")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderOptions(BaseModel):
    title_only: bool = False
    accept_language: str = ""
    preview: bool = False
    password: Optional[str] = None
    fake_rendering: bool = False
    reply_markdown: bool = False

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------

class LanguageOption(BaseModel):
    name: str
    code: str


# -----------------------------------------------------------------------------

class RenderedPost(BaseModel):
    date: datetime
    title: str
    language: str
    languages: list[LanguageOption] = Field(default_factory=list)
    content: Optional[str] = None
    more: bool = False
    protected: bool = False
    replies: Optional[list[Reply]] = None

    model_config = ConfigDict(extra="allow")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HTTP payloads
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderRequest(BaseModel):
    posts: list[BlogPost] = Field(default_factory=list)
    options: RenderOptions = Field(default_factory=RenderOptions)


# -----------------------------------------------------------------------------

class PreviewResponse(BaseModel):
    html: str
    format: str
    more: bool = False


# -----------------------------------------------------------------------------

class RequestLogResponse(BaseModel):
    size: int
    lines: list[str]


# -----------------------------------------------------------------------------
