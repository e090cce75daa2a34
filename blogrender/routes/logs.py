#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Request log router
==================
GET /api/v1/logs   — most recent access lines, oldest first
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Request

from blogrender.schemas import RequestLogResponse
from blogrender.services.request_log import RequestLog


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/logs", tags=["logs"])


# -----------------------------------------------------------------------------

@router.get("", response_model=RequestLogResponse)
async def recent_requests(request: Request):
    request_log: RequestLog = request.app.state.request_log
    return RequestLogResponse(size=request_log.size, lines=request_log.lines)


# -----------------------------------------------------------------------------
