#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Access log ring buffer.

Keeps the most recent access lines in memory so operators can look at live
traffic through ``GET /api/v1/logs``.  Every line is also written to the
``blogrender.access`` logger.

Requests made by the server-side renderer itself carry a
``server-side-rendering: true`` header and are not logged, and neither are
requests for static assets (paths under ``request_log_skip_prefixes``).
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from starlette.requests import Request

access_log = logging.getLogger("blogrender.access")


# -----------------------------------------------------------------------------

SSR_HEADER = "server-side-rendering"


# -----------------------------------------------------------------------------

class RequestLog:

    def __init__(self, size: int = 50) -> None:
        self._lines: deque[str] = deque(maxlen=size)

    @property
    def size(self) -> int:
        return self._lines.maxlen or 0

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def record(self, line: str) -> None:
        self._lines.append(line)
        access_log.info(line)

    def clear(self) -> None:
        self._lines.clear()


# -----------------------------------------------------------------------------

def client_ip(request: Request) -> str:
    """Prefer the address set by the reverse proxy."""
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "0.0.0.0"


def format_line(request: Request, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    agent = request.headers.get("user-agent", "")
    return f"[{now:%Y-%m-%d %H:%M:%S}] {client_ip(request)} - {request.method} {url} - {agent}"


def should_log(request: Request, skip_prefixes: Sequence[str] = ()) -> bool:
    """Skip the renderer's own requests and static asset paths."""
    if request.headers.get(SSR_HEADER) == "true":
        return False
    return not request.url.path.startswith(tuple(skip_prefixes))


# -----------------------------------------------------------------------------
