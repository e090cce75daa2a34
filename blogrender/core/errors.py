#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render pipeline errors.

NO_CONTENT        : a post has no body variant to render; fatal for the call.
HIGHLIGHT_FAILURE : the highlighter raised for one code fragment; recovered
                    locally with a plain-text fallback.
BATCH_FAILURE     : anything uncaught while rendering a batch; the batch
                    renders as an empty list.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum


# -----------------------------------------------------------------------------

class ErrorKind(str, Enum):
    NO_CONTENT = "no_content"
    HIGHLIGHT_FAILURE = "highlight_failure"
    BATCH_FAILURE = "batch_failure"


# -----------------------------------------------------------------------------

class RenderError(Exception):

    def __init__(self, kind: ErrorKind, message: str = "") -> None:
        self.kind = kind
        self.message = message or kind.value
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


# -----------------------------------------------------------------------------
