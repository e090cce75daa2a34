#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Code fragment highlighting via Pygments.

Every fragment comes out as::

    <pre class="highlight"><span class="__line">…</span>
    <span class="__line">…</span></pre>

so the front end can number or mark individual lines.  The per-line wrapping
is the same whether the fragment was highlighted, auto-detected or fell back
to plain text.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html
import logging
from typing import Optional

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, guess_lexer
from pygments.util import ClassNotFound

from blogrender.core.errors import ErrorKind, RenderError

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

LINE_CLASS = "__line"
CSS_CLASS  = "highlight"

_FORMATTER = HtmlFormatter(nowrap=True)


# -----------------------------------------------------------------------------

def _wrap_lines(markup: str) -> str:
    return "\n".join(f'<span class="{LINE_CLASS}">{line}</span>' for line in markup.split("\n"))


def _lexer_for(code: str, lang: Optional[str], auto_detect: bool) -> Optional[Lexer]:
    lang = (lang or "").strip()
    if lang:
        try:
            return get_lexer_by_name(lang)
        except ClassNotFound:
            pass
    if auto_detect:
        try:
            return guess_lexer(code)
        except ClassNotFound:
            return None
    return None


# -----------------------------------------------------------------------------

def highlight_fragment(text: str, lang: Optional[str] = None, *, auto_detect: bool = False) -> str:
    """
    Highlight *text* and return it as a line-wrapped ``<pre>`` block.

    A known *lang* is used as-is.  A missing or unknown one is guessed when
    *auto_detect* is set, otherwise the fragment is emitted as escaped plain
    text.  Errors raised by the highlighter never propagate.
    """
    code = text.rstrip()
    try:
        lexer = _lexer_for(code, lang, auto_detect)
        if lexer is None:
            rendered = html.escape(code)
        else:
            rendered = highlight(code, lexer, _FORMATTER).rstrip("\n")
    except Exception as exc:
        log.debug("%s", RenderError(ErrorKind.HIGHLIGHT_FAILURE, f"lang={lang!r}: {exc}"))
        rendered = html.escape(code)
    return f'<pre class="{CSS_CLASS}">{_wrap_lines(rendered)}</pre>'


# -----------------------------------------------------------------------------

def highlight_css(style: str = "friendly") -> str:
    """Pygments stylesheet for fragments produced by :func:`highlight_fragment`."""
    return HtmlFormatter(style=style).get_style_defs(f".{CSS_CLASS}")


# -----------------------------------------------------------------------------
