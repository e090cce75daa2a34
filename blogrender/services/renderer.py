#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Post renderer
=============
Turns stored blog posts into what the page templates display.

Per post, in order:

  1. snapshot      : deep copy, the caller's objects are never touched
  2. language      : pick the body variant for the client's Accept-Language
  3. password gate : swap in a disclosure body when the guess is wrong
  4. content       : markdown / pug / html → HTML, preview cut at the marker
  5. replies       : markdown for reply contents, when enabled
  6. finalize      : promote title + language, drop ``body`` and ``password``

Supported body formats:
  - markdown   : rendered via mistune, raw HTML allowed, fenced code
                 highlighted, ``{base}(ruby)`` rewritten afterwards
  - jade / pug : rendered via pypugjs, ``<code>`` tags highlighted
  - anything else is stored HTML and only gets the ``<code>`` pass
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, Optional, Union

import mistune
import pypugjs
from mistune.plugins.formatting import strikethrough
from mistune.plugins.table import table

from blogrender.core.errors import ErrorKind, RenderError
from blogrender.schemas import (
    BlogPost, BlogPostBody, LanguageOption, RenderedPost, RenderOptions, Reply,
)
from blogrender.services.highlight import highlight_fragment
from blogrender.services.languages import select_body
from blogrender.services.transforms import rewrite_code_blocks, rewrite_ruby

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

MORE_MARKER = "<!-- more -->"

PROTECTED_CONTENT = "This is a password-protected post, content preview is not available."


# -----------------------------------------------------------------------------
# Formats
# -----------------------------------------------------------------------------

class ContentFormat(str, Enum):
    MARKDOWN = "markdown"
    PUG = "pug"
    HTML = "html"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ContentFormat":
        """Map a stored ``format`` value onto a handler; unknown values are HTML."""
        value = (value or "").lower()
        if value == "markdown":
            return cls.MARKDOWN
        if value in ("jade", "pug"):
            return cls.PUG
        return cls.HTML


# -----------------------------------------------------------------------------
# Markdown renderer via mistune
# -----------------------------------------------------------------------------

class _HighlightRenderer(mistune.HTMLRenderer):
    def block_code(self, code: str, **kwargs) -> str:
        info = kwargs.get('info') or ''
        lang = info.split()[0] if info.strip() else None
        return highlight_fragment(code, lang)


def _make_md_renderer(escape: bool):
    return mistune.create_markdown(
        renderer=_HighlightRenderer(escape=escape),
        plugins=[table, strikethrough],
    )


_md_renderers: dict[bool, Callable[[str], str]] = {}


def _get_md_renderer(escape: bool = False) -> Callable[[str], str]:
    """Post bodies pass raw HTML through (``escape=False``); replies do not."""
    if escape not in _md_renderers:
        _md_renderers[escape] = _make_md_renderer(escape)
    return _md_renderers[escape]


# -----------------------------------------------------------------------------
# Pug renderer via pypugjs
# -----------------------------------------------------------------------------

def _pug_to_html(source: str) -> str:
    # Plain HTML compiler: no second template language sees the author's
    # text, so literal {{ }} and {% %} survive.  Compact output, so the
    # preview cut leaves no stray indentation behind.
    block = pypugjs.Parser(source).parse()
    return pypugjs.html.Compiler(block, pretty=False).compile()


# -----------------------------------------------------------------------------
# Format handlers  (content, preview) → (html, truncated)
# -----------------------------------------------------------------------------

def _cut_at_marker(text: str) -> tuple[str, bool]:
    offset = text.find(MORE_MARKER)
    if offset < 0:
        return text, False
    return text[:offset], True


def _render_markdown(content: str, preview: bool) -> tuple[str, bool]:
    # The marker is cut from the markdown source, before conversion.
    truncated = False
    if preview:
        content, truncated = _cut_at_marker(content)
    html = _get_md_renderer(escape=False)(content)
    return rewrite_ruby(html), truncated


def _finish_html(html: str, preview: bool) -> tuple[str, bool]:
    # Here the marker is looked for in the converted HTML.
    truncated = False
    if preview:
        html, truncated = _cut_at_marker(html)
    return rewrite_code_blocks(html), truncated


def _render_pug(content: str, preview: bool) -> tuple[str, bool]:
    return _finish_html(_pug_to_html(content), preview)


def _render_html(content: str, preview: bool) -> tuple[str, bool]:
    return _finish_html(content, preview)


_HANDLERS: dict[ContentFormat, Callable[[str, bool], tuple[str, bool]]] = {
    ContentFormat.MARKDOWN: _render_markdown,
    ContentFormat.PUG:      _render_pug,
    ContentFormat.HTML:     _render_html,
}


def render_content(content: str, fmt: Union[str, ContentFormat], *, preview: bool = False) -> tuple[str, bool]:
    """
    Render one body's *content* to HTML.

    Returns ``(html, truncated)``; *truncated* is True when *preview* is set
    and the content was cut at :data:`MORE_MARKER`.
    """
    if not isinstance(fmt, ContentFormat):
        fmt = ContentFormat.parse(fmt)
    return _HANDLERS[fmt](content, preview)


# -----------------------------------------------------------------------------
# Pipeline stages
# -----------------------------------------------------------------------------

def _snapshot(post: Union[BlogPost, dict[str, Any]]) -> BlogPost:
    # model_validate returns BlogPost instances unchanged and may share
    # nested values with a dict, so always copy deeply afterwards.
    return BlogPost.model_validate(post).model_copy(deep=True)


def apply_password_gate(
    post: BlogPost,
    matched: BlogPostBody,
    password: Optional[str],
) -> tuple[BlogPostBody, bool]:
    """
    Lock *post* if it is protected and *password* is not its password.

    Returns the body to render and whether the post was locked.  A locked
    post loses its replies and its body is replaced by a disclosure notice
    that keeps the real title and language.  The password itself is always
    cleared from *post*.
    """
    secret, post.password = post.password, None
    if not isinstance(secret, str) or not secret or password == secret:
        return matched, False

    post.replies = []
    notice = BlogPostBody(
        title=matched.title,
        language=matched.language,
        content=PROTECTED_CONTENT,
        format=ContentFormat.MARKDOWN.value,
        default=True,
    )
    return notice, True


def render_replies(replies: Iterable[Reply]) -> None:
    """Convert reply contents from markdown in place; raw HTML is escaped."""
    md = _get_md_renderer(escape=True)
    for reply in replies:
        if not reply.content:
            continue
        reply.markdown = True
        reply.content = md(reply.content)


def _finalize(
    post: BlogPost,
    matched: BlogPostBody,
    languages: list[LanguageOption],
    content: Optional[str],
    more: bool,
    protected: bool,
) -> RenderedPost:
    data = post.model_dump(exclude={"body", "password"})
    data.update(
        title=matched.title,
        language=matched.language,
        languages=languages,
        content=content,
        more=more,
        protected=protected,
    )
    return RenderedPost.model_validate(data)


# -----------------------------------------------------------------------------
# Public render functions
# -----------------------------------------------------------------------------

def render_post(post: Union[BlogPost, dict[str, Any]], options: RenderOptions) -> RenderedPost:
    """
    Run the whole pipeline on a single post.

    Raises :class:`RenderError` (``NO_CONTENT``) for a post without body
    variants; any other failure propagates as well.
    """
    post = _snapshot(post)

    matched, languages = select_body(post.body, options.accept_language)
    matched, locked = apply_password_gate(post, matched, options.password)
    more = locked

    content: Optional[str] = None
    if not options.fake_rendering and not options.title_only:
        content, truncated = render_content(matched.content, matched.format, preview=options.preview)
        more = more or truncated

        if post.replies and options.reply_markdown:
            render_replies(post.replies)

    return _finalize(post, matched, languages, content, more=more, protected=locked)


def render(
    posts: Iterable[Union[BlogPost, dict[str, Any]]],
    options: Union[RenderOptions, dict[str, Any], None] = None,
) -> list[RenderedPost]:
    """
    Render a batch of posts, preserving order.

    The batch is all-or-nothing: if any post fails, the failure is logged
    and an empty list is returned instead of a partial result.
    """
    try:
        opts = RenderOptions.model_validate(options or {})
        return [render_post(post, opts) for post in posts]
    except Exception as exc:
        log.exception("%s", RenderError(ErrorKind.BATCH_FAILURE, f"post rendering aborted: {exc}"))
        return []


# -----------------------------------------------------------------------------
