#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Post-conversion HTML rewrites
=============================
Regex passes over HTML that a converter has already produced.

rewrite_ruby         : ``{東京}(とうきょう)`` → ``<ruby>`` markup
rewrite_code_blocks  : ``<code lang="x">…</code>`` / ``<code>…</code>``
                       → highlighted, line-wrapped ``<pre>`` blocks

Escaping rules for the ruby pass
--------------------------------
The pattern is only looked for in text *between* tags.  Tag markup itself
(attribute values included) and the contents of ``<pre>`` and ``<code>``
elements are copied through untouched, so an author can still show the
literal ``{x}(y)`` syntax inside code.  A consequence is that the base text
and the annotation cannot contain inline markup: ``{<em>a</em>}(b)`` is left
alone.  Both parts must fit on one line; the base text ends at the first
``}(`` that follows it and the annotation at the first ``)``.
An unclosed ``<pre>`` or ``<code>`` counts as a lone tag, so the text after
it is still rewritten.  Look-alike tags such as ``<codex>`` are ordinary tags.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html
import re

from blogrender.services.highlight import highlight_fragment


# -----------------------------------------------------------------------------
# Ruby annotations
# -----------------------------------------------------------------------------

_RUBY_RE = re.compile(r"\{([^\n]+?)\}\(([^\n]+?)\)")

# Split points for the ruby pass: whole <pre>/<code> elements and single tags.
_OPAQUE_RE = re.compile(
    r"(<pre(?:\s[^>]*)?>.*?</pre>|<code(?:\s[^>]*)?>.*?</code>|<[^>]*>)",
    re.IGNORECASE | re.DOTALL,
)


def _ruby(m: re.Match) -> str:
    return f"<ruby>{m.group(1)}<rp>(</rp><rt>{m.group(2)}</rt><rp>)</rp></ruby>"


def rewrite_ruby(markup: str) -> str:
    """Render every ``{BASE}(ANNOTATION)`` in text nodes of *markup* as ruby."""
    # re.split keeps the captured separators at odd indices
    parts = _OPAQUE_RE.split(markup)
    return "".join(
        part if i % 2 else _RUBY_RE.sub(_ruby, part)
        for i, part in enumerate(parts)
    )


# -----------------------------------------------------------------------------
# Code tags emitted by template / HTML sources
# -----------------------------------------------------------------------------

_CODE_LANG_RE = re.compile(r'<code lang="(.+?)">([\s\S]+?)</code>')
_CODE_BARE_RE = re.compile(r"<code>([\s\S]+?)</code>")


def rewrite_code_blocks(markup: str) -> str:
    """
    Replace ``<code>`` elements in *markup* with highlighted blocks.

    ``<code lang="x">`` forces language *x* (guessing when Pygments does not
    know it); a bare ``<code>`` is always guessed.  The element contents are
    HTML, so entities are decoded before highlighting.
    """
    markup = _CODE_LANG_RE.sub(
        lambda m: highlight_fragment(html.unescape(m.group(2)), m.group(1), auto_detect=True),
        markup,
    )
    return _CODE_BARE_RE.sub(
        lambda m: highlight_fragment(html.unescape(m.group(1)), auto_detect=True),
        markup,
    )


# -----------------------------------------------------------------------------
