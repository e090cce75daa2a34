#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Body variant selection
======================
Picks which language rendition of a post to show for a client's raw
``Accept-Language`` value.

The header is *not* parsed into quality values.  A variant scores by where
its code first appears in the raw string: the earlier, the higher.  Variants
whose code does not appear at all score ``-1``.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from collections.abc import Sequence

from blogrender.core.errors import ErrorKind, RenderError
from blogrender.schemas import BlogPostBody, LanguageOption
from blogrender.services.iso639 import language_name


# -----------------------------------------------------------------------------

def language_priority(code: str, accept_language: str) -> int:
    """Score *code* against the raw preference string (``-1`` = no match)."""
    offset = accept_language.find(code)
    if offset < 0:
        return -1
    return len(accept_language) - offset


# -----------------------------------------------------------------------------

def _ranked(bodies: Sequence[BlogPostBody], accept_language: str) -> list[tuple[str, int]]:
    scored = [(body.language, language_priority(body.language, accept_language)) for body in bodies]
    # sorted() is stable with reverse=True, so ties keep storage order
    return sorted(scored, key=lambda item: item[1], reverse=True)


def _options(ranked: list[tuple[str, int]]) -> list[LanguageOption]:
    return [LanguageOption(name=language_name(code), code=code) for code, _ in ranked]


def rank_languages(bodies: Sequence[BlogPostBody], accept_language: str = "") -> list[LanguageOption]:
    """Return the available languages, best match first."""
    return _options(_ranked(bodies, accept_language))


# -----------------------------------------------------------------------------

def select_body(
    bodies: Sequence[BlogPostBody],
    accept_language: str = "",
) -> tuple[BlogPostBody, list[LanguageOption]]:
    """
    Choose the body variant to render.

    Returns the matched body together with the ranked language list.  When
    nothing in *accept_language* matches, the variant flagged ``default``
    wins, falling back to the first stored variant.
    """
    if not bodies:
        raise RenderError(ErrorKind.NO_CONTENT, "post has no body variants")

    ranked = _ranked(bodies, accept_language)
    languages = _options(ranked)

    top_code, top_priority = ranked[0]
    if top_priority < 0:
        matched = next((body for body in bodies if body.default), bodies[0])
    else:
        matched = next(body for body in bodies if body.language == top_code)

    return matched, languages


# -----------------------------------------------------------------------------
