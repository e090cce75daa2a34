"""Tests for password-protected posts."""
from __future__ import annotations

import pytest

from blogrender.schemas import BlogPost, BlogPostBody
from blogrender.services.renderer import PROTECTED_CONTENT, apply_password_gate, render


SECRET_TEXT = "The launch date is the fourth of May."


@pytest.fixture
def protected_post(make_post, make_body):
    return make_post(
        make_body("en", SECRET_TEXT, title="Secret plans", default=True),
        password="x",
        replies=[{"content": "first!", "author": "alice"}],
    )


# ── Locked ────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("guess", [None, "", "wrong", "X"])
def test_wrong_password_hides_content(protected_post, guess):
    [rendered] = render([protected_post], {"password": guess})
    assert rendered.protected is True
    assert rendered.more is True
    assert rendered.replies == []
    assert PROTECTED_CONTENT in rendered.content
    assert SECRET_TEXT not in rendered.content


def test_locked_post_keeps_real_title(protected_post):
    [rendered] = render([protected_post])
    assert rendered.title == "Secret plans"
    assert rendered.language == "en"


def test_locked_post_never_leaks_in_fake_rendering(protected_post):
    [rendered] = render([protected_post], {"fakeRendering": True})
    assert rendered.protected is True
    assert rendered.content is None
    assert SECRET_TEXT not in rendered.model_dump_json()


def test_password_never_in_output(protected_post):
    for guess in (None, "x"):
        [rendered] = render([protected_post], {"password": guess})
        dumped = rendered.model_dump()
        assert "password" not in dumped
        assert "body" not in dumped


# ── Unlocked ──────────────────────────────────────────────────────────────────

def test_correct_password_shows_content(protected_post):
    [rendered] = render([protected_post], {"password": "x"})
    assert rendered.protected is False
    assert rendered.more is False
    assert SECRET_TEXT in rendered.content
    assert rendered.replies[0].content == "first!"


def test_empty_password_is_not_protected(make_post):
    [rendered] = render([make_post(password="")])
    assert rendered.protected is False
    assert "Hello" in rendered.content


# ── Gate in isolation ─────────────────────────────────────────────────────────

def test_gate_builds_disclosure_body():
    post = BlogPost(date="2024-01-01T00:00:00Z", password="pw", replies=[{"content": "hi"}])
    real = BlogPostBody(language="ja", title="秘密", content="hidden", format="pug")
    body, locked = apply_password_gate(post, real, "nope")
    assert locked is True
    assert body.title == "秘密"
    assert body.language == "ja"
    assert body.content == PROTECTED_CONTENT
    assert body.format == "markdown"
    assert body.default is True
    assert post.replies == []
    assert post.password is None


def test_gate_passes_matching_guess_through():
    post = BlogPost(date="2024-01-01T00:00:00Z", password="pw")
    real = BlogPostBody(language="en", title="t", content="c")
    body, locked = apply_password_gate(post, real, "pw")
    assert locked is False
    assert body is real
    assert post.password is None
