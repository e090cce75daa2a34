"""Tests for markdown rendering of reply contents."""
from __future__ import annotations

import pytest

from blogrender.services.renderer import render


@pytest.fixture
def post_with_replies(make_post):
    return make_post(replies=[
        {"content": "**nice** post", "author": "alice"},
        {"content": "", "author": "bob"},
        {"author": "carol"},
    ])


def test_replies_rendered_when_enabled(post_with_replies):
    [rendered] = render([post_with_replies], {"replyMarkdown": True})
    first, empty, missing = rendered.replies
    assert first.markdown is True
    assert first.content.strip() == "<p><strong>nice</strong> post</p>"
    assert first.model_extra["author"] == "alice"
    assert empty.markdown is False
    assert empty.content == ""
    assert missing.markdown is False
    assert missing.content is None


def test_replies_untouched_when_disabled(post_with_replies):
    [rendered] = render([post_with_replies])
    assert rendered.replies[0].content == "**nice** post"
    assert rendered.replies[0].markdown is False


def test_replies_untouched_in_title_only_mode(post_with_replies):
    [rendered] = render([post_with_replies], {"replyMarkdown": True, "titleOnly": True})
    assert rendered.replies[0].content == "**nice** post"


def test_reply_html_is_escaped(make_post):
    post = make_post(replies=[{"content": "<script>alert(1)</script>"}])
    [rendered] = render([post], {"replyMarkdown": True})
    assert "<script>" not in rendered.replies[0].content
    assert "&lt;script&gt;" in rendered.replies[0].content


def test_reply_code_is_highlighted(make_post):
    post = make_post(replies=[{"content": "```python\nx = 1\n```"}])
    [rendered] = render([post], {"replyMarkdown": True})
    assert '<pre class="highlight">' in rendered.replies[0].content
    assert '<span class="__line">' in rendered.replies[0].content


def test_reply_gets_no_ruby_or_truncation(make_post):
    post = make_post(replies=[{"content": "{a}(b)\n\n<!-- more -->\n\ntail"}])
    [rendered] = render([post], {"replyMarkdown": True, "preview": True})
    content = rendered.replies[0].content
    assert "<ruby>" not in content
    assert "{a}(b)" in content
    assert "tail" in content
