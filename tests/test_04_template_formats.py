"""Tests for pug/jade bodies and stored-HTML passthrough bodies."""
from __future__ import annotations

from blogrender.services.renderer import render, render_content


# ── Pug / Jade ────────────────────────────────────────────────────────────────

def test_pug_paragraph():
    html, more = render_content("p Hello world", "pug")
    assert "<p>Hello world</p>" in html
    assert more is False


def test_jade_alias_is_case_insensitive():
    html, _ = render_content("h2 Section", "Jade")
    assert "<h2>Section</h2>" in html


def test_pug_bare_code_tag_is_highlighted():
    html, _ = render_content("code x = 1", "pug")
    assert "<code>" not in html
    assert '<pre class="highlight">' in html
    assert '<span class="__line">' in html


def test_pug_keeps_template_braces_as_text():
    html, _ = render_content("p Use {{ name }} in Jinja", "pug")
    assert html == "<p>Use {{ name }} in Jinja</p>"


def test_pug_block_tags_do_not_abort_the_batch(make_post, make_body):
    post = make_post(make_body(content="p Write {% if x %} blocks", fmt="pug"))
    rendered = render([post])
    assert len(rendered) == 1
    assert "{% if x %}" in rendered[0].content


def test_pug_code_with_lang_is_highlighted():
    html, _ = render_content('code(lang="python") x = 1', "pug")
    assert '<code lang=' not in html
    assert '<span class="n">x</span>' in html


def test_pug_preview_cuts_converted_output(make_post, make_body):
    post = make_post(make_body(content="p A\n<!-- more -->\np B", fmt="pug"))
    [rendered] = render([post], {"preview": True})
    assert rendered.more is True
    assert rendered.content == "<p>A</p>"


# ── Stored HTML ───────────────────────────────────────────────────────────────

def test_unknown_format_passes_through():
    html, _ = render_content("<p>Already <em>HTML</em></p>", "html")
    assert html == "<p>Already <em>HTML</em></p>"
    html, _ = render_content("<p>rst?</p>", "rst")
    assert html == "<p>rst?</p>"


def test_code_with_lang_is_highlighted():
    html, _ = render_content('<p>x</p><code lang="python">def f():\n    return 1\n</code>', "html")
    assert '<code lang="python">' not in html
    assert html.startswith("<p>x</p><pre class=\"highlight\">")
    assert html.count('<span class="__line">') == 2
    assert '<span class="k">def</span>' in html


def test_code_entities_are_decoded_before_highlighting():
    html, _ = render_content('<code lang="text">a &lt; b</code>', "html")
    assert "a &lt; b" in html
    assert "&amp;lt;" not in html


def test_bare_code_is_auto_detected():
    html, _ = render_content("<code>SELECT 1;</code>", "html")
    assert "<code>" not in html
    assert '<pre class="highlight">' in html


def test_code_with_unknown_lang_is_guessed():
    html, _ = render_content('<code lang="zzznotalang">hello</code>', "html")
    assert '<pre class="highlight">' in html
    assert "hello" in html


def test_html_preview_cuts_converted_output(make_post, make_body):
    post = make_post(make_body(content="<p>A</p><!-- more --><p>B</p>", fmt="html"))
    [rendered] = render([post], {"preview": True})
    assert rendered.more is True
    assert rendered.content == "<p>A</p>"


def test_html_preview_drops_code_after_marker():
    html, more = render_content("<p>A</p><!-- more --><code>x = 1</code>", "html", preview=True)
    assert more is True
    assert html == "<p>A</p>"


def test_ruby_not_applied_to_html_format():
    html, _ = render_content("<p>{a}(b)</p>", "html")
    assert html == "<p>{a}(b)</p>"
