# test_content.py

import pytest
from unittest.mock import Mock

from typemorph.config import TypeMorphConfig
from typemorph.content import (
    Element, TextRun, build_content, parse_html, plain_text, render_markdown, sanitize_html,
)


class TestParseHtml:
    """Markup to content tree."""

    def test_single_element(self):
        assert parse_html("<b>Hi</b>") == [Element("b", (), (TextRun("Hi"),))]

    def test_nested_elements_keep_attributes_in_order(self):
        nodes = parse_html('<p class="x" id="y">a<em title="t">b</em>c</p>')
        assert nodes == [
            Element("p", (("class", "x"), ("id", "y")), (
                TextRun("a"),
                Element("em", (("title", "t"),), (TextRun("b"),)),
                TextRun("c"),
            )),
        ]

    def test_void_elements_have_no_children(self):
        nodes = parse_html("a<br>b")
        assert nodes == [TextRun("a"), Element("br"), TextRun("b")]

    def test_unclosed_elements_are_closed_at_the_end(self):
        assert parse_html("<i>open") == [Element("i", (), (TextRun("open"),))]

    def test_stray_end_tag_is_ignored(self):
        assert parse_html("plain</span> text") == [TextRun("plain text")]

    def test_whitespace_only_runs_are_dropped(self):
        nodes = parse_html("<p>a</p>\n<p>b</p>\n")
        assert [n.tag for n in nodes] == ["p", "p"]

    def test_character_references_are_decoded(self):
        assert parse_html("a &amp; b &lt;c&gt;") == [TextRun("a & b <c>")]

    def test_plain_text_of_tree(self):
        assert plain_text(parse_html("<b>He</b>llo <i>there</i>")) == "Hello there"


class TestSanitizeHtml:
    """Default sanitizer."""

    def test_script_is_removed_with_content(self):
        assert sanitize_html("a<script>alert(1)</script>b") == "ab"

    def test_event_handlers_are_stripped(self):
        assert sanitize_html('<b onclick="x()" title="t">x</b>') == '<b title="t">x</b>'

    def test_javascript_urls_are_stripped(self):
        assert sanitize_html('<a href=" javascript:alert(1)">x</a>') == "<a>x</a>"

    def test_safe_urls_are_kept(self):
        assert sanitize_html('<a href="https://example.com/?a=1&amp;b=2">x</a>') == \
            '<a href="https://example.com/?a=1&amp;b=2">x</a>'

    def test_text_stays_escaped(self):
        assert sanitize_html("1 &lt; 2") == "1 &lt; 2"

    def test_void_tags_are_not_closed(self):
        assert sanitize_html("a<br/>b<img src='x.png'>") == 'a<br>b<img src="x.png">'

    @pytest.mark.parametrize("markup", [
        '<svg><a><animate attributeName="href" values="javascript:alert(1)"/><text>x</text></a></svg>',
        '<svg><set attributeName="onload" to="alert(1)"/></svg>x',
        '<math><maction actiontype="statusline" xlink:href="javascript:alert(1)">x</maction></math>',
        '<a href="&#106;avascript:alert(1)">x</a>',
        '<a href="jav&#x09;ascript:alert(1)">x</a>',
        '<a href="&#x6A;&#x61;&#x76;&#x61;&#x73;&#x63;&#x72;&#x69;&#x70;&#x74;:alert(1)">x</a>',
        '<span style="background:url(javascript:alert(1))">x</span>',
    ])
    def test_scripting_vectors_are_removed(self, markup):
        cleaned = sanitize_html(markup)
        assert "javascript" not in cleaned
        assert "alert" not in cleaned
        assert "x" in cleaned

    def test_foreign_content_is_unwrapped(self):
        cleaned = sanitize_html('<svg><a><animate attributeName="href" values="javascript:alert(1)"/><text>x</text></a></svg>')
        assert "<svg" not in cleaned
        assert "<animate" not in cleaned

    def test_srcdoc_frames_are_removed_with_content(self):
        assert sanitize_html('<iframe srcdoc="&lt;script&gt;alert(1)&lt;/script&gt;">x</iframe>ok') == "ok"

    @pytest.mark.parametrize("markup", [
        '<a href="data:text/html;base64,PHNjcmlwdD5hbGVydCgxKTwvc2NyaXB0Pg==">x</a>',
        '<img src="data:image/svg+xml;base64,PHN2ZyBvbmxvYWQ9YWxlcnQoMSk+">',
        '<a href=" DATA:text/html,x">x</a>',
    ])
    def test_data_urls_are_removed(self, markup):
        assert "data:" not in sanitize_html(markup).lower()

    def test_relative_urls_are_kept(self):
        assert sanitize_html('<a href="/docs/intro">x</a>') == '<a href="/docs/intro">x</a>'

    def test_unknown_tags_are_unwrapped(self):
        assert sanitize_html('<form action="/x"><input value="v">y</form>') == "y"


class TestMarkdown:
    """markdown-it rendering."""

    def test_inline_rendering_has_no_paragraph(self):
        assert render_markdown("**bold**", inline=True) == "<strong>bold</strong>"

    def test_block_rendering_wraps_paragraph(self):
        assert render_markdown("_hi_").strip() == "<p><em>hi</em></p>"


class TestBuildContent:
    """Source text to content nodes according to configuration."""

    @pytest.mark.asyncio
    async def test_plain_text_mode(self):
        config = TypeMorphConfig(parse_html=False)
        assert await build_content("<b>x</b>", config) == [TextRun("<b>x</b>")]

    @pytest.mark.asyncio
    async def test_empty_plain_text(self):
        assert await build_content("", TypeMorphConfig(parse_html=False)) == []

    @pytest.mark.asyncio
    async def test_html_is_sanitized_by_default(self):
        nodes = await build_content("<b>x</b><script>y</script>", TypeMorphConfig())
        assert nodes == [Element("b", (), (TextRun("x"),))]

    @pytest.mark.asyncio
    async def test_custom_sanitizer_is_used(self):
        sanitize = Mock(side_effect=lambda markup: markup.upper())
        nodes = await build_content("<b>x</b>", TypeMorphConfig(html_sanitize=sanitize))
        sanitize.assert_called_once_with("<b>x</b>")
        assert nodes == [Element("b", (), (TextRun("X"),))]

    @pytest.mark.asyncio
    async def test_trusted_html_skips_sanitizer(self):
        sanitize = Mock(return_value="")
        nodes = await build_content("<b>x</b>", TypeMorphConfig(html_sanitize=sanitize, trusted_html=True))
        sanitize.assert_not_called()
        assert plain_text(nodes) == "x"

    @pytest.mark.asyncio
    async def test_markdown_implies_html(self):
        config = TypeMorphConfig(parse_markdown=True, markdown_inline=True, parse_html=False)
        assert await build_content("**a**", config) == [Element("strong", (), (TextRun("a"),))]

    @pytest.mark.asyncio
    async def test_async_markdown_parser(self):
        async def parse(text, inline):
            return f"<i>{text}</i>" if inline else f"<p>{text}</p>"

        config = TypeMorphConfig(parse_markdown=True, markdown_parse=parse)
        assert await build_content("z", config) == [Element("p", (), (TextRun("z"),))]
