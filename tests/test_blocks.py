"""Tests for block-level constructs.

Headings, fenced and indented code, blockquotes, horizontal rules,
comments and paragraphs.
"""

import pytest

from smudown import Markdown, render_text


class TestHeadings:
    """ATX (``#``) and underlined headings."""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_atx_levels(self, level: int) -> None:
        source = "#" * level + " Title"
        assert render_text(source) == f"<h{level}>Title</h{level}>\n"

    def test_atx_inline_content(self) -> None:
        assert render_text("## A *b*") == "<h2>A <em>b</em></h2>\n"

    def test_hash_without_space_is_text(self) -> None:
        assert render_text("#tag") == "<p>#tag</p>\n"

    def test_underline_h1(self) -> None:
        assert render_text("Title\n=====\n") == "<h1>Title</h1>\n"

    def test_underline_h2(self) -> None:
        assert render_text("Sub\n---\n") == "<h2>Sub</h2>\n"

    def test_short_underline_is_not_heading(self) -> None:
        """Two characters are not enough to underline a heading."""
        assert render_text("Title\n==") == "<p>Title\n==</p>\n"


class TestCodeFence:
    """Fenced code blocks."""

    def test_fence_with_language(self) -> None:
        source = "```python\nprint(1)\n```\n"
        assert render_text(source) == (
            '<pre><code class="language-python">print(1)\n</code></pre>\n'
        )

    def test_fence_body_escaped(self) -> None:
        source = "```\n<b> & *x*\n```"
        assert render_text(source) == "<pre><code>&lt;b&gt; &amp; *x*\n</code></pre>\n"

    def test_unterminated_fence_runs_to_end(self) -> None:
        """An unclosed fence still yields a complete code block."""
        result = render_text("```\ncode <x>\n")
        assert result == "<pre><code>code &lt;x&gt;\n</code></pre>\n"
        assert result.endswith("</code></pre>\n")

    def test_escaped_fence_does_not_close(self) -> None:
        source = "```\na \\``` b\n```\n"
        assert render_text(source) == "<pre><code>a \\``` b\n</code></pre>\n"

    def test_fence_ends_paragraph(self) -> None:
        source = "a\n```\ncode\n```"
        assert render_text(source) == "<p>a</p>\n<pre><code>code\n</code></pre>\n"


class TestIndentedCode:
    """Lines indented by four spaces or a tab."""

    def test_spaces(self) -> None:
        source = "    x = 1\n    y < 2\n"
        assert render_text(source) == "<pre><code>x = 1\ny &lt; 2\n</code></pre>\n"

    def test_tab(self) -> None:
        assert render_text("\tcode\n") == "<pre><code>code\n</code></pre>\n"


class TestBlockquote:
    """Lines prefixed with ``>``."""

    def test_simple(self) -> None:
        assert render_text("> quote\n") == "<blockquote><p>quote</p>\n</blockquote>\n"

    def test_multiline(self) -> None:
        assert render_text("> a\n> b\n") == "<blockquote><p>a\nb</p>\n</blockquote>\n"

    def test_nested(self) -> None:
        assert render_text("> > deep") == (
            "<blockquote><blockquote><p>deep</p>\n</blockquote>\n</blockquote>\n"
        )

    def test_block_content(self) -> None:
        assert render_text("> # Title") == "<blockquote><h1>Title</h1>\n</blockquote>\n"


class TestHorizontalRule:
    """``---`` and ``- - -`` lines."""

    def test_dashes(self) -> None:
        assert render_text("---\n") == "<hr />\n"

    def test_spaced_dashes(self) -> None:
        assert render_text("- - -\n") == "<hr />\n"

    def test_between_paragraphs(self) -> None:
        assert render_text("a\n\n---\n\nb") == "<p>a</p>\n<hr />\n<p>b</p>\n"


class TestComment:
    """HTML comments."""

    def test_passthrough(self) -> None:
        assert render_text("<!-- hi -->") == "<!-- hi -->\n"

    def test_disabled(self) -> None:
        assert Markdown(disable_html=True)("<!-- hi -->") == "<p>&lt;!-- hi --&gt;</p>\n"

    def test_unterminated_comment_is_text(self) -> None:
        assert render_text("<!-- x") == "<p>&lt;!-- x</p>\n"


class TestParagraph:
    """Running text."""

    def test_single(self) -> None:
        assert render_text("Hello world") == "<p>Hello world</p>\n"

    def test_blank_line_separates(self) -> None:
        assert render_text("a\n\nb\n") == "<p>a</p>\n<p>b</p>\n"

    def test_soft_line_break_kept(self) -> None:
        assert render_text("a\nb") == "<p>a\nb</p>\n"

    def test_trailing_newline_not_written(self) -> None:
        assert render_text("a\n") == render_text("a")

    def test_heading_line_closes_paragraph(self) -> None:
        assert render_text("text\n# Head") == "<p>text</p>\n<h1>Head</h1>\n"
