"""Tests for pipe tables."""

import pytest

from smudown import Markdown, RenderSession, StringBuilder, render_text
from smudown.recognizers import get_recognizer, parse_alignment
from smudown.session import TablePhase


class TestParseAlignment:
    """Delimiter row parsing."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("|---|", 0),
            ("|:--|", 1),
            ("|--:|", 2),
            ("|:-:|", 3),
            ("|---|---:|", 8),
            ("|:--|--:|:-:|---|", 57),
            ("| :-- | --: |", 9),
        ],
    )
    def test_alignment_bits(self, line: str, expected: int) -> None:
        assert parse_alignment(line) == expected


class TestTableRendering:
    """Whole tables."""

    def test_right_aligned_column(self) -> None:
        source = "| a | b |\n|---|---:|\n| 1 | 2 |\n"
        assert render_text(source) == (
            "<table>\n"
            '<tr><th>a </th><th style="text-align: right">b </th></tr>\n'
            '<tr><td>1 </td><td style="text-align: right">2 </td></tr>\n'
            "</table>\n"
        )

    def test_center_aligned_column(self) -> None:
        source = "| a |\n|:-:|\n| 1 |\n"
        assert render_text(source) == (
            "<table>\n"
            '<tr><th style="text-align: center">a </th></tr>\n'
            '<tr><td style="text-align: center">1 </td></tr>\n'
            "</table>\n"
        )

    def test_inline_markup_in_cells(self) -> None:
        source = "| *a* |\n|---|\n| `b` |\n"
        assert render_text(source) == (
            "<table>\n"
            "<tr><th><em>a</em> </th></tr>\n"
            "<tr><td><code>b</code> </td></tr>\n"
            "</table>\n"
        )

    def test_paragraph_after_table(self) -> None:
        source = "| a |\n|---|\n| 1 |\n\ntext\n"
        assert render_text(source) == (
            "<table>\n<tr><th>a </th></tr>\n<tr><td>1 </td></tr>\n</table>\n<p>text</p>\n"
        )

    def test_pipe_mid_line_is_text(self) -> None:
        assert render_text("x | y") == "<p>x | y</p>\n"

    def test_open_table_closed_at_end_of_input(self) -> None:
        assert render_text("| a") == "<table>\n<tr><th>a</th></tr>\n</table>\n"


class TestTableState:
    """Table state belongs to one render."""

    def test_state_does_not_leak_between_renders(self) -> None:
        md = Markdown()
        md("| a")
        assert md("x | y") == "<p>x | y</p>\n"

    def test_session_state_reset_after_finish(self) -> None:
        session = RenderSession(StringBuilder())
        session.render("| a")
        assert session.table.phase is TablePhase.OUTSIDE
        assert session.table.cell == 0

    def test_independent_sessions(self) -> None:
        first = RenderSession(StringBuilder())
        second = RenderSession(StringBuilder())
        get_recognizer("table").match(first, "| a", 0, 3, True)
        assert first.table.phase is TablePhase.HEADER
        assert second.table.phase is TablePhase.OUTSIDE


class TestUnterminatedRows:
    """A row without a closing pipe never leaks past its block."""

    def test_closed_before_enclosing_blockquote(self) -> None:
        result = render_text("> | a\n\nafter")
        assert result == (
            "<blockquote><table>\n<tr><th>a</th></tr>\n</table>\n</blockquote>\n"
            "<p>after</p>\n"
        )

    def test_closed_before_enclosing_list_item(self) -> None:
        result = render_text("- | a\n- b\n")
        assert result == (
            "<ul>\n<li><table>\n<tr><th>a</th></tr>\n</table>\n</li>\n<li>b</li>\n</ul>\n"
        )

    def test_closed_at_blank_line(self) -> None:
        result = render_text("| a | b\n\npara")
        assert result == "<table>\n<tr><th>a </th><th>b</th></tr>\n</table>\n<p>para</p>\n"
        assert result.index("</table>") < result.index("<p>")


class TestRaggedTables:
    """Rows whose cell count differs from the header or delimiter row."""

    def test_extra_body_cells_unaligned(self) -> None:
        source = "| a |\n|--:|\n| 1 | 2 | 3 |\n"
        assert render_text(source) == (
            "<table>\n"
            '<tr><th style="text-align: right">a </th></tr>\n'
            '<tr><td style="text-align: right">1 </td><td>2 </td><td>3 </td></tr>\n'
            "</table>\n"
        )

    def test_short_body_row(self) -> None:
        source = "| a | b |\n|---|---|\n| 1 |\n"
        assert render_text(source) == (
            "<table>\n<tr><th>a </th><th>b </th></tr>\n<tr><td>1 </td></tr>\n</table>\n"
        )

    def test_short_delimiter_row(self) -> None:
        source = "| a | b |\n|:-:|\n| 1 | 2 |\n"
        assert render_text(source) == (
            "<table>\n"
            '<tr><th style="text-align: center">a </th><th>b </th></tr>\n'
            '<tr><td style="text-align: center">1 </td><td>2 </td></tr>\n'
            "</table>\n"
        )


class TestTextAfterTable:
    def test_following_line_is_paragraph(self) -> None:
        assert render_text("| a |\n|---|\n| 1 |\ntext") == (
            "<table>\n<tr><th>a </th></tr>\n<tr><td>1 </td></tr>\n</table>\n<p>text</p>\n"
        )
