"""Pipe table recognizer.

Tables are rendered incrementally: every ``|`` is a separate match that
writes only cell and row tags. The text between pipes goes through the
ordinary inline path of the dispatch loop, so cells support emphasis,
code spans and links without any table-specific parsing. The state that
ties those matches together lives on the session (``session.table``).

Example:
    | Name | Size |
    |------|-----:|
    | a    |    1 |
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from smudown.rules import ALIGN_LEFT, ALIGN_RIGHT, ALIGN_STYLES, BLANKS
from smudown.session import Context, Match, RowKind, TablePhase

if TYPE_CHECKING:
    from smudown.session import RenderSession, TableState


def parse_alignment(line: str) -> int:
    """Pack the column alignments of a delimiter row, two bits per column.

        >>> parse_alignment("|:--|--:|:-:|---|")
        57
    """
    line = line.strip()
    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|"):
        line = line[:-1]

    alignment = 0
    for column, segment in enumerate(line.split("|")):
        segment = segment.strip()
        if segment.startswith(":"):
            alignment |= ALIGN_LEFT << (column * 2)
        if segment.endswith(":"):
            alignment |= ALIGN_RIGHT << (column * 2)
    return alignment


class TableRow:
    """Lines starting with ``|``."""

    name: ClassVar[str] = "table"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if text[pos] != "|":
            return None
        table = session.table

        if table.phase is TablePhase.ALIGNMENT:
            # Already parsed when the table opened.
            table.phase = TablePhase.BODY
            eol = text.find("\n", pos, end)
            return Match((end if eol == -1 else eol + 1) - pos)

        if table.row is not RowKind.NONE and (pos + 1 >= end or text[pos + 1] == "\n"):
            return self._close_row(session, table, text, pos, end)

        if table.phase is TablePhase.OUTSIDE:
            if not (new_block or pos == 0 or text[pos - 1] == "\n"):
                return None
            self._open_table(session, table, text, pos, end)

        if table.row is RowKind.NONE:
            table.row = RowKind.BODY
            table.cell = 0
            session.write("<tr>")

        tag = table.cell_tag
        if table.cell:
            session.write(f"</{tag}>")
        session.write(f"<{tag}{ALIGN_STYLES[table.column_alignment(table.cell)]}>")
        table.cell += 1

        p = pos + 1
        while p < end and text[p] in BLANKS:
            p += 1
        return Match(p - pos)

    @staticmethod
    def _open_table(
        session: RenderSession, table: TableState, text: str, pos: int, end: int
    ) -> None:
        table.phase = TablePhase.HEADER
        table.row = RowKind.HEADER
        table.cell = 0
        table.alignment = 0
        table.depth = session.depth

        eol = text.find("\n", pos, end)
        if eol != -1:
            next_eol = text.find("\n", eol + 1, end)
            table.alignment = parse_alignment(text[eol + 1 : end if next_eol == -1 else next_eol])
        session.write("<table>\n<tr>")

    @staticmethod
    def _close_row(
        session: RenderSession, table: TableState, text: str, pos: int, end: int
    ) -> Match:
        session.write(f"</{table.cell_tag}></tr>")
        if table.row is RowKind.HEADER:
            table.phase = TablePhase.ALIGNMENT
        table.row = RowKind.NONE

        # The table ends with the first following line that is not a row.
        if pos + 2 >= end or text[pos + 2] != "|":
            table.reset()
            session.write("\n</table>\n")
            # Text after the table starts a new block unless a paragraph is still open.
            return Match(1, Context.INLINE if session.in_paragraph else Context.BLOCK)
        return Match(1)
