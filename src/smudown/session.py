"""Render session: the dispatch loop and all per-document state.

A session renders exactly one document. Recognizers are tried in fixed
priority order at every position; the first match writes its own HTML to
the sink (recursing into ``process`` for nested content) and reports how
much input it consumed. There is no intermediate tree: output is produced
in final document order as the input is read.

State that outlives a single recognizer call (the open paragraph flag and
the table state) belongs to the session, so independent renders never see
each other's leftovers.

Thread Safety:
A session is used by one thread for one document. Create a new session
per render; share RenderConfig and the recognizer tuple freely.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import TYPE_CHECKING

from smudown.config import RenderConfig, get_render_config
from smudown.escape import html_escape
from smudown.rules import Recurse
from smudown.utils.logger import get_logger

if TYPE_CHECKING:
    from smudown.recognizers import Recognizer
    from smudown.sink import OutputSink

logger = get_logger(__name__)


class Context(Enum):
    """Context for the next dispatch iteration."""

    BLOCK = "block"  # next position starts a new block
    INLINE = "inline"  # next position continues inline text


@dataclass(frozen=True, slots=True)
class Match:
    """Result of a successful recognizer call."""

    consumed: int
    context: Context = Context.INLINE


class TablePhase(IntEnum):
    OUTSIDE = 0
    HEADER = 1
    ALIGNMENT = 2  # delimiter row below the header still to be skipped
    BODY = 3


class RowKind(IntEnum):
    NONE = 0
    HEADER = 1
    BODY = 2


@dataclass(slots=True)
class TableState:
    """Table rendering state shared by consecutive pipe recognizer calls.

    ``alignment`` packs two bits per column: bit 0 left, bit 1 right,
    both set for center.
    """

    phase: TablePhase = TablePhase.OUTSIDE
    row: RowKind = RowKind.NONE
    cell: int = 0
    alignment: int = 0
    depth: int = 0  # nesting depth of the process call that opened the table

    def reset(self) -> None:
        self.phase = TablePhase.OUTSIDE
        self.row = RowKind.NONE
        self.cell = 0
        self.alignment = 0
        self.depth = 0

    def column_alignment(self, column: int) -> int:
        return (self.alignment >> (column * 2)) & 3

    @property
    def cell_tag(self) -> str:
        return "th" if self.row is RowKind.HEADER else "td"


class RenderSession:
    """Render one document into a sink.

    Usage:
        >>> from smudown.sink import StringBuilder
        >>> sb = StringBuilder()
        >>> RenderSession(sb).render("# Hello")
        >>> sb.build()
        '<h1>Hello</h1>\\n'

    """

    __slots__ = (
        "config",
        "sink",
        "table",
        "in_paragraph",
        "_recognizers",
        "_depth",
    )

    def __init__(
        self,
        sink: OutputSink,
        config: RenderConfig | None = None,
        recognizers: Sequence[Recognizer] | None = None,
    ) -> None:
        """Initialize session.

        Args:
            sink: Destination for the rendered HTML
            config: Render configuration (active context config if None)
            recognizers: Ordered recognizers (defaults if None)
        """
        if recognizers is None:
            from smudown.recognizers import DEFAULT_RECOGNIZERS

            recognizers = DEFAULT_RECOGNIZERS
        self.config = config if config is not None else get_render_config()
        self.sink = sink
        self.table = TableState()
        self.in_paragraph = False
        self._recognizers = tuple(recognizers)
        self._depth = 0

    @property
    def depth(self) -> int:
        """Number of nested process calls currently running."""
        return self._depth

    def write(self, s: str) -> None:
        self.sink.append(s)

    def escape(self, s: str) -> None:
        """Write ``s`` html-escaped."""
        self.sink.append(html_escape(s))

    def render_span(self, text: str, start: int, stop: int, recurse: Recurse) -> None:
        """Render captured text raw-escaped or through the dispatch loop."""
        if recurse is Recurse.RAW:
            self.escape(text[start:stop])
        else:
            self.process(text, start, stop, recurse is Recurse.BLOCK)

    def end_paragraph(self) -> None:
        """Close a dangling paragraph before a block element is written."""
        if self.in_paragraph:
            self.sink.append("</p>\n")
            self.in_paragraph = False

    def open_block(self, after_newline: bool) -> None:
        """Prepare to write a block element found mid-text.

        Closes an open paragraph; otherwise keeps the newline that was
        consumed in front of the block.
        """
        if self.in_paragraph:
            self.end_paragraph()
        elif after_newline:
            self.sink.append("\n")

    def render(self, text: str) -> None:
        """Render a whole document starting in block context."""
        self.process(text, 0, len(text), True)
        self.finish()

    def finish(self) -> None:
        """Close constructs still open at end of input."""
        self.end_paragraph()
        if self.table.phase is not TablePhase.OUTSIDE:
            logger.debug("Table still open at end of input, closing it")
            self.close_table()

    def close_table(self) -> None:
        """Close the open row, if any, and the table."""
        table = self.table
        if table.row is not RowKind.NONE:
            self.sink.append(f"</{table.cell_tag}></tr>")
        self.sink.append("\n</table>\n")
        table.reset()

    def _owns_open_table(self) -> bool:
        table = self.table
        return table.phase is not TablePhase.OUTSIDE and table.depth == self._depth

    def process(self, text: str, start: int, end: int, new_block: bool) -> None:
        """Render ``text[start:end]``, the dispatch loop.

        Args:
            text: Buffer holding the range (never copied or mutated)
            start: First index of the range
            end: Index one past the range
            new_block: True if ``start`` begins a new block
        """
        if self._depth >= self.config.max_nesting:
            logger.warning(
                "Nesting deeper than %d levels, emitting text verbatim",
                self.config.max_nesting,
            )
            self.escape(text[start:end])
            return

        self._depth += 1
        try:
            self._dispatch(text, start, end, new_block)
            # A table cannot outlive the range it was opened in.
            if self._owns_open_table():
                logger.debug("Table still open at end of its block, closing it")
                self.close_table()
        finally:
            self._depth -= 1

    def _dispatch(self, text: str, start: int, end: int, new_block: bool) -> None:
        recognizers = self._recognizers
        pos = start
        while pos < end:
            if new_block:
                while pos < end and text[pos] == "\n":
                    pos += 1
                if pos == end:
                    return

            match = None
            for recognizer in recognizers:
                match = recognizer.match(self, text, pos, end, new_block)
                if match is not None and match.consumed:
                    break
                match = None

            if match is not None:
                pos += match.consumed
            else:
                self.sink.append(html_escape(text[pos]))
                pos += 1

            # A single trailing newline is never written.
            if pos + 1 == end and text[pos] == "\n":
                return

            if pos + 1 < end and text[pos] == "\n" and text[pos + 1] == "\n":
                new_block = True
                if self._owns_open_table():
                    logger.debug("Blank line inside an open table row, closing the table")
                    self.close_table()
            else:
                new_block = match is not None and match.context is Context.BLOCK
