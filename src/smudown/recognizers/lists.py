"""List recognizer.

Items are collected line by line into a per-item buffer with the item
indentation removed, then each buffer is rendered recursively. A list is
loose when a blank line separates its items; loose items render as block
content (paragraphs), tight items as inline content.

Example:
    - first
    - second
      continued

    3. ordered lists keep their start number
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from smudown.rules import BLANKS, DIGITS, ORDERED_DELIMITERS, UNORDERED_MARKERS
from smudown.session import Context, Match

if TYPE_CHECKING:
    from smudown.session import RenderSession


class ListBlock:
    """Ordered (``1.``/``1)``) and unordered (``-``, ``*``, ``+``) lists."""

    name: ClassVar[str] = "list"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if new_block:
            p = pos
        elif text[pos] == "\n":
            p = pos + 1
        else:
            return None
        if p >= end:
            return None

        line_start = p
        marker = ""
        start_number = "1"
        if text[p] in UNORDERED_MARKERS:
            marker = text[p]
        else:
            while p < end and text[p] in DIGITS:
                p += 1
            if p == line_start or p >= end or text[p] not in ORDERED_DELIMITERS:
                return None
            # Digits are kept as text so any length renders unchanged.
            start_number = text[line_start:p].lstrip("0") or "0"
        p += 1
        if p >= end or text[p] not in BLANKS:
            return None

        session.open_block(not new_block)
        p += 1
        while p < end and text[p] in BLANKS:
            p += 1
        indent = p - line_start

        if marker:
            session.write("<ul>\n")
        elif start_number == "1":
            session.write("<ol>\n")
        else:
            session.write(f'<ol start="{start_number}">\n')

        p = self._render_items(session, text, p, end, marker, indent)

        session.write("</ul>\n" if marker else "</ol>\n")

        # Step back over the trailing newlines so the next block sees them.
        p -= 2
        while p > pos and text[p] == "\n":
            p -= 1
        return Match(p - pos + 1, Context.BLOCK)

    def _render_items(
        self,
        session: RenderSession,
        text: str,
        p: int,
        end: int,
        marker: str,
        indent: int,
    ) -> int:
        """Render every item of the list; return the position after the last one."""
        blank_lines = 0
        more = True
        while p < end and more:
            item: list[str] = []
            while p < end and more:
                if text[p] == "\n":
                    if p + 1 == end:
                        break

                    q = p + 1
                    while q < end and text[q] in BLANKS:
                        q += 1
                    if q < end and text[q] == "\n":
                        # Blank line: the item ends unless the next line is indented
                        # to the item or starts a sibling.
                        item.append("\n")
                        more = False
                        blank_lines += 1
                        p = q

                    q = p + 1
                    width = self._marker_width(text, q, end, marker, indent)
                    if width is None:
                        break
                    if q + indent < end:
                        while width < indent and q + width < end and text[q + width] in BLANKS:
                            width += 1

                    if width == indent:
                        item.append("\n")
                        p += indent
                        more = True
                        if q < end and text[q] in BLANKS:
                            # Continuation line of the current item.
                            p += 1
                        else:
                            # Sibling item: p sits just before its content.
                            break
                    elif width < indent:
                        more = False

                if p < end:
                    item.append(text[p])
                p += 1

            buffer = "".join(item)
            loose = blank_lines > 1 or (blank_lines == 1 and more)
            session.write("<li>")
            session.process(buffer, 0, len(buffer), loose)
            session.write("</li>\n")
            p += 1
        return p

    @staticmethod
    def _marker_width(text: str, q: int, end: int, marker: str, indent: int) -> int | None:
        """Width of a sibling marker at ``q``: 0 if none, None at end of input."""
        if marker:
            if q < end and text[q] == marker:
                return 1
        width = 0
        while q + width < end and text[q + width] in DIGITS and width < indent:
            width += 1
        if q + width >= end:
            return None
        if width and text[q + width] in ORDERED_DELIMITERS:
            return width + 1
        return 0
