"""Block recognizers: underline headings, comments, fences, prefixed lines, paragraphs.

All of these except comments only fire at the start of a block (or, for
prefixed lines, right after a newline inside running text) and report a
BLOCK context so the next position starts a fresh block.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from smudown.escape import html_escape
from smudown.rules import (
    CODE_FENCE,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    LINE_PREFIX_RULES,
    UNDERLINE_RULES,
)
from smudown.session import Context, Match
from smudown.utils.logger import get_logger

if TYPE_CHECKING:
    from smudown.session import RenderSession

logger = get_logger(__name__)

# A paragraph runs until a blank line or a line opening a code fence.
_PARAGRAPH_END = re.compile(r"\n\n|\n```")


class UnderlineHeading:
    """``Title`` over a line of ``===`` (h1) or ``---`` (h2).

    Checked before every other recognizer because it has to look past the
    current line before any line-based rule commits to it.
    """

    name: ClassVar[str] = "underline_heading"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if not new_block:
            return None
        eol = text.find("\n", pos, end)
        if eol <= pos or eol + 1 >= end:
            return None

        underline = eol + 1
        for rule in UNDERLINE_RULES:
            run = underline
            while run < end and text[run] == rule.char:
                run += 1
            if run - underline < 3 or (run < end and text[run] != "\n"):
                continue
            session.write(rule.before)
            session.render_span(text, pos, eol, rule.recurse)
            session.write(rule.after)
            return Match(run - pos, Context.BLOCK)
        return None


class Comment:
    """``<!-- ... -->`` passed through verbatim."""

    name: ClassVar[str] = "comment"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if session.config.disable_html or not text.startswith(COMMENT_OPEN, pos, end):
            return None
        close = text.find(COMMENT_CLOSE, pos, end)
        if close == -1:
            return None
        stop = close + len(COMMENT_CLOSE)
        session.write(text[pos:stop])
        session.write("\n")
        return Match(stop - pos, Context.BLOCK if new_block else Context.INLINE)


class CodeFence:
    """Fenced code block.

    The body is written escaped, never parsed. A fence preceded by a
    backslash does not close the block, and a block with no closing fence
    runs to the end of the input.
    """

    name: ClassVar[str] = "code_fence"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if not new_block or not text.startswith(CODE_FENCE, pos, end):
            return None

        info_start = pos + len(CODE_FENCE)
        eol = text.find("\n", info_start, end)
        if eol == -1:
            eol = end
        language = text[info_start:eol].strip()
        body = min(eol + 1, end)

        search = body
        while True:
            close = text.find(CODE_FENCE, search, end)
            if close == -1 or text[close - 1] != "\\":
                break
            search = close + 1

        if close == -1:
            logger.debug("Unterminated code fence at offset %d runs to end of input", pos)
            stop = end
            consumed = end - pos
        else:
            stop = close
            consumed = close + len(CODE_FENCE) - pos

        code = text[body:stop]
        if language and session.config.highlight and self._highlight(session, code, language):
            return Match(consumed, Context.BLOCK)

        if language:
            session.write(f'<pre><code class="language-{html_escape(language)}">')
        else:
            session.write("<pre><code>")
        session.escape(code)
        session.write("</code></pre>\n")
        return Match(consumed, Context.BLOCK)

    @staticmethod
    def _highlight(session: RenderSession, code: str, language: str) -> bool:
        """Write highlighted code; False if no highlighter could handle it."""
        try:
            from smudown.highlighting import highlight

            highlighted = highlight(code, language)
        except Exception:
            logger.debug("Syntax highlighting failed for language %r", language, exc_info=True)
            return False
        if highlighted is None:
            return False
        session.write(highlighted)
        session.write("\n")
        return True


class LinePrefix:
    """Indented code, blockquotes, ``#`` headings and horizontal rules.

    Consecutive lines carrying the same prefix are collected with the
    prefix stripped, then rendered as one block.
    """

    name: ClassVar[str] = "line_prefix"
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
        lead = p - pos

        for rule in LINE_PREFIX_RULES:
            prefix = rule.prefix
            width = len(prefix)
            if not text.startswith(prefix, p, end):
                continue
            if not rule.single_line and p + width >= end:
                continue

            session.open_block(lead > 0)
            session.write(rule.before)
            if rule.single_line:
                session.write("\n")
                return Match(width - 1 + lead, Context.INLINE)

            lines: list[str] = []
            while text.startswith(prefix, p, end) and p + width < end:
                p += width
                # Blockquotes swallow one optional space after ">"
                if prefix == ">" and text[p] == " ":
                    p += 1
                eol = text.find("\n", p, end)
                stop = end if eol == -1 else eol + 1
                lines.append(text[p:stop])
                p = stop

            buffer = "".join(lines).rstrip("\n")
            session.render_span(buffer, 0, len(buffer), rule.recurse)
            session.write(rule.after)
            session.write("\n")
            return Match(p - pos, Context.BLOCK)
        return None


class Paragraph:
    """Any other text at the start of a block."""

    name: ClassVar[str] = "paragraph"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if not new_block:
            return None
        found = _PARAGRAPH_END.search(text, pos + 1, end)
        stop = found.start() if found else end
        if text[pos:stop].isspace():
            return None

        session.write("<p>")
        session.in_paragraph = True
        session.process(text, pos, stop, False)
        session.end_paragraph()
        return Match(stop - pos, Context.BLOCK)
