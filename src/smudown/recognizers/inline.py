"""Inline recognizers: emphasis and code spans, links, autolinks, raw HTML, escapes.

Inline recognizers never start a block; every match reports INLINE
context. Text that no recognizer claims is written one character at a
time by the dispatch loop.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, ClassVar

from smudown.escape import char_refs, html_escape
from smudown.rules import BLANKS, REPLACEMENTS, SURROUND_RULES
from smudown.session import Match

if TYPE_CHECKING:
    from smudown.session import RenderSession

_PARENS = re.compile(r"[()]")
_QUOTES = re.compile(r"[\"']")

# "mailto:" with most letters as hex character references
_MAILTO = "&#x6D;&#x61;i&#x6C;&#x74;&#x6F;:"


class Surround:
    """Code spans, emphasis and strong emphasis.

    Code span content is written escaped so markup inside backticks is
    never interpreted; emphasis content is rendered inline.
    """

    name: ClassVar[str] = "surround"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        for rule in SURROUND_RULES:
            delimiter = rule.delimiter
            width = len(delimiter)
            if end - pos < 2 * width or not text.startswith(delimiter, pos, end):
                continue

            start = pos + width
            close = self._find_close(text, delimiter, start, end)
            if close == -1:
                continue

            stop = close
            # A single space just inside both delimiters is dropped.
            if stop - start > 1 and text[start] == " " and text[stop - 1] == " ":
                start += 1
                stop -= 1
            session.write(rule.before)
            session.render_span(text, start, stop, rule.recurse)
            session.write(rule.after)
            return Match(close + width - pos)
        return None

    @staticmethod
    def _find_close(text: str, delimiter: str, start: int, end: int) -> int:
        """Nearest ``delimiter`` after ``start`` not preceded by a backslash."""
        p = start
        while p < end:
            stop = text.find(delimiter, p, end)
            if stop == -1:
                return -1
            if stop > start and text[stop - 1] == "\\":
                p = stop + 1
                continue
            return stop
        return -1


class LinkOrImage:
    """``[text](url "title")`` and ``![alt](src 'title')``.

    Parentheses in the destination must balance. A destination wrapped in
    angle brackets loses the brackets.
    """

    name: ClassVar[str] = "link"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if text[pos] == "[":
            image = False
        elif text.startswith("![", pos, end):
            image = True
        else:
            return None

        desc = pos + (2 if image else 1)
        desc_end = text.find("](", desc, end)
        if desc_end == -1:
            return None
        link = desc_end + 2

        close = self._find_close_paren(text, link, end)
        if close == -1:
            return None

        link_end = close
        title = self._find_title(text, link, close)
        if title is not None:
            link_end = title[0] - 1
            while link_end > link and text[link_end - 1] in BLANKS:
                link_end -= 1

        if link_end - link >= 2 and text[link] == "<" and text[link_end - 1] == ">":
            link += 1
            link_end -= 1

        href = html_escape(text[link:link_end])
        title_attr = html_escape(text[title[0] : title[1]]) if title is not None else None
        if image:
            session.write(f'<img src="{href}" alt="{html_escape(text[desc:desc_end])}" ')
            if title_attr is not None:
                session.write(f'title="{title_attr}" ')
            session.write("/>")
        else:
            session.write(f'<a href="{href}"')
            if title_attr is not None:
                session.write(f' title="{title_attr}"')
            session.write(">")
            session.process(text, desc, desc_end, False)
            session.write("</a>")
        return Match(close + 1 - pos)

    @staticmethod
    def _find_close_paren(text: str, start: int, end: int) -> int:
        """Index of the parenthesis closing the destination, -1 if unbalanced."""
        depth = 1
        p = start
        while True:
            found = _PARENS.search(text, p, end)
            if found is None:
                return -1
            p = found.start()
            depth += 1 if text[p] == "(" else -1
            if depth == 0:
                return p
            p += 1

    @staticmethod
    def _find_title(text: str, link: int, close: int) -> tuple[int, int] | None:
        """Bounds of a quoted title inside the destination.

        The title opens at the first quote and must end, ignoring trailing
        blanks, with the same quote character right before ``)``.
        """
        found = _QUOTES.search(text, link, close)
        if found is None:
            return None
        quote = found.group()
        title_start = found.start() + 1
        title_end = close - 1
        while title_end > link and text[title_end] in BLANKS:
            title_end -= 1
        if title_end < title_start or text[title_end] != quote:
            return None
        return title_start, title_end


class Autolink:
    """``<https://example.com>`` and ``<user@example.com>``.

    Email addresses are written entirely as character references.
    """

    name: ClassVar[str] = "autolink"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if text[pos] != "<":
            return None

        url = False
        email = False
        for p in range(pos + 1, end):
            char = text[p]
            if char in " \t\n":
                return None
            if char in "#:":
                url = True
            elif char == "@":
                email = email or not url
            elif char == ">":
                if not (url or email):
                    return None
                target = text[pos + 1 : p]
                if email and not url:
                    obfuscated = char_refs(target)
                    session.write(f'<a href="{_MAILTO}{obfuscated}">{obfuscated}</a>')
                else:
                    escaped = html_escape(target)
                    session.write(f'<a href="{escaped}">{escaped}</a>')
                return Match(p - pos + 1)
        return None


def _is_tag_start(char: str) -> bool:
    return char.isalpha() or char == "_"


class RawHtml:
    """Inline and block HTML passed through unescaped.

    ``<tag ...>...</tag>`` is copied whole when the closing tag exists,
    otherwise just the opening tag.
    """

    name: ClassVar[str] = "html"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        if session.config.disable_html or pos + 2 >= end:
            return None
        if text[pos] != "<" or not _is_tag_start(text[pos + 1]):
            return None

        p = pos + 1
        while p < end and text[p].isalnum():
            p += 1
        tag = text[pos + 1 : p]
        if not tag:
            return None

        closing = f"</{tag}>"
        found = text.find(closing, p, end)
        if found != -1:
            stop = found + len(closing)
        else:
            found = text.find(">", p, end)
            if found == -1:
                return None
            stop = found + 1
        session.write(text[pos:stop])
        return Match(stop - pos)


class Replacement:
    """Backslash escapes, bare ``<``, ``>``, ``&`` and hard line breaks."""

    name: ClassVar[str] = "replacement"
    __slots__ = ()

    def match(
        self, session: RenderSession, text: str, pos: int, end: int, new_block: bool
    ) -> Match | None:
        for literal, replacement in REPLACEMENTS:
            if text.startswith(literal, pos, end):
                session.write(replacement)
                return Match(len(literal))
        return None
