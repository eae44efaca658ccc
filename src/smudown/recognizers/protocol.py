"""Recognizer protocol for the dispatch loop.

A recognizer is one rule of the grammar. At each position the session asks
every recognizer, in priority order, to match; the first one that returns a
Match has already written its HTML and tells the loop how far to advance.

Thread Safety:
Recognizers must be stateless. Per-document state lives on the
RenderSession passed to ``match``. One recognizer instance may serve any
number of concurrent sessions.

Example:
    >>> class Kbd:
    ...     name = "kbd"
    ...
    ...     def match(self, session, text, pos, end, new_block):
    ...         if not text.startswith("[[", pos, end):
    ...             return None
    ...         close = text.find("]]", pos + 2, end)
    ...         if close == -1:
    ...             return None
    ...         session.write("<kbd>")
    ...         session.escape(text[pos + 2 : close])
    ...         session.write("</kbd>")
    ...         return Match(close + 2 - pos)

"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from smudown.session import Match, RenderSession


@runtime_checkable
class Recognizer(Protocol):
    """Protocol for grammar rules.

    Attributes:
        name: Short identifier used in logs and tests.

    """

    name: ClassVar[str]

    def match(
        self,
        session: RenderSession,
        text: str,
        pos: int,
        end: int,
        new_block: bool,
    ) -> Match | None:
        """Try to match at ``text[pos]``.

        Args:
            session: Session receiving output and holding document state
            text: Buffer being rendered
            pos: Current position
            end: End of the range being rendered (exclusive)
            new_block: True if ``pos`` begins a new block

        Returns:
            Match with the number of characters consumed, or None. On a
            match the recognizer has already written its output.

        Contract:
            - MUST NOT write anything when returning None
            - MUST NOT read past ``end``
        """
        ...
