"""The grammar: recognizers in the order the dispatch loop tries them.

Order is precedence. Underline headings come first because they must look
at the line after the current one before any line-based rule claims the
current line; character replacement comes last as the most generic rule.

Usage:
    >>> from smudown.recognizers import DEFAULT_RECOGNIZERS
    >>> [r.name for r in DEFAULT_RECOGNIZERS][:3]
    ['underline_heading', 'comment', 'code_fence']

"""

from smudown.recognizers.blocks import CodeFence, Comment, LinePrefix, Paragraph, UnderlineHeading
from smudown.recognizers.inline import Autolink, LinkOrImage, RawHtml, Replacement, Surround
from smudown.recognizers.lists import ListBlock
from smudown.recognizers.protocol import Recognizer
from smudown.recognizers.table import TableRow, parse_alignment

DEFAULT_RECOGNIZERS: tuple[Recognizer, ...] = (
    UnderlineHeading(),
    Comment(),
    CodeFence(),
    LinePrefix(),
    ListBlock(),
    TableRow(),
    Paragraph(),
    Surround(),
    LinkOrImage(),
    Autolink(),
    RawHtml(),
    Replacement(),
)


def get_recognizer(name: str) -> Recognizer:
    """Look up a default recognizer by name.

    Raises:
        KeyError: If no default recognizer has that name
    """
    for recognizer in DEFAULT_RECOGNIZERS:
        if recognizer.name == name:
            return recognizer
    raise KeyError(f"Unknown recognizer: {name!r}")


__all__ = [
    "DEFAULT_RECOGNIZERS",
    "Autolink",
    "CodeFence",
    "Comment",
    "LinePrefix",
    "LinkOrImage",
    "ListBlock",
    "Paragraph",
    "RawHtml",
    "Recognizer",
    "Replacement",
    "Surround",
    "TableRow",
    "UnderlineHeading",
    "get_recognizer",
    "parse_alignment",
]
