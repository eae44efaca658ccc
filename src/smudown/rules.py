"""Delimiter tables for the block and inline recognizers.

Rule order encodes precedence: within each table the first matching rule
wins. All tables are module-level tuples of frozen dataclasses, built once
at import and never mutated.
"""

from dataclasses import dataclass
from enum import Enum


class Recurse(Enum):
    """How a recognizer renders the text it captured."""

    RAW = "raw"  # html-escaped verbatim
    INLINE = "inline"  # dispatch loop, inline context
    BLOCK = "block"  # dispatch loop, block context


@dataclass(frozen=True, slots=True)
class LinePrefixRule:
    """A block introduced by a fixed prefix on every line.

    A prefix ending in a newline is a single-line rule (horizontal rule):
    only the opening tag is written.
    """

    prefix: str
    recurse: Recurse
    before: str
    after: str

    @property
    def single_line(self) -> bool:
        return self.prefix.endswith("\n")


@dataclass(frozen=True, slots=True)
class UnderlineRule:
    """A heading whose text line is underlined by a run of ``char``."""

    char: str
    recurse: Recurse
    before: str
    after: str


@dataclass(frozen=True, slots=True)
class SurroundRule:
    """An inline span delimited by the same string on both sides."""

    delimiter: str
    recurse: Recurse
    before: str
    after: str


LINE_PREFIX_RULES: tuple[LinePrefixRule, ...] = (
    LinePrefixRule("    ", Recurse.RAW, "<pre><code>", "\n</code></pre>"),
    LinePrefixRule("\t", Recurse.RAW, "<pre><code>", "\n</code></pre>"),
    LinePrefixRule(">", Recurse.BLOCK, "<blockquote>", "</blockquote>"),
    LinePrefixRule("###### ", Recurse.INLINE, "<h6>", "</h6>"),
    LinePrefixRule("##### ", Recurse.INLINE, "<h5>", "</h5>"),
    LinePrefixRule("#### ", Recurse.INLINE, "<h4>", "</h4>"),
    LinePrefixRule("### ", Recurse.INLINE, "<h3>", "</h3>"),
    LinePrefixRule("## ", Recurse.INLINE, "<h2>", "</h2>"),
    LinePrefixRule("# ", Recurse.INLINE, "<h1>", "</h1>"),
    LinePrefixRule("- - -\n", Recurse.INLINE, "<hr />", ""),
    LinePrefixRule("---\n", Recurse.INLINE, "<hr />", ""),
)

UNDERLINE_RULES: tuple[UnderlineRule, ...] = (
    UnderlineRule("=", Recurse.INLINE, "<h1>", "</h1>\n"),
    UnderlineRule("-", Recurse.INLINE, "<h2>", "</h2>\n"),
)

# Longest delimiter first so ``**`` is never read as two ``*``.
SURROUND_RULES: tuple[SurroundRule, ...] = (
    SurroundRule("```", Recurse.RAW, "<code>", "</code>"),
    SurroundRule("``", Recurse.RAW, "<code>", "</code>"),
    SurroundRule("`", Recurse.RAW, "<code>", "</code>"),
    SurroundRule("___", Recurse.INLINE, "<strong><em>", "</em></strong>"),
    SurroundRule("***", Recurse.INLINE, "<strong><em>", "</em></strong>"),
    SurroundRule("__", Recurse.INLINE, "<strong>", "</strong>"),
    SurroundRule("**", Recurse.INLINE, "<strong>", "</strong>"),
    SurroundRule("_", Recurse.INLINE, "<em>", "</em>"),
    SurroundRule("*", Recurse.INLINE, "<em>", "</em>"),
)

# (literal, replacement). ``&amp;`` precedes ``&`` so an entity that is
# already escaped is not escaped twice.
REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("\\\\", "\\"),
    ("\\`", "`"),
    ("\\*", "*"),
    ("\\_", "_"),
    ("\\{", "{"),
    ("\\}", "}"),
    ("\\[", "["),
    ("\\]", "]"),
    ("\\(", "("),
    ("\\)", ")"),
    ("\\#", "#"),
    ("\\+", "+"),
    ("\\-", "-"),
    ("\\.", "."),
    ("\\!", "!"),
    ('\\"', "&quot;"),
    ("\\$", "$"),
    ("\\%", "%"),
    ("\\&", "&amp;"),
    ("\\'", "'"),
    ("\\,", ","),
    ("\\/", "/"),
    ("\\:", ":"),
    ("\\;", ";"),
    ("\\<", "&lt;"),
    ("\\>", "&gt;"),
    ("\\=", "="),
    ("\\?", "?"),
    ("\\@", "@"),
    ("\\^", "^"),
    ("\\|", "|"),
    ("\\~", "~"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("&amp;", "&amp;"),
    ("&", "&amp;"),
    ("  \n", "<br />\n"),
)

# Indexed by the 2-bit column alignment: none, left, right, center.
ALIGN_STYLES: tuple[str, ...] = (
    "",
    ' style="text-align: left"',
    ' style="text-align: right"',
    ' style="text-align: center"',
)

ALIGN_LEFT = 1
ALIGN_RIGHT = 2

CODE_FENCE = "```"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

UNORDERED_MARKERS: frozenset[str] = frozenset("-*+")
ORDERED_DELIMITERS: frozenset[str] = frozenset(".)")
DIGITS: frozenset[str] = frozenset("0123456789")

# Spaces and tabs only; newlines are significant everywhere.
BLANKS: frozenset[str] = frozenset(" \t")
