"""smudown: single-pass Markdown to HTML.

Converts a small Markdown dialect straight to HTML with a recursive
dispatch loop: no token stream, no tree, output written in document order
as the input is read.

Quick Start:
    >>> from smudown import render, render_text
    >>> render(b"# Hello")
    b'<h1>Hello</h1>\\n'
    >>> render_text("*em* and `code`")
    '<p><em>em</em> and <code>code</code></p>\\n'

    >>> # Or use the reusable Markdown class
    >>> from smudown import Markdown
    >>> md = Markdown(disable_html=True)
    >>> md("<b>shown as text</b>")
    '<p>&lt;b&gt;shown as text&lt;/b&gt;</p>\\n'

Installation:
    pip install smudown              # Core renderer (zero deps)
    pip install smudown[syntax]      # + Syntax highlighting via Rosettes
"""

from dataclasses import replace

from smudown.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from smudown.errors import RenderError, SmudownError
from smudown.escape import html_escape
from smudown.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from smudown.recognizers import DEFAULT_RECOGNIZERS, Recognizer
from smudown.session import Context, Match, RenderSession
from smudown.sink import OutputSink, StreamSink, StringBuilder

__version__ = "1.0.0"


def _config_for(disable_html: bool | None) -> RenderConfig:
    config = get_render_config()
    if disable_html is not None and disable_html != config.disable_html:
        config = replace(config, disable_html=disable_html)
    return config


def _render_string(text: str, config: RenderConfig) -> str:
    sb = StringBuilder()
    RenderSession(sb, config).render(text)
    html = sb.build()

    acc = get_render_accumulator()
    if acc is not None:
        acc.record_render(source_length=len(text), output_length=len(html))
    return html


def render(source: bytes, *, disable_html: bool | None = None) -> bytes:
    """Render a Markdown byte buffer to an HTML byte buffer.

    Input is read as UTF-8. A byte that is not valid UTF-8 is carried
    through as a literal character and comes back out unchanged.

    Args:
        source: Markdown source bytes
        disable_html: Escape raw HTML and comments instead of passing them
            through (active config if None)

    Returns:
        HTML bytes

    Raises:
        RenderError: If source is not bytes-like
    """
    if not isinstance(source, (bytes, bytearray, memoryview)):
        raise RenderError("render() expects bytes; use render_text() for str", type(source))
    text = bytes(source).decode("utf-8", "surrogateescape")
    html = _render_string(text, _config_for(disable_html))
    return html.encode("utf-8", "surrogateescape")


def render_text(source: str, *, disable_html: bool | None = None) -> str:
    """Render Markdown text to HTML text.

    Raises:
        RenderError: If source is not a str
    """
    if not isinstance(source, str):
        raise RenderError("render_text() expects str; use render() for bytes", type(source))
    return _render_string(source, _config_for(disable_html))


class _CountingSink:
    """Forward fragments to another sink, counting characters written."""

    __slots__ = ("_sink", "written")

    def __init__(self, sink: OutputSink) -> None:
        self._sink = sink
        self.written = 0

    def append(self, s: str) -> None:
        self._sink.append(s)
        self.written += len(s)


def render_to(source: str, sink: OutputSink, *, config: RenderConfig | None = None) -> None:
    """Render Markdown text into a sink as it is matched.

    Example:
        >>> import sys
        >>> render_to("# Title", StreamSink(sys.stdout))
        <h1>Title</h1>
    """
    acc = get_render_accumulator()
    if acc is None:
        RenderSession(sink, config).render(source)
        return

    counter = _CountingSink(sink)
    RenderSession(counter, config).render(source)
    acc.record_render(source_length=len(source), output_length=counter.written)


class Markdown:
    """Reusable Markdown processor with a fixed configuration.

    Usage:
        >>> md = Markdown()
        >>> md("# Hello **World**")
        '<h1>Hello <strong>World</strong></h1>\\n'

        >>> md.render_bytes(b"- a\\n- b\\n")
        b'<ul>\\n<li>a</li>\\n<li>b</li>\\n</ul>\\n'

    Thread Safety:
        Every call builds its own RenderSession, so one instance can be
        shared by any number of threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        disable_html: bool = False,
        highlight: bool = False,
        max_nesting: int = 64,
    ) -> None:
        """Initialize Markdown processor.

        Args:
            disable_html: Escape raw HTML and comments
            highlight: Syntax-highlight fenced code with a language token
            max_nesting: Deepest recursive render before nested content is
                written as escaped text
        """
        self._config = RenderConfig(
            disable_html=disable_html,
            highlight=highlight,
            max_nesting=max_nesting,
        )

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Render Markdown text to HTML text."""
        if not isinstance(source, str):
            raise RenderError("Markdown() expects str; use render_bytes() for bytes", type(source))
        return _render_string(source, self._config)

    def render_bytes(self, source: bytes) -> bytes:
        """Render a Markdown byte buffer to HTML bytes."""
        with render_config_context(self._config):
            return render(source)

    def render_to(self, source: str, sink: OutputSink) -> None:
        """Render Markdown text into a sink."""
        render_to(source, sink, config=self._config)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "render",
    "render_text",
    "render_to",
    "Markdown",
    # Engine
    "Context",
    "Match",
    "Recognizer",
    "RenderSession",
    "DEFAULT_RECOGNIZERS",
    "html_escape",
    # Sinks
    "OutputSink",
    "StreamSink",
    "StringBuilder",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Profiling
    "RenderAccumulator",
    "get_render_accumulator",
    "profiled_render",
    # Errors
    "RenderError",
    "SmudownError",
]
