"""Output sinks for the streaming renderer.

Recognizers write HTML fragments in final document order the moment they
match; the sink decides where those fragments go.

StringBuilder:
    Appends to a list, joins once at the end: O(n) total vs O(n²) for
    repeated string concatenation. Default sink for string results.

StreamSink:
    Forwards every fragment to a text or binary stream (file, socket
    makefile, sys.stdout) without holding the document in memory.

Thread Safety:
Sinks are local to one render session. No shared mutable state.

"""

from __future__ import annotations

from typing import IO, Protocol, runtime_checkable


@runtime_checkable
class OutputSink(Protocol):
    """Append-only destination for rendered HTML."""

    def append(self, s: str) -> object:
        """Append one HTML fragment."""
        ...


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("<em>").append("x").append("</em>").build()
            '<em>x</em>'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string to the builder (empty strings are skipped)."""
        if s:
            self._parts.append(s)
        return self

    def append_line(self, s: str = "") -> StringBuilder:
        """Append a string followed by newline."""
        if s:
            self._parts.append(s)
        self._parts.append("\n")
        return self

    def build(self) -> str:
        """Join all parts into final string."""
        return "".join(self._parts)

    def clear(self) -> StringBuilder:
        """Clear all accumulated parts."""
        self._parts.clear()
        return self

    def __len__(self) -> int:
        """Return number of parts (not total length)."""
        return len(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)


class StreamSink:
    """Write fragments straight through to a stream.

    Binary streams receive UTF-8 encoded with ``surrogateescape`` so bytes
    that were not valid UTF-8 on input come back out unchanged.

    Usage:
            >>> import io
            >>> buf = io.BytesIO()
            >>> StreamSink(buf).append("<p>")
            >>> buf.getvalue()
            b'<p>'

    """

    __slots__ = ("_stream", "_binary", "_encoding", "written")

    def __init__(self, stream: IO, *, binary: bool | None = None, encoding: str = "utf-8") -> None:
        """Initialize stream sink.

        Args:
            stream: Writable text or binary stream
            binary: Force binary mode; detected from the stream when None
            encoding: Encoding used for binary streams
        """
        self._stream = stream
        if binary is None:
            binary = "b" in getattr(stream, "mode", "") or not hasattr(stream, "encoding")
        self._binary = binary
        self._encoding = encoding
        self.written = 0

    def append(self, s: str) -> None:
        """Write one fragment to the stream."""
        if not s:
            return
        if self._binary:
            self._stream.write(s.encode(self._encoding, "surrogateescape"))
        else:
            self._stream.write(s)
        self.written += len(s)
