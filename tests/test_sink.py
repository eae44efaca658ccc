"""Tests for output sinks."""

import io

from smudown import OutputSink, StreamSink, StringBuilder


class TestStringBuilder:
    def test_build(self) -> None:
        sb = StringBuilder()
        sb.append("<h1>").append("Hello").append("</h1>")
        assert sb.build() == "<h1>Hello</h1>"

    def test_empty_strings_skipped(self) -> None:
        sb = StringBuilder()
        sb.append("")
        assert len(sb) == 0
        assert not sb

    def test_append_line(self) -> None:
        sb = StringBuilder()
        sb.append_line("<hr />").append_line()
        assert sb.build() == "<hr />\n\n"

    def test_clear(self) -> None:
        sb = StringBuilder().append("x")
        sb.clear()
        assert sb.build() == ""

    def test_is_output_sink(self) -> None:
        assert isinstance(StringBuilder(), OutputSink)


class TestStreamSink:
    def test_text_stream(self) -> None:
        out = io.StringIO()
        sink = StreamSink(out)
        sink.append("<p>")
        sink.append("é")
        assert out.getvalue() == "<p>é"
        assert sink.written == 4

    def test_binary_stream_detected(self) -> None:
        out = io.BytesIO()
        StreamSink(out).append("é")
        assert out.getvalue() == "é".encode()

    def test_surrogates_restored_as_bytes(self) -> None:
        out = io.BytesIO()
        StreamSink(out).append(b"\xff".decode("utf-8", "surrogateescape"))
        assert out.getvalue() == b"\xff"

    def test_forced_binary(self) -> None:
        class Collector:
            def __init__(self) -> None:
                self.chunks: list[object] = []
                self.encoding = "utf-8"

            def write(self, chunk: object) -> None:
                self.chunks.append(chunk)

        collector = Collector()
        StreamSink(collector, binary=True).append("x")  # type: ignore[arg-type]
        assert collector.chunks == [b"x"]

    def test_empty_fragment_not_written(self) -> None:
        out = io.StringIO()
        sink = StreamSink(out)
        sink.append("")
        assert out.getvalue() == ""
        assert sink.written == 0

    def test_is_output_sink(self) -> None:
        assert isinstance(StreamSink(io.StringIO()), OutputSink)
