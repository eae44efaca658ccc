"""Opt-in render metrics.

Zero overhead when disabled (get_render_accumulator() returns None).

Example:
    from smudown import render_text
    from smudown.profiling import profiled_render

    with profiled_render() as metrics:
        html = render_text("# Hello **World**")

    print(metrics.summary())
    # {"total_ms": 0.4, "render_calls": 1, "source_length": 17, "output_length": 34}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RenderAccumulator:
    """Accumulated metrics across render calls.

    Attributes:
        start_time: Profiling start timestamp.
        render_calls: Number of documents rendered.
        source_length: Total characters of Markdown read.
        output_length: Total characters of HTML written.

    """

    start_time: float = field(default_factory=perf_counter)
    render_calls: int = 0
    source_length: int = 0
    output_length: int = 0

    def record_render(self, source_length: int, output_length: int) -> None:
        self.render_calls += 1
        self.source_length += source_length
        self.output_length += output_length

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "render_calls": self.render_calls,
            "source_length": self.source_length,
            "output_length": self.output_length,
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Context manager for profiled rendering.

    Yields:
        RenderAccumulator populated by every render call in the block.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
