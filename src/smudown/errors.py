"""Exception classes for smudown.

The rendering engine is total over its input and never raises for
malformed Markdown. These exceptions cover misuse of the public API.
"""

from __future__ import annotations


class SmudownError(Exception):
    """Base exception for all smudown errors."""

    pass


class RenderError(SmudownError):
    """Error raised by a render entry point.

    Raised when a source of an unsupported type is handed to
    ``render()`` or ``render_text()``.
    """

    def __init__(self, message: str, source_type: type | None = None) -> None:
        """Initialize render error.

        Args:
            message: Error description
            source_type: Type of the rejected source (optional)
        """
        self.message = message
        self.source_type = source_type
        if source_type is not None:
            message = f"{message} (got {source_type.__name__})"
        super().__init__(message)
