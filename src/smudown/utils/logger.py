"""Minimal logging utilities for smudown.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from smudown.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "smudown." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("tables")
        >>> logger.name
        'smudown.tables'
    """
    if not (name == "smudown" or name.startswith("smudown.")):
        name = f"smudown.{name}"
    return logging.getLogger(name)
