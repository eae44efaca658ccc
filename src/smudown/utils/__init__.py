"""Utility modules for smudown.

Provides:
- logger: get_logger for namespaced logging
"""

from smudown.utils.logger import get_logger

__all__ = [
    "get_logger",
]
