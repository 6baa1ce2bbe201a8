"""Utility functions for the deploy action."""

from netlify_action.utils.debug import format_error_dump, serialize_error
from netlify_action.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "format_error_dump",
    "get_logger",
    "serialize_error",
]
