"""Utility functions."""

from notes2anki_core.utils.logging import get_logger, log_exceptions
from notes2anki_core.utils.retry import with_retry

__all__ = [
    "get_logger",
    "log_exceptions",
    "with_retry",
]
