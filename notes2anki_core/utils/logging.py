"""Logging utilities."""

import asyncio
import logging
import os
import sys
from functools import wraps
from typing import Any, Callable, TypeVar

_LOG_LEVEL = os.environ.get("NOTES2ANKI_LOG_LEVEL", "INFO").upper()
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str, level: int | None = None) -> logging.Logger:
    """Get a logger with the package's stream handler attached.

    Args:
        name: Logger name (typically __name__)
        level: Optional log level override

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(level)
    elif logger.level == logging.NOTSET:
        logger.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))

    return logger


def log_exceptions(logger: logging.Logger) -> Callable[[F], F]:
    """Decorator that logs an exception escaping the wrapped callable.

    The exception is re-raised after logging. Works for plain functions
    and coroutine functions alike.

    Args:
        logger: Logger to use for exception logging

    Returns:
        Decorator
    """

    def decorator(func: F) -> F:
        if asyncio.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    logger.exception(f"Exception in {func.__name__}: {e}")
                    raise

            return async_wrapper  # type: ignore

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Exception in {func.__name__}: {e}")
                raise

        return sync_wrapper  # type: ignore

    return decorator
