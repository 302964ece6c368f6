"""Retry helpers for card store round-trips."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from notes2anki_core.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT = 0.5  # seconds
DEFAULT_MAX_WAIT = 8  # seconds

# Transport-level failures only; a store that answers with an error is not retried
RETRYABLE_EXCEPTIONS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
    httpx.TransportError,
)


def get_async_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    max_wait: float = DEFAULT_MAX_WAIT,
) -> AsyncRetrying:
    """Create an async retry controller with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Minimum wait time in seconds
        max_wait: Maximum wait time in seconds

    Returns:
        AsyncRetrying instance
    """
    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=min_wait, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
        reraise=True,
    )


def describe_exception(e: BaseException) -> str:
    """Render an exception for a log line, falling back to its type name."""
    msg = str(e).strip() or type(e).__name__
    if e.__cause__ is not None:
        cause = str(e.__cause__).strip()
        if cause:
            msg = f"{msg} (caused by: {cause})"
    return msg


async def with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait: float = DEFAULT_MIN_WAIT,
    operation_name: str = "operation",
    **kwargs: Any,
) -> T:
    """Await ``func(*args, **kwargs)``, retrying transient transport errors.

    Args:
        func: Async callable to execute
        *args: Positional arguments for the callable
        max_attempts: Maximum number of attempts
        min_wait: Initial backoff in seconds
        operation_name: Name for logging purposes
        **kwargs: Keyword arguments for the callable

    Returns:
        Result of the callable

    Raises:
        The last exception once attempts are exhausted, or any
        non-retryable exception immediately.
    """
    attempt = 0

    async for attempt_ctx in get_async_retry(
        max_attempts=max_attempts, min_wait=min_wait
    ):
        with attempt_ctx:
            attempt += 1
            if attempt > 1:
                logger.info(
                    f"Retrying {operation_name} (attempt {attempt}/{max_attempts})"
                )
            try:
                return await func(*args, **kwargs)
            except RETRYABLE_EXCEPTIONS as e:
                logger.warning(
                    f"{operation_name} failed (attempt {attempt}/{max_attempts}): "
                    f"{describe_exception(e)}"
                )
                raise

    raise RuntimeError(f"{operation_name} failed after {max_attempts} attempts")
