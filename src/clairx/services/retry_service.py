"""Retry service with exponential backoff for upstream model calls."""

import asyncio
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from clairx.models.errors import ErrorCode, is_retryable

T = TypeVar("T")


class RetryableError(Exception):
    """Upstream failure tagged with an error code.

    Only codes for which :func:`is_retryable` is true are retried; the rest
    propagate after the first attempt.
    """

    def __init__(self, error_code: ErrorCode, message: str, original_exception: Exception | None = None):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.original_exception = original_exception


def _is_transient(exc: BaseException) -> bool:
    return isinstance(exc, RetryableError) and is_retryable(exc.error_code)


def build_retry_config(max_attempts: int = 3) -> dict[str, Any]:
    """Retry configuration: exponential backoff of 1s, 2s, 4s between attempts."""
    return {
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=1, min=1, max=4),
        "retry": retry_if_exception(_is_transient),
        "reraise": True,
    }


# Standard retry configuration: 1 initial attempt + 2 retries = 3 total
DEFAULT_RETRY_CONFIG = build_retry_config(3)


async def retry_with_backoff(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    retry_config: dict[str, Any] | None = None,
    timeout_seconds: float | None = None,
    **kwargs: Any,
) -> T:
    """
    Execute an async function with retry logic and exponential backoff.

    Args:
        func: Async function to execute
        *args: Positional arguments for func
        retry_config: Optional custom retry configuration. If None, uses default.
        timeout_seconds: Optional timeout per attempt. If None, no timeout is applied.
        **kwargs: Keyword arguments for func

    Returns:
        Result from func

    Raises:
        RetryableError: If all retries are exhausted, the error is not transient, or timeout occurs
        Exception: Exceptions other than RetryableError are re-raised immediately
    """
    config = dict(retry_config or DEFAULT_RETRY_CONFIG)
    config.setdefault("retry", retry_if_exception(_is_transient))

    async def _execute_with_timeout():
        """Execute func with optional timeout."""
        if timeout_seconds is not None:
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout_seconds)
            except asyncio.TimeoutError as e:
                raise RetryableError(
                    ErrorCode.PROVIDER_TIMEOUT,
                    f"Request timed out after {timeout_seconds}s",
                    original_exception=e,
                )
        else:
            return await func(*args, **kwargs)

    async for attempt in AsyncRetrying(**config):
        with attempt:
            return await _execute_with_timeout()
