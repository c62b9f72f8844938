"""Retry utilities for registry and download requests.

Implements exponential backoff with jitter for transient network failures.
Only the network adapters use this; orchestration code never retries.
"""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from studiorack.utils.errors import (
    DownloadError,
    NetworkConnectionError,
    NetworkError,
    NetworkTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RateLimitError(NetworkError):
    """Server asked us to slow down (HTTP 429)."""

    pass


class ServerError(NetworkError):
    """Server-side error (5xx)."""

    pass


RETRYABLE_ERRORS: tuple[type[Exception], ...] = (
    NetworkConnectionError,
    NetworkTimeoutError,
    RateLimitError,
    ServerError,
)


class RetryConfig:
    """Configuration for retry behavior."""

    def __init__(
        self,
        max_attempts: int = 3,
        max_wait_seconds: float = 30,
        min_wait_seconds: float = 1,
        jitter: bool = True,
    ):
        """Initialize retry configuration.

        Args:
            max_attempts: Maximum number of attempts (including initial)
            max_wait_seconds: Maximum wait time between retries
            min_wait_seconds: Minimum wait time between retries
            jitter: Whether to add jitter to wait times
        """
        self.max_attempts = max_attempts
        self.max_wait_seconds = max_wait_seconds
        self.min_wait_seconds = min_wait_seconds
        self.jitter = jitter


DEFAULT_RETRY_CONFIG = RetryConfig()

# Fast configuration for testing (minimal delays)
TEST_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    max_wait_seconds=0.01,
    min_wait_seconds=0.001,
    jitter=False,
)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    """Log retry attempts for debugging.

    Args:
        retry_state: Tenacity retry state
    """
    if retry_state.outcome and retry_state.outcome.failed:
        exception = retry_state.outcome.exception()
        logger.warning(
            "Retry attempt %d failed: %s: %s",
            retry_state.attempt_number,
            type(exception).__name__,
            exception,
        )


def with_network_retry(
    config: RetryConfig | None = None,
    retry_on: tuple[type[Exception], ...] = RETRYABLE_ERRORS,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Decorator adding exponential backoff to an async network call.

    Usage:
        @with_network_retry()
        async def fetch_index(url):
            ...

    Args:
        config: Retry configuration (looked up at call time when None, so
            tests can patch ``DEFAULT_RETRY_CONFIG``)
        retry_on: Exception types that trigger another attempt

    Returns:
        Decorated coroutine function with retry logic
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            active = config or DEFAULT_RETRY_CONFIG
            retrying = AsyncRetrying(
                stop=stop_after_attempt(active.max_attempts),
                wait=wait_exponential_jitter(
                    initial=active.min_wait_seconds,
                    max=active.max_wait_seconds,
                    jitter=active.max_wait_seconds if active.jitter else 0,
                ),
                retry=retry_if_exception_type(retry_on),
                before_sleep=log_retry_attempt,
                reraise=True,
            )
            try:
                async for attempt in retrying:
                    with attempt:
                        return await func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    "%s failed after %d attempts: %s: %s",
                    func.__name__,
                    active.max_attempts,
                    type(e).__name__,
                    e,
                )
                raise

        return wrapper

    return decorator


def classify_http_error(status_code: int, url: str) -> NetworkError:
    """Classify an HTTP error status into a retryable or final error.

    Args:
        status_code: HTTP status code
        url: Requested URL (for the message)

    Returns:
        Appropriate exception instance
    """
    if status_code == 429:
        return RateLimitError(f"Rate limit exceeded fetching {url}")

    if 500 <= status_code < 600:
        return ServerError(f"Server error (HTTP {status_code}) fetching {url}")

    if status_code == 408:
        return NetworkTimeoutError(f"Request timeout fetching {url}")

    return DownloadError(f"HTTP {status_code} fetching {url}")
