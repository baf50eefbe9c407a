"""Backoff and retry for calls to the Anthropic API.

Only failures that can clear on their own are retried: network errors,
timeouts, 5xx (including 529 overloaded) and 429. A ``retry-after``
header on the response takes precedence over the computed backoff.
"""

import asyncio
import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, Type, TypeVar

import httpx

from claudle.app.core.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

TRANSIENT_ERRORS: Tuple[Type[Exception], ...] = (
    httpx.HTTPStatusError,
    httpx.NetworkError,
    httpx.TimeoutException,
)


@dataclass
class RetryPolicy:
    """How many times to retry and how long to wait in between.

    The wait before retry ``n`` (0-indexed) is
    ``min(base_delay * exponential_base ** n, max_delay)``.
    """

    max_retries: int = 2
    base_delay: float = 0.5
    max_delay: float = 5.0
    exponential_base: float = 2.0
    retryable_exceptions: Tuple[Type[Exception], ...] = TRANSIENT_ERRORS

    def calculate_delay(self, attempt: int) -> float:
        return min(self.base_delay * self.exponential_base ** attempt, self.max_delay)

    def is_retryable(self, exception: Exception) -> bool:
        if isinstance(exception, httpx.HTTPStatusError):
            status = exception.response.status_code
            return status == 429 or status >= 500
        return isinstance(exception, self.retryable_exceptions)

    def delay_for(self, attempt: int, exception: Exception) -> float:
        """Backoff for ``attempt``, or the server's retry-after if it sent one."""
        server_delay = _retry_after_seconds(exception)
        if server_delay is not None:
            return min(server_delay, self.max_delay)
        return self.calculate_delay(attempt)


def _retry_after_seconds(exception: Exception) -> Optional[float]:
    if not isinstance(exception, httpx.HTTPStatusError):
        return None
    headers = getattr(exception.response, "headers", None)
    if not isinstance(headers, httpx.Headers):
        return None
    try:
        return max(float(headers.get("retry-after", "")), 0.0)
    except ValueError:
        return None


def with_retry(policy: Optional[RetryPolicy] = None) -> Callable[[F], F]:
    """Retry the decorated coroutine according to ``policy``.

    Example:
        >>> @with_retry(RetryPolicy(max_retries=3))
        ... async def create_message(self, payload):
        ...     return await self._post(payload)
    """
    retry_policy = policy or RetryPolicy()

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not retry_policy.is_retryable(e):
                        raise
                    if attempt >= retry_policy.max_retries:
                        logger.warning(
                            f"{func.__name__} failed after {attempt + 1} attempts: "
                            f"{type(e).__name__}: {e}"
                        )
                        raise

                    delay = retry_policy.delay_for(attempt, e)
                    attempt += 1
                    logger.info(
                        f"{func.__name__} attempt {attempt} failed ({type(e).__name__}), "
                        f"retrying in {delay:.2f}s"
                    )
                    await asyncio.sleep(delay)

        return wrapper  # type: ignore

    return decorator
