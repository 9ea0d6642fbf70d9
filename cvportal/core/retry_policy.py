"""
Retry-with-backoff and pacing for rate-limited collaborators.

RetryPolicy wraps tenacity's AsyncRetrying with exponential jittered
backoff and an optional per-attempt timeout. Pacer enforces a minimum
interval between consecutive calls to a third-party API.

Dependencies: tenacity, asyncio
System role: Shared resilience component for embedding and vector store calls
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from cvportal.core.exceptions import EmbeddingRateLimitError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], timeout_seconds: float | None) -> T:
    """
    Await with an optional deadline.

    Raises:
        asyncio.TimeoutError: If the deadline passes first
    """
    if timeout_seconds is None or timeout_seconds <= 0:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout_seconds)


class RetryPolicy:
    """
    Configurable retry policy for async calls.

    Only exceptions listed in ``retry_on`` are retried; anything else
    propagates on the first failure. The final failure is re-raised
    unchanged (``reraise=True``).
    """

    def __init__(
        self,
        max_attempts: int = 3,
        initial_backoff: float = 0.5,
        max_backoff: float = 10.0,
        jitter: float = 0.5,
        timeout_seconds: float | None = None,
        retry_on: tuple[type[BaseException], ...] = (EmbeddingRateLimitError,),
    ) -> None:
        """
        Initialize retry policy.

        Args:
            max_attempts: Total attempts including the first call
            initial_backoff: First backoff delay in seconds
            max_backoff: Upper bound on a single backoff delay
            jitter: Maximum random jitter added to each delay
            timeout_seconds: Per-attempt deadline, None for no deadline
            retry_on: Exception types that trigger a retry
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.initial_backoff = initial_backoff
        self.max_backoff = max_backoff
        self.jitter = jitter
        self.timeout_seconds = timeout_seconds
        self.retry_on = retry_on

    def _before_sleep(self, operation: str) -> Callable[[RetryCallState], None]:
        def log_retry(retry_state: RetryCallState) -> None:
            error = retry_state.outcome.exception() if retry_state.outcome else None
            logger.warning(
                f"{__name__}:{operation} - Retry {retry_state.attempt_number}/"
                f"{self.max_attempts} after {type(error).__name__}: {error}"
            )

        return log_retry

    async def call(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,
        operation: str = "call",
        **kwargs: Any,
    ) -> T:
        """
        Invoke ``func`` under this policy.

        Args:
            func: Coroutine function to call
            *args: Positional arguments for ``func``
            operation: Label used in retry log lines
            **kwargs: Keyword arguments for ``func``

        Returns:
            Result of the first successful attempt
        """
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.initial_backoff,
                max=self.max_backoff,
                jitter=self.jitter,
            ),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=self._before_sleep(operation),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await with_timeout(func(*args, **kwargs), self.timeout_seconds)
        raise RuntimeError("retry loop exited without a result")  # pragma: no cover


class Pacer:
    """Enforces a minimum delay between consecutive calls."""

    def __init__(self, delay_seconds: float = 0.1) -> None:
        self.delay_seconds = max(delay_seconds, 0.0)
        self._last_call: float | None = None

    async def wait(self) -> None:
        """Sleep until at least ``delay_seconds`` passed since the previous call."""
        if self.delay_seconds and self._last_call is not None:
            remaining = self.delay_seconds - (time.monotonic() - self._last_call)
            if remaining > 0:
                await asyncio.sleep(remaining)
        self._last_call = time.monotonic()

    def reset(self) -> None:
        self._last_call = None
