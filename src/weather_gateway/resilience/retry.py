"""Retry with exponential backoff for transient upstream failures."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from weather_gateway.errors import RetriesExhaustedError, TransientUpstreamError
from weather_gateway.protocols import Clock

from .clock import SystemClock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Retry an async operation on ``TransientUpstreamError`` only.

    The delay before retry *k* (k = 1, 2, ...) is ``backoff_base ** k``
    seconds, counted from the end of the failed attempt. With the defaults
    that is 2s, 4s and 8s for at most four tries in total.

    ``FatalUpstreamError`` and anything else propagate on the first
    occurrence.
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        clock: Clock | None = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must not be negative")
        self._max_retries = max_retries
        self._backoff_base = backoff_base
        self._clock = clock or SystemClock()

    @property
    def max_attempts(self) -> int:
        return self._max_retries + 1

    def delay_for(self, retry: int) -> float:
        """Backoff delay before the given retry (1-based)."""
        return self._backoff_base**retry

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run the operation, retrying transient failures.

        Raises:
            RetriesExhaustedError: Every attempt failed transiently
            FatalUpstreamError: Raised by the operation, never retried
        """
        attempt = 1
        while True:
            try:
                return await operation()
            except TransientUpstreamError as e:
                if attempt >= self.max_attempts:
                    logger.warning(
                        "Attempt %d/%d failed: %s. Giving up", attempt, self.max_attempts, e
                    )
                    raise RetriesExhaustedError(attempt, e) from e

                delay = self.delay_for(attempt)
                logger.warning(
                    "Attempt %d/%d failed: %s. Retrying in %.1fs",
                    attempt,
                    self.max_attempts,
                    e,
                    delay,
                )
            await self._clock.sleep(delay)
            attempt += 1
