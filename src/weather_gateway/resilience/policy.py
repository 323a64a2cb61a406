"""Retry and circuit breaker composed into one policy."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from weather_gateway.protocols import Clock

from .circuit_breaker import CircuitBreaker
from .retry import RetryPolicy

T = TypeVar("T")


class ResiliencePolicy:
    """Run an operation through ``RetryPolicy(CircuitBreaker(operation))``.

    Every attempt passes through the breaker, so each failed attempt counts
    toward the failure threshold. Once the breaker opens, the next attempt
    raises ``CircuitOpenError``, which is not transient and ends the retry
    loop at once.

    One policy (and therefore one breaker) exists per remote dependency.

    Example:
        ```python
        policy = ResiliencePolicy.create("forecast")
        payload = await policy.execute(lambda: fetch_once(params))
        ```
    """

    def __init__(self, breaker: CircuitBreaker, retry: RetryPolicy) -> None:
        self._breaker = breaker
        self._retry = retry

    @classmethod
    def create(
        cls,
        name: str,
        *,
        max_retries: int = 3,
        backoff_base: float = 2.0,
        failure_threshold: int = 5,
        open_seconds: float = 30.0,
        clock: Clock | None = None,
    ) -> "ResiliencePolicy":
        """Factory method building the breaker and retry policy on one clock."""
        return cls(
            breaker=CircuitBreaker(
                name,
                failure_threshold=failure_threshold,
                open_seconds=open_seconds,
                clock=clock,
            ),
            retry=RetryPolicy(max_retries=max_retries, backoff_base=backoff_base, clock=clock),
        )

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        return await self._retry.execute(lambda: self._breaker.call(operation))

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    @property
    def retry(self) -> RetryPolicy:
        return self._retry
