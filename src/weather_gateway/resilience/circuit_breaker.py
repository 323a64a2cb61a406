"""Circuit breaker for one remote dependency.

State machine:

    closed --(threshold consecutive failures)--> open
    open --(open_seconds elapsed)--> half_open
    half_open --(probe succeeds)--> closed
    half_open --(probe fails)--> open

Only ``TransientUpstreamError`` counts as a failure. Fatal errors and
cancellation leave the counters alone; if they end a half-open probe, the
probe slot is released and the breaker stays half-open.

All state lives behind a ``threading.Lock`` that is never held across an
await, so concurrent calls observe atomic transitions.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TypeVar

from weather_gateway.errors import CircuitOpenError, TransientUpstreamError
from weather_gateway.protocols import Clock

from .clock import SystemClock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """Fail fast on a dependency that keeps failing, then probe for recovery."""

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        open_seconds: float = 30.0,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the breaker in the closed state.

        Args:
            name: Dependency name, used in logs and errors.
            failure_threshold: Consecutive failures that open the circuit.
            open_seconds: Cooldown before a half-open probe is allowed.
            clock: Time source. Defaults to the system monotonic clock.
        """
        if failure_threshold < 1:
            raise ValueError("failure_threshold must be at least 1")
        self._name = name
        self._failure_threshold = failure_threshold
        self._open_seconds = open_seconds
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()

        self._state = CircuitState.CLOSED
        self._consecutive_failures = 0
        self._opened_at = 0.0
        self._probe_in_flight = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> CircuitState:
        with self._lock:
            self._refresh_locked()
            return self._state

    @property
    def consecutive_failures(self) -> int:
        with self._lock:
            return self._consecutive_failures

    async def call(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run the operation if the circuit admits it.

        Raises:
            CircuitOpenError: The circuit is open, or half-open with the
                probe already taken. The operation is not invoked.
        """
        probe = self._admit()
        try:
            result = await operation()
        except TransientUpstreamError:
            self._record_failure(probe)
            raise
        else:
            self._record_success(probe)
            return result
        finally:
            if probe:
                self._release_probe()

    def _admit(self) -> bool:
        """Claim permission to call; returns True if this call is the probe."""
        with self._lock:
            self._refresh_locked()
            if self._state is CircuitState.CLOSED:
                return False
            if self._state is CircuitState.HALF_OPEN and not self._probe_in_flight:
                self._probe_in_flight = True
                logger.info("Circuit '%s' half-open, admitting probe call", self._name)
                return True
            raise CircuitOpenError(self._name, self._retry_after_locked())

    def _record_success(self, probe: bool) -> None:
        with self._lock:
            if self._state is CircuitState.CLOSED:
                self._consecutive_failures = 0
            elif probe and self._state is CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._consecutive_failures = 0
                logger.info("Circuit '%s' closed after successful probe", self._name)

    def _record_failure(self, probe: bool) -> None:
        with self._lock:
            if self._state is CircuitState.CLOSED:
                self._consecutive_failures += 1
                if self._consecutive_failures >= self._failure_threshold:
                    self._trip_locked()
            elif probe and self._state is CircuitState.HALF_OPEN:
                self._trip_locked()

    def _release_probe(self) -> None:
        with self._lock:
            self._probe_in_flight = False

    def _trip_locked(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock.now()
        self._probe_in_flight = False
        logger.warning(
            "Circuit '%s' opened after %d consecutive failures; cooling down for %.0fs",
            self._name,
            self._consecutive_failures,
            self._open_seconds,
        )

    def _refresh_locked(self) -> None:
        if (
            self._state is CircuitState.OPEN
            and self._clock.now() - self._opened_at >= self._open_seconds
        ):
            self._state = CircuitState.HALF_OPEN
            self._probe_in_flight = False

    def _retry_after_locked(self) -> float:
        if self._state is CircuitState.OPEN:
            return max(0.0, self._open_seconds - (self._clock.now() - self._opened_at))
        return 0.0

    def reset(self) -> None:
        """Force the circuit closed (administrative use and tests)."""
        with self._lock:
            self._state = CircuitState.CLOSED
            self._consecutive_failures = 0
            self._probe_in_flight = False

    def snapshot(self) -> dict:
        """Current state for health reporting."""
        with self._lock:
            self._refresh_locked()
            return {
                "name": self._name,
                "state": self._state.value,
                "consecutive_failures": self._consecutive_failures,
                "retry_after": self._retry_after_locked(),
            }
