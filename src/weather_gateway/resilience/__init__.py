"""Resilience policies for remote calls.

Architecture:
    RetryPolicy -> CircuitBreaker -> operation
    (backoff)   -> (fail fast)    -> (one attempt)

``ResiliencePolicy`` composes the two so that every failed attempt counts
toward the breaker threshold, and an open breaker ends any retry loop in
progress with ``CircuitOpenError``.
"""

from .circuit_breaker import CircuitBreaker, CircuitState
from .clock import SystemClock
from .policy import ResiliencePolicy
from .retry import RetryPolicy

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "ResiliencePolicy",
    "RetryPolicy",
    "SystemClock",
]
