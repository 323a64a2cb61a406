"""Error taxonomy for the weather gateway.

Two families live here:

- ``UpstreamError`` and its subclasses classify what happened on the wire.
  They are raised by the remote call executor and the resilience policy,
  and the retry/breaker logic switches on their type.
- ``WeatherGatewayError`` and its subclasses are what callers of
  ``WeatherGateway`` see. They carry a human-readable message plus the
  context (endpoint, query, status) needed for logging.
"""

from __future__ import annotations


class UpstreamError(Exception):
    """Base class for classified upstream call failures."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class TransientUpstreamError(UpstreamError):
    """Failure expected to resolve on its own (network, 5xx, 408)."""


class RetriesExhaustedError(TransientUpstreamError):
    """All retry attempts failed with transient errors."""

    def __init__(self, attempts: int, last_error: TransientUpstreamError) -> None:
        super().__init__(
            f"Gave up after {attempts} attempts: {last_error}",
            status=last_error.status,
        )
        self.attempts = attempts
        self.last_error = last_error


class FatalUpstreamError(UpstreamError):
    """Failure that retrying will not fix (4xx other than 408)."""


class MalformedResponseError(FatalUpstreamError):
    """Upstream answered with a body that could not be decoded."""


class CircuitOpenError(UpstreamError):
    """The circuit breaker rejected the call without touching the network."""

    def __init__(self, name: str, retry_after: float) -> None:
        super().__init__(f"Circuit '{name}' is open; retry in {retry_after:.1f}s")
        self.name = name
        self.retry_after = retry_after


class WeatherGatewayError(Exception):
    """Base class for errors surfaced to gateway callers."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        query: str | None = None,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.endpoint = endpoint
        self.query = query
        self.status = status


class QueryValidationError(WeatherGatewayError):
    """Blank or malformed query. Handled inside the gateway."""


class UpstreamUnavailable(WeatherGatewayError):
    """The provider could not be reached (retries exhausted or circuit open)."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int = 0,
        retry_after: float | None = None,
        **context,
    ) -> None:
        super().__init__(message, **context)
        self.attempts = attempts
        self.retry_after = retry_after


class UpstreamRejected(WeatherGatewayError):
    """The provider refused the request."""


class DataCorrupt(WeatherGatewayError):
    """The provider's response could not be turned into domain objects."""
