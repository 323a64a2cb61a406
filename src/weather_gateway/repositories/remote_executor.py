"""Remote call executor for the provider's HTTP endpoints.

Every request goes RetryPolicy -> CircuitBreaker -> one ``httpx`` GET.
A single attempt is bounded by an explicit timeout and its outcome is
classified before the policy sees it:

- HTTP 5xx, HTTP 408, timeouts and connection errors are transient
- any other HTTP 4xx is fatal
- a body that is not JSON is fatal (MalformedResponseError)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from weather_gateway.config import settings
from weather_gateway.errors import (
    FatalUpstreamError,
    MalformedResponseError,
    TransientUpstreamError,
)
from weather_gateway.resilience import CircuitState, ResiliencePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteRequest:
    """A fully-formed provider request.

    Attributes:
        url: Endpoint URL without query string
        params: Query parameters, already formatted as strings
    """

    url: str
    params: Mapping[str, str] = field(default_factory=dict)


class RemoteCallExecutor:
    """Issues requests to one remote dependency through its resilience policy.

    Example:
        ```python
        executor = RemoteCallExecutor.create("forecast")
        payload = await executor.execute(
            RemoteRequest(url, {"latitude": "47.4979", "longitude": "19.0402"})
        )
        await executor.close()
        ```
    """

    def __init__(
        self,
        name: str,
        policy: ResiliencePolicy,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            name: Dependency name used in logs.
            policy: Breaker + retry policy owned by this dependency.
            client: HTTP client. If None, one is created lazily and closed
                by ``close()``.
            timeout: Per-attempt timeout in seconds. Defaults to settings.
        """
        self._name = name
        self._policy = policy
        self._timeout = timeout or settings.http_timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def create(
        cls,
        name: str,
        client: httpx.AsyncClient | None = None,
    ) -> "RemoteCallExecutor":
        """Factory method wiring a policy from settings."""
        policy = ResiliencePolicy.create(
            name,
            max_retries=settings.retry_max_retries,
            backoff_base=settings.retry_backoff_base,
            failure_threshold=settings.breaker_failure_threshold,
            open_seconds=settings.breaker_open_seconds,
        )
        return cls(name=name, policy=policy, client=client)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def name(self) -> str:
        return self._name

    @property
    def policy(self) -> ResiliencePolicy:
        return self._policy

    @property
    def state(self) -> CircuitState:
        return self._policy.breaker.state

    async def execute(self, request: RemoteRequest) -> Any:
        """Run the request through the policy and return the decoded JSON.

        Raises:
            CircuitOpenError: The breaker rejected the call
            RetriesExhaustedError: Every attempt failed transiently
            FatalUpstreamError: The provider rejected the request or sent
                an undecodable body
        """
        return await self._policy.execute(lambda: self._attempt(request))

    async def _attempt(self, request: RemoteRequest) -> Any:
        try:
            response = await asyncio.wait_for(
                self.client.get(request.url, params=dict(request.params)),
                timeout=self._timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise TransientUpstreamError(
                f"{self._name}: request timed out after {self._timeout:.0f}s"
            ) from e
        except httpx.TransportError as e:
            raise TransientUpstreamError(f"{self._name}: connection failed: {e}") from e

        logger.debug("%s responded %d for %s", self._name, response.status_code, request.url)

        status = response.status_code
        if status >= 500 or status == 408:
            raise TransientUpstreamError(f"{self._name}: HTTP {status}", status=status)
        if status >= 400:
            raise FatalUpstreamError(
                f"{self._name}: HTTP {status}: {response.text[:200]}", status=status
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{self._name}: response is not valid JSON", status=status
            ) from e

    async def close(self) -> None:
        """Close the HTTP client if this executor created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
