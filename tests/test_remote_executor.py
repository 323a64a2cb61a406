"""Tests for outcome classification in the remote call executor."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from weather_gateway.errors import (
    CircuitOpenError,
    FatalUpstreamError,
    MalformedResponseError,
    RetriesExhaustedError,
    TransientUpstreamError,
)
from weather_gateway.repositories import RemoteRequest
from weather_gateway.resilience import CircuitState

from .conftest import FakeClock, RecordingHandler, make_executor

URL = "https://forecast.test/v1/forecast"


def _status(code: int, body: str = "") -> RecordingHandler:
    return RecordingHandler(lambda request: httpx.Response(code, text=body))


class TestRemoteCallExecutor:
    @pytest.mark.asyncio
    async def test_returns_decoded_json_and_sends_params(self, clock: FakeClock) -> None:
        handler = RecordingHandler(lambda request: httpx.Response(200, json={"ok": True}))
        executor = make_executor("forecast", handler, clock)

        payload = await executor.execute(RemoteRequest(URL, {"latitude": "47.4979"}))

        assert payload == {"ok": True}
        assert handler.count == 1
        assert handler.requests[0].url.params["latitude"] == "47.4979"
        assert handler.requests[0].method == "GET"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [500, 502, 503, 504, 408])
    async def test_transient_statuses_are_retried(self, clock: FakeClock, status: int) -> None:
        handler = _status(status)
        executor = make_executor("forecast", handler, clock)

        with pytest.raises(RetriesExhaustedError) as exc_info:
            await executor.execute(RemoteRequest(URL))

        assert handler.count == 4
        assert exc_info.value.attempts == 4
        assert exc_info.value.status == status
        assert clock.sleeps == [2.0, 4.0, 8.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 404, 429])
    async def test_client_errors_are_fatal(self, clock: FakeClock, status: int) -> None:
        handler = _status(status, body='{"error": true, "reason": "bad"}')
        executor = make_executor("forecast", handler, clock)

        with pytest.raises(FatalUpstreamError) as exc_info:
            await executor.execute(RemoteRequest(URL))

        assert handler.count == 1
        assert exc_info.value.status == status
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_connection_errors_are_transient(self, clock: FakeClock) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        handler = RecordingHandler(refuse)
        executor = make_executor("forecast", handler, clock)

        with pytest.raises(RetriesExhaustedError):
            await executor.execute(RemoteRequest(URL))

        assert handler.count == 4

    @pytest.mark.asyncio
    async def test_timeouts_are_transient(self, clock: FakeClock) -> None:
        outcomes = iter([httpx.ReadTimeout("slow"), None])

        def reply(request: httpx.Request) -> httpx.Response:
            error = next(outcomes)
            if error is not None:
                raise error
            return httpx.Response(200, json=[])

        executor = make_executor("forecast", RecordingHandler(reply), clock)

        assert await executor.execute(RemoteRequest(URL)) == []
        assert clock.sleeps == [2.0]

    @pytest.mark.asyncio
    async def test_hung_attempt_is_cut_off_and_retried(self, clock: FakeClock) -> None:
        calls = 0

        async def reply(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                await asyncio.Event().wait()
            return httpx.Response(200, json={"ok": True})

        executor = make_executor("forecast", reply, clock, timeout=0.05)

        assert await executor.execute(RemoteRequest(URL)) == {"ok": True}
        assert calls == 2
        assert clock.sleeps == [2.0]

    @pytest.mark.asyncio
    async def test_attempt_that_never_answers_is_transient(self, clock: FakeClock) -> None:
        async def hang(request: httpx.Request) -> httpx.Response:
            await asyncio.Event().wait()
            return httpx.Response(200)

        executor = make_executor("forecast", hang, clock, timeout=0.01, max_retries=1)

        with pytest.raises(RetriesExhaustedError) as exc_info:
            await executor.execute(RemoteRequest(URL))

        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_error, TransientUpstreamError)
        assert "timed out" in str(exc_info.value.last_error)

    @pytest.mark.asyncio
    async def test_non_json_body_is_malformed(self, clock: FakeClock) -> None:
        handler = _status(200, body="<html>maintenance</html>")
        executor = make_executor("forecast", handler, clock)

        with pytest.raises(MalformedResponseError):
            await executor.execute(RemoteRequest(URL))

        assert handler.count == 1

    @pytest.mark.asyncio
    async def test_breaker_opens_and_stops_network_calls(self, clock: FakeClock) -> None:
        handler = _status(503)
        executor = make_executor("forecast", handler, clock, max_retries=0)

        for _ in range(5):
            with pytest.raises(RetriesExhaustedError):
                await executor.execute(RemoteRequest(URL))

        assert executor.state is CircuitState.OPEN
        with pytest.raises(CircuitOpenError):
            await executor.execute(RemoteRequest(URL))
        assert handler.count == 5

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self, clock: FakeClock) -> None:
        handler = RecordingHandler(lambda request: httpx.Response(200, json={}))
        executor = make_executor("forecast", handler, clock)
        client = executor.client

        await executor.close()

        assert not client.is_closed
        await client.aclose()
