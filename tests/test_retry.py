"""Tests for the retry policy."""

from __future__ import annotations

import logging

import pytest

from weather_gateway.errors import (
    FatalUpstreamError,
    RetriesExhaustedError,
    TransientUpstreamError,
)
from weather_gateway.resilience import RetryPolicy

from .conftest import FakeClock


class FlakyOperation:
    """Fails with the given errors in order, then returns ``result``."""

    def __init__(self, errors: list[Exception], result: str = "ok") -> None:
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_success_on_first_attempt_does_not_sleep(self, clock: FakeClock) -> None:
        operation = FlakyOperation([])
        result = await RetryPolicy(clock=clock).execute(operation)

        assert result == "ok"
        assert operation.calls == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_succeeds_on_fourth_attempt_after_backoff(self, clock: FakeClock) -> None:
        operation = FlakyOperation([TransientUpstreamError("boom", status=503)] * 3)
        started = clock.now()

        result = await RetryPolicy(max_retries=3, backoff_base=2.0, clock=clock).execute(operation)

        assert result == "ok"
        assert operation.calls == 4
        assert clock.sleeps == [2.0, 4.0, 8.0]
        assert clock.now() - started >= 14.0

    @pytest.mark.asyncio
    async def test_exhaustion_wraps_last_error_with_attempt_count(self, clock: FakeClock) -> None:
        errors = [TransientUpstreamError(f"fail {i}", status=500 + i) for i in range(4)]
        operation = FlakyOperation(errors)

        with pytest.raises(RetriesExhaustedError) as exc_info:
            await RetryPolicy(clock=clock).execute(operation)

        assert exc_info.value.attempts == 4
        assert str(exc_info.value.last_error) == "fail 3"
        assert exc_info.value.status == 503
        assert operation.calls == 4
        assert clock.sleeps == [2.0, 4.0, 8.0]

    @pytest.mark.asyncio
    async def test_attempt_failures_are_logged_as_warnings(
        self, clock: FakeClock, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="weather_gateway.resilience.retry")
        operation = FlakyOperation([TransientUpstreamError("down")] * 2)

        with pytest.raises(RetriesExhaustedError):
            await RetryPolicy(max_retries=1, clock=clock).execute(operation)

        levels = [record.levelno for record in caplog.records]
        assert levels == [logging.WARNING, logging.WARNING]
        assert "Giving up" in caplog.records[-1].getMessage()

    @pytest.mark.asyncio
    async def test_fatal_error_is_never_retried(self, clock: FakeClock) -> None:
        operation = FlakyOperation([FatalUpstreamError("bad request", status=400)])

        with pytest.raises(FatalUpstreamError):
            await RetryPolicy(clock=clock).execute(operation)

        assert operation.calls == 1
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_fatal_after_transient_stops_immediately(self, clock: FakeClock) -> None:
        operation = FlakyOperation(
            [TransientUpstreamError("blip"), FatalUpstreamError("gone", status=404)]
        )

        with pytest.raises(FatalUpstreamError):
            await RetryPolicy(clock=clock).execute(operation)

        assert operation.calls == 2
        assert clock.sleeps == [2.0]

    @pytest.mark.asyncio
    async def test_zero_retries_means_single_attempt(self, clock: FakeClock) -> None:
        operation = FlakyOperation([TransientUpstreamError("blip")])

        with pytest.raises(RetriesExhaustedError) as exc_info:
            await RetryPolicy(max_retries=0, clock=clock).execute(operation)

        assert exc_info.value.attempts == 1
        assert clock.sleeps == []

    def test_negative_retries_rejected(self) -> None:
        with pytest.raises(ValueError):
            RetryPolicy(max_retries=-1)
