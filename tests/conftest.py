"""Pytest configuration and fixtures for weather_gateway tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import date, datetime, timedelta
from typing import Any

import httpx
import pytest

from weather_gateway.repositories import MemoryTTLCache, RemoteCallExecutor
from weather_gateway.resilience import ResiliencePolicy
from weather_gateway.services import WeatherGateway

GEOCODING_URL = "https://geocoding.test/v1/search"
FORECAST_URL = "https://forecast.test/v1/forecast"


class FakeClock:
    """Clock that only moves when told to; sleeps advance it instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds
        await asyncio.sleep(0)

    def advance(self, seconds: float) -> None:
        self.current += seconds


class RecordingHandler:
    """MockTransport handler that records requests and replies via a callable."""

    def __init__(self, reply: Callable[[httpx.Request], httpx.Response]) -> None:
        self.reply = reply
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    @property
    def count(self) -> int:
        return len(self.requests)


def make_executor(
    name: str,
    handler: Callable[[httpx.Request], httpx.Response],
    clock: FakeClock,
    timeout: float = 5.0,
    **policy_kwargs: Any,
) -> RemoteCallExecutor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    policy = ResiliencePolicy.create(name, clock=clock, **policy_kwargs)
    return RemoteCallExecutor(name=name, policy=policy, client=client, timeout=timeout)


def make_gateway(
    handler: Callable[[httpx.Request], httpx.Response],
    clock: FakeClock,
    now: datetime | None = None,
    **policy_kwargs: Any,
) -> WeatherGateway:
    return WeatherGateway(
        cache=MemoryTTLCache(clock=clock, purge_interval=60),
        geocoding=make_executor("geocoding", handler, clock, **policy_kwargs),
        forecast=make_executor("forecast", handler, clock, **policy_kwargs),
        geocoding_url=GEOCODING_URL,
        forecast_url=FORECAST_URL,
        language="en",
        city_search_ttl=3600,
        forecast_ttl=1800,
        now=(lambda: now) if now is not None else None,
    )


def geocoding_payload(*cities: tuple[str, float, float]) -> dict[str, Any]:
    return {
        "results": [
            {
                "id": i,
                "name": name,
                "latitude": lat,
                "longitude": lon,
                "country": "Hungary",
                "admin1": "Budapest",
            }
            for i, (name, lat, lon) in enumerate(cities)
        ],
        "generationtime_ms": 0.5,
    }


def daily_payload(days: int = 7, start: date = date(2026, 10, 19)) -> dict[str, Any]:
    return {
        "latitude": 47.5,
        "longitude": 19.04,
        "utc_offset_seconds": 7200,
        "daily": {
            "time": [(start + timedelta(days=i)).isoformat() for i in range(days)],
            "weather_code": [0, 3, 61, 95, 71, 45, 99][:days] + [0] * max(0, days - 7),
            "temperature_2m_max": [15.0 + i for i in range(days)],
            "temperature_2m_min": [5.0 + i for i in range(days)],
            "precipitation_sum": [0.1 * i for i in range(days)],
            "wind_speed_10m_max": [10.0 + i for i in range(days)],
        },
    }


def hourly_payload(
    hours: int = 48,
    start: datetime = datetime(2026, 10, 19, 0, 0),
    utc_offset_seconds: int = 0,
) -> dict[str, Any]:
    return {
        "latitude": 47.5,
        "longitude": 19.04,
        "utc_offset_seconds": utc_offset_seconds,
        "hourly": {
            "time": [(start + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)],
            "weather_code": [i % 4 for i in range(hours)],
            "temperature_2m": [float(i) for i in range(hours)],
            "precipitation": [0.0] * hours,
            "wind_speed_10m": [5.0] * hours,
        },
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
