"""Conversion of provider payloads into domain entities.

Each function validates the raw JSON against the DTOs in
``weather_gateway.dto.open_meteo`` first, so a shape violation surfaces as
``pydantic.ValidationError`` (or ``ValueError`` for bad timestamps) and
the caller decides how to report it.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

from weather_gateway.dto import ForecastPayload, GeocodingPayload
from weather_gateway.entities import City, DailyForecast, HourlyForecast
from weather_gateway.weather_codes import condition_for_code


class MissingBlockError(ValueError):
    """The forecast response has no block for the requested granularity."""


def parse_cities(payload: Any, limit: int) -> list[City]:
    """Build up to ``limit`` distinct cities from a geocoding response."""
    results = GeocodingPayload.model_validate(payload).results

    cities: list[City] = []
    seen: set[tuple[float, float]] = set()
    for result in results:
        city = City(
            name=result.name,
            latitude=result.latitude,
            longitude=result.longitude,
            country=result.country,
            region=result.admin1,
        )
        if city.identity in seen:
            continue
        seen.add(city.identity)
        cities.append(city)
        if len(cities) == limit:
            break
    return cities


def parse_daily(payload: Any, limit: int) -> list[DailyForecast]:
    """Build the first ``limit`` days from a daily forecast response."""
    daily = ForecastPayload.model_validate(payload).daily
    if daily is None:
        raise MissingBlockError("No daily forecast data available")

    forecasts = []
    for i in range(min(limit, len(daily.time))):
        code = daily.weather_code[i]
        forecasts.append(
            DailyForecast(
                date=date.fromisoformat(daily.time[i]),
                max_temp=daily.temperature_2m_max[i],
                min_temp=daily.temperature_2m_min[i],
                weather_code=code,
                condition=condition_for_code(code),
                precipitation_mm=daily.precipitation_sum[i],
                max_wind_kmh=daily.wind_speed_10m_max[i],
            )
        )
    return forecasts


def parse_hourly(payload: Any, now: datetime, limit: int) -> list[HourlyForecast]:
    """Build up to ``limit`` hours starting at or after ``now``.

    The provider reports local times without an offset (``timezone=auto``);
    ``utc_offset_seconds`` turns them into aware datetimes so they compare
    correctly with ``now``.
    """
    forecast = ForecastPayload.model_validate(payload)
    hourly = forecast.hourly
    if hourly is None:
        raise MissingBlockError("No hourly forecast data available")

    tz = timezone(timedelta(seconds=forecast.utc_offset_seconds))
    forecasts = []
    for i, raw_time in enumerate(hourly.time):
        if len(forecasts) == limit:
            break
        time = datetime.fromisoformat(raw_time).replace(tzinfo=tz)
        if time < now:
            continue
        code = hourly.weather_code[i]
        forecasts.append(
            HourlyForecast(
                time=time,
                temperature=hourly.temperature_2m[i],
                weather_code=code,
                condition=condition_for_code(code),
                precipitation_mm=hourly.precipitation[i],
                wind_kmh=hourly.wind_speed_10m[i],
            )
        )
    return forecasts
