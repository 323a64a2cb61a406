"""HTTP handlers for weather operations.

Handlers convert between entities and DTOs and translate gateway errors
into HTTP status codes. They add no caching or retry logic of their own.
"""

import math
import time

from fastapi import HTTPException, status

from weather_gateway.dto import (
    CityItem,
    CitySearchResponse,
    DailyForecastItem,
    DailyForecastResponse,
    HealthCheckResponse,
    HourlyForecastItem,
    HourlyForecastResponse,
)
from weather_gateway.errors import UpstreamUnavailable, WeatherGatewayError
from weather_gateway.services import WeatherGateway


def _to_http_error(error: WeatherGatewayError) -> HTTPException:
    """503 when the provider is unavailable, 502 when it misbehaved."""
    if isinstance(error, UpstreamUnavailable):
        headers = None
        if error.retry_after:
            headers = {"Retry-After": str(math.ceil(error.retry_after))}
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=error.message,
            headers=headers,
        )
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error.message)


class WeatherHandler:
    """HTTP handlers for weather operations.

    Example:
        ```python
        gateway = WeatherGateway.create()
        handler = WeatherHandler(gateway=gateway)

        @app.get("/cities", response_model=CitySearchResponse)
        async def search_cities(name: str):
            return await handler.search_cities(name)
        ```
    """

    def __init__(self, gateway: WeatherGateway) -> None:
        self._gateway = gateway

    async def search_cities(self, name: str) -> CitySearchResponse:
        """Handle GET /cities requests."""
        start_time = time.time()
        try:
            cities = await self._gateway.search_cities(name)
        except WeatherGatewayError as e:
            raise _to_http_error(e) from e

        return CitySearchResponse(
            query=name,
            results=[
                CityItem(
                    name=city.name,
                    latitude=city.latitude,
                    longitude=city.longitude,
                    country=city.country,
                    region=city.region,
                )
                for city in cities
            ],
            lookup_time_ms=(time.time() - start_time) * 1000,
        )

    async def daily_forecast(
        self, latitude: float, longitude: float, city_name: str | None = None
    ) -> DailyForecastResponse:
        """Handle GET /forecast/daily requests."""
        start_time = time.time()
        try:
            days = await self._gateway.get_daily_forecast(latitude, longitude, city_name)
        except WeatherGatewayError as e:
            raise _to_http_error(e) from e

        return DailyForecastResponse(
            latitude=latitude,
            longitude=longitude,
            days=[
                DailyForecastItem(
                    date=day.date,
                    max_temp=day.max_temp,
                    min_temp=day.min_temp,
                    weather_code=day.weather_code,
                    condition=day.condition.value,
                    description=day.description,
                    precipitation_mm=day.precipitation_mm,
                    max_wind_kmh=day.max_wind_kmh,
                )
                for day in days
            ],
            lookup_time_ms=(time.time() - start_time) * 1000,
        )

    async def hourly_forecast(
        self, latitude: float, longitude: float, city_name: str | None = None
    ) -> HourlyForecastResponse:
        """Handle GET /forecast/hourly requests."""
        start_time = time.time()
        try:
            hours = await self._gateway.get_hourly_forecast(latitude, longitude, city_name)
        except WeatherGatewayError as e:
            raise _to_http_error(e) from e

        return HourlyForecastResponse(
            latitude=latitude,
            longitude=longitude,
            hours=[
                HourlyForecastItem(
                    time=hour.time,
                    temperature=hour.temperature,
                    weather_code=hour.weather_code,
                    condition=hour.condition.value,
                    description=hour.description,
                    precipitation_mm=hour.precipitation_mm,
                    wind_kmh=hour.wind_kmh,
                )
                for hour in hours
            ],
            lookup_time_ms=(time.time() - start_time) * 1000,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        health = self._gateway.health()
        circuits = health["circuits"]
        cache_stats = health["cache"]

        degraded = any(state != "closed" for state in circuits.values())
        return HealthCheckResponse(
            status="degraded" if degraded else "healthy",
            circuits=circuits,
            cache_entries=cache_stats.get("total_entries", 0),
            cache_hits=cache_stats.get("hits", 0),
            cache_misses=cache_stats.get("misses", 0),
        )
