"""Weather data gateway: the service callers talk to.

Every operation follows the same template:

1. validate input (blank or malformed input returns ``[]`` untouched)
2. compute the cache key
3. return the cached result on a hit
4. on a miss, build provider parameters and run them through the
   remote call executor, then parse the payload
5. store the parsed result with the operation's TTL and return it
6. turn any failure into a ``WeatherGatewayError`` subclass
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

from weather_gateway.config import settings
from weather_gateway.entities import City, DailyForecast, HourlyForecast
from weather_gateway.errors import (
    CircuitOpenError,
    DataCorrupt,
    FatalUpstreamError,
    MalformedResponseError,
    QueryValidationError,
    RetriesExhaustedError,
    UpstreamError,
    UpstreamRejected,
    UpstreamUnavailable,
    WeatherGatewayError,
)
from weather_gateway.protocols import CacheStore
from weather_gateway.repositories import MemoryTTLCache, RemoteCallExecutor, RemoteRequest

from .parsing import parse_cities, parse_daily, parse_hourly

logger = logging.getLogger(__name__)

T = TypeVar("T")

CITY_SEARCH_LIMIT = 5
DAILY_LIMIT = 5
HOURLY_LIMIT = 12

DAILY_METRICS = "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max"
HOURLY_METRICS = "weather_code,temperature_2m,precipitation,wind_speed_10m"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_city_name(name: str | None) -> str:
    """Trim a search term, rejecting blank input."""
    query = (name or "").strip()
    if not query:
        raise QueryValidationError("City name must not be blank", endpoint="geocoding")
    return query


def validate_coordinates(latitude: float, longitude: float) -> tuple[float, float]:
    """Convert coordinates to floats, rejecting non-finite or out-of-range values."""
    try:
        lat, lon = float(latitude), float(longitude)
    except (TypeError, ValueError) as e:
        raise QueryValidationError("Coordinates must be numbers", endpoint="forecast") from e
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise QueryValidationError("Coordinates must be finite", endpoint="forecast")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise QueryValidationError(
            f"Coordinates out of range: {lat}, {lon}", endpoint="forecast"
        )
    return lat, lon


def _cell(value: float) -> str:
    text = f"{value:.2f}"
    return "0.00" if text == "-0.00" else text


def city_cache_key(name: str, language: str) -> str:
    return f"geocoding:{language}:{name.strip().lower()}"


def forecast_cache_key(kind: str, latitude: float, longitude: float) -> str:
    """Key for a forecast cell; locations within the same 0.01° cell share it."""
    return f"{kind}:{_cell(latitude)}:{_cell(longitude)}"


def _format_coordinate(value: float) -> str:
    return f"{value:.4f}"


class WeatherGateway:
    """Cached, resilient access to city search and forecasts.

    This service depends on the CacheStore PROTOCOL and on one
    RemoteCallExecutor per upstream dependency, each with its own circuit
    breaker. All three are injected so their lifetime and sharing scope
    stay explicit.

    Example:
        ```python
        from weather_gateway.services import WeatherGateway

        gateway = WeatherGateway.create()
        cities = await gateway.search_cities("Budapest")
        days = await gateway.get_daily_forecast(cities[0].latitude, cities[0].longitude)
        await gateway.close()
        ```
    """

    def __init__(
        self,
        cache: CacheStore,
        geocoding: RemoteCallExecutor,
        forecast: RemoteCallExecutor,
        *,
        geocoding_url: str | None = None,
        forecast_url: str | None = None,
        language: str | None = None,
        city_search_ttl: float | None = None,
        forecast_ttl: float | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            cache: TTL cache shared by all operations (required).
            geocoding: Executor for the geocoding endpoint (required).
            forecast: Executor for the forecast endpoint (required).
            geocoding_url: Geocoding search URL. Defaults to settings.
            forecast_url: Forecast URL. Defaults to settings.
            language: Geocoding result language. Defaults to settings.
            city_search_ttl: Seconds to cache search results. Defaults to settings.
            forecast_ttl: Seconds to cache forecasts. Defaults to settings.
            now: Returns the current aware datetime; used to filter hourly data.
        """
        self._cache = cache
        self._geocoding = geocoding
        self._forecast = forecast
        self._geocoding_url = geocoding_url or settings.geocoding_api_url
        self._forecast_url = forecast_url or settings.forecast_api_url
        self._language = language or settings.geocoding_language
        self._city_search_ttl = city_search_ttl or settings.city_search_ttl
        self._forecast_ttl = forecast_ttl or settings.forecast_ttl
        self._now = now or _utcnow

    @classmethod
    def create(cls, cache: CacheStore | None = None) -> "WeatherGateway":
        """Factory method building the default cache and executors from settings."""
        return cls(
            cache=cache or MemoryTTLCache.create(),
            geocoding=RemoteCallExecutor.create("geocoding"),
            forecast=RemoteCallExecutor.create("forecast"),
        )

    async def search_cities(self, name: str) -> list[City]:
        """Find up to 5 places matching a name.

        Args:
            name: Free-text city name; case and surrounding whitespace
                do not affect caching

        Returns:
            Matching cities, or an empty list for blank input

        Raises:
            UpstreamUnavailable: Provider unreachable or circuit open
            UpstreamRejected: Provider refused the request
            DataCorrupt: Provider response could not be parsed
        """
        try:
            query = normalize_city_name(name)
        except QueryValidationError:
            return []

        request = RemoteRequest(
            url=self._geocoding_url,
            params={
                "name": query,
                "count": str(CITY_SEARCH_LIMIT),
                "language": self._language,
                "format": "json",
            },
        )
        return await self._load(
            key=city_cache_key(query, self._language),
            executor=self._geocoding,
            request=request,
            parse=lambda payload: parse_cities(payload, CITY_SEARCH_LIMIT),
            ttl=self._city_search_ttl,
            query=query,
        )

    async def get_daily_forecast(
        self,
        latitude: float,
        longitude: float,
        city_name: str | None = None,
    ) -> list[DailyForecast]:
        """Get the next 5 days of forecast for a location.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            city_name: Optional display name, only used for logging

        Returns:
            Up to 5 daily forecasts, or an empty list for invalid coordinates
        """
        try:
            latitude, longitude = validate_coordinates(latitude, longitude)
        except QueryValidationError:
            return []

        request = RemoteRequest(
            url=self._forecast_url,
            params={
                "latitude": _format_coordinate(latitude),
                "longitude": _format_coordinate(longitude),
                "daily": DAILY_METRICS,
                "timezone": "auto",
            },
        )
        return await self._load(
            key=forecast_cache_key("daily", latitude, longitude),
            executor=self._forecast,
            request=request,
            parse=lambda payload: parse_daily(payload, DAILY_LIMIT),
            ttl=self._forecast_ttl,
            query=self._describe_location(latitude, longitude, city_name),
        )

    async def get_hourly_forecast(
        self,
        latitude: float,
        longitude: float,
        city_name: str | None = None,
    ) -> list[HourlyForecast]:
        """Get the next 12 hours of forecast for a location.

        Two days are requested from the provider so that enough future
        hours remain after dropping the ones already past.

        Args:
            latitude: Latitude in decimal degrees
            longitude: Longitude in decimal degrees
            city_name: Optional display name, only used for logging

        Returns:
            Up to 12 hourly forecasts starting at or after now
        """
        try:
            latitude, longitude = validate_coordinates(latitude, longitude)
        except QueryValidationError:
            return []

        request = RemoteRequest(
            url=self._forecast_url,
            params={
                "latitude": _format_coordinate(latitude),
                "longitude": _format_coordinate(longitude),
                "hourly": HOURLY_METRICS,
                "timezone": "auto",
                "forecast_days": "2",
            },
        )
        return await self._load(
            key=forecast_cache_key("hourly", latitude, longitude),
            executor=self._forecast,
            request=request,
            parse=lambda payload: parse_hourly(payload, self._now(), HOURLY_LIMIT),
            ttl=self._forecast_ttl,
            query=self._describe_location(latitude, longitude, city_name),
        )

    async def _load(
        self,
        key: str,
        executor: RemoteCallExecutor,
        request: RemoteRequest,
        parse: Callable[[Any], list[T]],
        ttl: float,
        query: str,
    ) -> list[T]:
        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for %s (%s)", executor.name, query)
            return list(cached)

        logger.info("Cache miss for %s (%s), querying provider", executor.name, query)
        try:
            payload = await executor.execute(request)
            result = parse(payload)
        except (UpstreamError, ValueError) as e:
            logger.error("%s failed for %s: %s", executor.name, query, e)
            raise self._classify(e, executor.name, query) from e

        self._cache.set(key, tuple(result), ttl)
        logger.info("Cached %d %s results for %s", len(result), executor.name, query)
        return result

    @staticmethod
    def _classify(error: Exception, endpoint: str, query: str) -> WeatherGatewayError:
        """Map an executor or parsing failure to a caller-facing error."""
        context = {"endpoint": endpoint, "query": query, "status": getattr(error, "status", None)}

        if isinstance(error, CircuitOpenError):
            return UpstreamUnavailable(
                "The weather service is temporarily unavailable. Please try again shortly.",
                attempts=0,
                retry_after=error.retry_after,
                **context,
            )
        if isinstance(error, RetriesExhaustedError):
            return UpstreamUnavailable(
                "Could not reach the weather service. Please check your internet connection.",
                attempts=error.attempts,
                **context,
            )
        if isinstance(error, (MalformedResponseError, ValueError)):
            return DataCorrupt(
                "The weather service returned data that could not be processed.",
                **context,
            )
        if isinstance(error, FatalUpstreamError):
            return UpstreamRejected(
                f"The weather service rejected the request (HTTP status: {error.status or 'unknown'}).",
                **context,
            )
        return UpstreamUnavailable(
            "Could not reach the weather service. Please check your internet connection.",
            attempts=1,
            **context,
        )

    @staticmethod
    def _describe_location(latitude: float, longitude: float, city_name: str | None) -> str:
        coords = f"{latitude:.4f}, {longitude:.4f}"
        return f"{city_name} ({coords})" if city_name else coords

    def health(self) -> dict:
        """Breaker state per dependency plus cache statistics."""
        circuits = {
            self._geocoding.name: self._geocoding.state.value,
            self._forecast.name: self._forecast.state.value,
        }
        return {
            "circuits": circuits,
            "cache": self._cache.get_stats(),
        }

    async def close(self) -> None:
        """Release the executors' HTTP clients."""
        await self._geocoding.close()
        await self._forecast.close()

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache
