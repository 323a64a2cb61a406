"""Data Transfer Objects.

These Pydantic models define two external contracts:

- open_meteo: the provider's JSON responses, validated before any domain
  object is built from them
- responses: the JSON returned by this service's HTTP API

Internal domain logic should use entities from the entities package.
"""

from .open_meteo import (
    DailyBlock,
    ForecastPayload,
    GeocodingPayload,
    GeocodingResult,
    HourlyBlock,
)
from .responses import (
    CityItem,
    CitySearchResponse,
    DailyForecastItem,
    DailyForecastResponse,
    HealthCheckResponse,
    HourlyForecastItem,
    HourlyForecastResponse,
)

__all__ = [
    "GeocodingResult",
    "GeocodingPayload",
    "DailyBlock",
    "HourlyBlock",
    "ForecastPayload",
    "CityItem",
    "CitySearchResponse",
    "DailyForecastItem",
    "DailyForecastResponse",
    "HourlyForecastItem",
    "HourlyForecastResponse",
    "HealthCheckResponse",
]
