"""Response DTOs for API endpoints."""

import datetime as dt

from pydantic import BaseModel, Field


class CityItem(BaseModel):
    """Single city search match."""

    name: str = Field(..., description="Display name of the place")
    latitude: float = Field(..., description="Latitude in decimal degrees", ge=-90.0, le=90.0)
    longitude: float = Field(..., description="Longitude in decimal degrees", ge=-180.0, le=180.0)
    country: str | None = Field(None, description="Country name")
    region: str | None = Field(None, description="First-level administrative area")


class CitySearchResponse(BaseModel):
    """Response DTO for city search."""

    query: str = Field(..., description="The original search text")
    results: list[CityItem] = Field(default_factory=list, description="Up to 5 matches")
    lookup_time_ms: float = Field(..., description="Time taken to answer, in milliseconds")


class DailyForecastItem(BaseModel):
    """One day of forecast."""

    date: dt.date
    max_temp: float = Field(..., description="Daily maximum temperature (°C)")
    min_temp: float = Field(..., description="Daily minimum temperature (°C)")
    weather_code: int = Field(..., description="WMO weather code")
    condition: str = Field(..., description="Condition category")
    description: str = Field(..., description="Human-readable condition")
    precipitation_mm: float = Field(..., description="Precipitation sum (mm)")
    max_wind_kmh: float = Field(..., description="Maximum wind speed (km/h)")


class DailyForecastResponse(BaseModel):
    """Response DTO for the daily forecast."""

    latitude: float
    longitude: float
    days: list[DailyForecastItem] = Field(default_factory=list, description="Up to 5 days")
    lookup_time_ms: float


class HourlyForecastItem(BaseModel):
    """One hour of forecast."""

    time: dt.datetime
    temperature: float = Field(..., description="Air temperature (°C)")
    weather_code: int = Field(..., description="WMO weather code")
    condition: str = Field(..., description="Condition category")
    description: str = Field(..., description="Human-readable condition")
    precipitation_mm: float = Field(..., description="Precipitation (mm)")
    wind_kmh: float = Field(..., description="Wind speed (km/h)")


class HourlyForecastResponse(BaseModel):
    """Response DTO for the hourly forecast."""

    latitude: float
    longitude: float
    hours: list[HourlyForecastItem] = Field(
        default_factory=list,
        description="Up to 12 upcoming hours",
    )
    lookup_time_ms: float


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="'healthy' or 'degraded'")
    circuits: dict[str, str] = Field(..., description="Breaker state per upstream dependency")
    cache_entries: int = Field(..., description="Live entries in the cache", ge=0)
    cache_hits: int = Field(0, ge=0)
    cache_misses: int = Field(0, ge=0)
