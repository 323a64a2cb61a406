"""Open-Meteo response DTOs.

Only the fields the gateway reads are declared; anything else the
provider sends is ignored. Forecast blocks are parallel arrays indexed by
time, so every array must match the length of ``time``.
"""

from pydantic import BaseModel, Field, model_validator


class GeocodingResult(BaseModel):
    """One match from the geocoding search endpoint."""

    name: str
    latitude: float
    longitude: float
    country: str | None = None
    admin1: str | None = None


class GeocodingPayload(BaseModel):
    """Geocoding search response. ``results`` is omitted when nothing matches."""

    results: list[GeocodingResult] = Field(default_factory=list)


class _ParallelArrays(BaseModel):
    time: list[str]

    @model_validator(mode="after")
    def check_lengths(self):
        expected = len(self.time)
        for name, value in self:
            if isinstance(value, list) and len(value) != expected:
                raise ValueError(f"'{name}' has {len(value)} values, expected {expected}")
        return self


class DailyBlock(_ParallelArrays):
    """Daily metrics requested by the gateway."""

    weather_code: list[int]
    temperature_2m_max: list[float]
    temperature_2m_min: list[float]
    precipitation_sum: list[float]
    wind_speed_10m_max: list[float]


class HourlyBlock(_ParallelArrays):
    """Hourly metrics requested by the gateway."""

    weather_code: list[int]
    temperature_2m: list[float]
    precipitation: list[float]
    wind_speed_10m: list[float]


class ForecastPayload(BaseModel):
    """Forecast response; only the requested block is present."""

    utc_offset_seconds: int = 0
    daily: DailyBlock | None = None
    hourly: HourlyBlock | None = None
