"""Forecast domain entities."""

from dataclasses import dataclass
from datetime import date, datetime

from weather_gateway.weather_codes import WeatherCondition


@dataclass(frozen=True)
class DailyForecast:
    """Forecast for a single day at one location.

    Attributes:
        date: Local calendar date at the location
        max_temp: Daily maximum temperature (°C)
        min_temp: Daily minimum temperature (°C)
        weather_code: Provider (WMO) weather code
        condition: Category the code maps to
        precipitation_mm: Precipitation sum for the day
        max_wind_kmh: Maximum 10 m wind speed
    """

    date: date
    max_temp: float
    min_temp: float
    weather_code: int
    condition: WeatherCondition
    precipitation_mm: float
    max_wind_kmh: float

    @property
    def description(self) -> str:
        return self.condition.label


@dataclass(frozen=True)
class HourlyForecast:
    """Forecast for a single hour at one location.

    Attributes:
        time: Start of the hour, timezone-aware (location's UTC offset)
        temperature: 2 m air temperature (°C)
        weather_code: Provider (WMO) weather code
        condition: Category the code maps to
        precipitation_mm: Precipitation during the hour
        wind_kmh: 10 m wind speed
    """

    time: datetime
    temperature: float
    weather_code: int
    condition: WeatherCondition
    precipitation_mm: float
    wind_kmh: float

    @property
    def description(self) -> str:
        return self.condition.label
