"""WMO weather interpretation codes as returned by Open-Meteo.

The mapping is total: any integer yields a condition, with
``WeatherCondition.UNKNOWN`` for codes the provider does not define.
"""

from enum import Enum


class WeatherCondition(str, Enum):
    """Human-readable weather categories."""

    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    FOG = "fog"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    SNOW_GRAINS = "snow_grains"
    RAIN_SHOWERS = "rain_showers"
    SNOW_SHOWERS = "snow_showers"
    THUNDERSTORM = "thunderstorm"
    THUNDERSTORM_WITH_HAIL = "thunderstorm_with_hail"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    WeatherCondition.CLEAR: "Clear sky",
    WeatherCondition.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCondition.FOG: "Fog",
    WeatherCondition.DRIZZLE: "Drizzle",
    WeatherCondition.RAIN: "Rain",
    WeatherCondition.SNOW: "Snow",
    WeatherCondition.SNOW_GRAINS: "Snow grains",
    WeatherCondition.RAIN_SHOWERS: "Rain showers",
    WeatherCondition.SNOW_SHOWERS: "Snow showers",
    WeatherCondition.THUNDERSTORM: "Thunderstorm",
    WeatherCondition.THUNDERSTORM_WITH_HAIL: "Thunderstorm with hail",
    WeatherCondition.UNKNOWN: "Unknown",
}

_CODES = {
    0: WeatherCondition.CLEAR,
    1: WeatherCondition.PARTLY_CLOUDY,
    2: WeatherCondition.PARTLY_CLOUDY,
    3: WeatherCondition.PARTLY_CLOUDY,
    45: WeatherCondition.FOG,
    48: WeatherCondition.FOG,
    51: WeatherCondition.DRIZZLE,
    53: WeatherCondition.DRIZZLE,
    55: WeatherCondition.DRIZZLE,
    61: WeatherCondition.RAIN,
    63: WeatherCondition.RAIN,
    65: WeatherCondition.RAIN,
    71: WeatherCondition.SNOW,
    73: WeatherCondition.SNOW,
    75: WeatherCondition.SNOW,
    77: WeatherCondition.SNOW_GRAINS,
    80: WeatherCondition.RAIN_SHOWERS,
    81: WeatherCondition.RAIN_SHOWERS,
    82: WeatherCondition.RAIN_SHOWERS,
    85: WeatherCondition.SNOW_SHOWERS,
    86: WeatherCondition.SNOW_SHOWERS,
    95: WeatherCondition.THUNDERSTORM,
    96: WeatherCondition.THUNDERSTORM_WITH_HAIL,
    99: WeatherCondition.THUNDERSTORM_WITH_HAIL,
}


def condition_for_code(code: int) -> WeatherCondition:
    """Map a provider weather code to a condition category."""
    return _CODES.get(code, WeatherCondition.UNKNOWN)


def describe_weather_code(code: int) -> str:
    """Return the display label for a provider weather code."""
    return condition_for_code(code).label
