"""Handler layer for HTTP endpoints.

Handlers depend on the gateway service, never directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Gateway) -> (Cache / Remote calls)
"""

from .weather_handler import WeatherHandler

__all__ = [
    "WeatherHandler",
]
