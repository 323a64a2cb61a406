"""Service layer for business logic.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Gateway) -> (Cache / Remote calls)

Usage:
    ```python
    from weather_gateway.services import WeatherGateway

    # Using factory method (recommended)
    gateway = WeatherGateway.create()

    # Or manual creation
    gateway = WeatherGateway(cache=cache, geocoding=geocoding, forecast=forecast)
    ```
"""

from .weather_gateway import WeatherGateway

__all__ = [
    "WeatherGateway",
]
