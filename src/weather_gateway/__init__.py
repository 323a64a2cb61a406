"""Weather Gateway - cached, resilient access to a weather provider.

This package provides a layered architecture around the Open-Meteo API:

Layers:
    - protocols: Interface contracts (CacheStore, Clock)
    - resilience: Retry and circuit breaker policies
    - repositories: In-memory TTL cache and remote call executor
    - services: The WeatherGateway (cache-first lookups, parsing)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (provider and API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from weather_gateway.services import WeatherGateway

    gateway = WeatherGateway.create()
    cities = await gateway.search_cities("Budapest")
    ```

For HTTP API:
    ```python
    from weather_gateway.api.app import app
    ```
"""

from weather_gateway.config import settings
from weather_gateway.entities import City, DailyForecast, HourlyForecast
from weather_gateway.errors import (
    DataCorrupt,
    UpstreamRejected,
    UpstreamUnavailable,
    WeatherGatewayError,
)
from weather_gateway.handlers import WeatherHandler
from weather_gateway.protocols import CacheStore, Clock
from weather_gateway.repositories import MemoryTTLCache, RemoteCallExecutor, RemoteRequest
from weather_gateway.resilience import CircuitBreaker, CircuitState, ResiliencePolicy, RetryPolicy
from weather_gateway.services import WeatherGateway
from weather_gateway.weather_codes import WeatherCondition, describe_weather_code

__all__ = [
    # Configuration
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "Clock",
    # Resilience
    "CircuitBreaker",
    "CircuitState",
    "ResiliencePolicy",
    "RetryPolicy",
    # Services (business logic)
    "WeatherGateway",
    # Handlers (HTTP)
    "WeatherHandler",
    # Repositories (data access)
    "MemoryTTLCache",
    "RemoteCallExecutor",
    "RemoteRequest",
    # Entities (domain models)
    "City",
    "DailyForecast",
    "HourlyForecast",
    "WeatherCondition",
    "describe_weather_code",
    # Errors
    "WeatherGatewayError",
    "UpstreamUnavailable",
    "UpstreamRejected",
    "DataCorrupt",
]
