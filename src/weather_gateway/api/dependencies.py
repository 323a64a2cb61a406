"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Gateway and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - The cache and circuit breakers live exactly as long as the app
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from weather_gateway.config import settings
from weather_gateway.handlers import WeatherHandler
from weather_gateway.services import WeatherGateway

logger = logging.getLogger(__name__)


def get_gateway(request: Request) -> WeatherGateway:
    """Dependency injection for WeatherGateway from app.state.

    Raises:
        RuntimeError: If the gateway is not initialized
    """
    gateway = getattr(request.app.state, "gateway", None)
    if gateway is None:
        raise RuntimeError("WeatherGateway not initialized. Check lifespan setup.")
    return gateway


def get_handler(request: Request) -> WeatherHandler:
    """Dependency injection for WeatherHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "weather_handler", None)
    if handler is None:
        raise RuntimeError("WeatherHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Builds the gateway (cache + one executor per upstream dependency) and
    the handler, stores them in app.state, and closes the HTTP clients on
    shutdown.
    """
    gateway = WeatherGateway.create()
    app.state.gateway = gateway
    app.state.weather_handler = WeatherHandler(gateway=gateway)

    logger.info("Weather gateway initialized")
    logger.info("Geocoding: %s", settings.geocoding_api_url)
    logger.info("Forecast: %s", settings.forecast_api_url)
    logger.info(
        "Retries: %d, breaker: %d failures / %.0fs",
        settings.retry_max_retries,
        settings.breaker_failure_threshold,
        settings.breaker_open_seconds,
    )

    yield

    await gateway.close()
    del app.state.weather_handler
    del app.state.gateway
    logger.info("Weather gateway shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[WeatherHandler, Depends(get_handler)]
GatewayDep = Annotated[WeatherGateway, Depends(get_gateway)]
