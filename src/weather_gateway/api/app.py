import logging
from typing import Any

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from weather_gateway.api.dependencies import GatewayDep, HandlerDep, lifespan
from weather_gateway.config import settings
from weather_gateway.dto import (
    CitySearchResponse,
    DailyForecastResponse,
    HealthCheckResponse,
    HourlyForecastResponse,
)

app = FastAPI(
    title="Weather Gateway API",
    description="Cached, resilient access to Open-Meteo city search and forecasts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Weather Gateway API",
        "version": "0.1.0",
        "description": "Cached, resilient access to Open-Meteo city search and forecasts",
        "endpoints": {
            "cities": "/cities",
            "daily": "/forecast/daily",
            "hourly": "/forecast/hourly",
            "clear_cache": "/cache",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Breaker state per upstream dependency and cache statistics."""
    return await handler.health_check()


@app.get("/cities", response_model=CitySearchResponse)
async def search_cities(
    handler: HandlerDep,
    name: str = Query("", description="City name to search for"),
) -> CitySearchResponse:
    """Search cities by name (up to 5 matches)."""
    return await handler.search_cities(name)


@app.get("/forecast/daily", response_model=DailyForecastResponse)
async def daily_forecast(
    handler: HandlerDep,
    latitude: float = Query(..., description="Latitude in decimal degrees"),
    longitude: float = Query(..., description="Longitude in decimal degrees"),
    city_name: str | None = Query(None, description="Display name, used for logging"),
) -> DailyForecastResponse:
    """Five-day forecast for a location."""
    return await handler.daily_forecast(latitude, longitude, city_name)


@app.get("/forecast/hourly", response_model=HourlyForecastResponse)
async def hourly_forecast(
    handler: HandlerDep,
    latitude: float = Query(..., description="Latitude in decimal degrees"),
    longitude: float = Query(..., description="Longitude in decimal degrees"),
    city_name: str | None = Query(None, description="Display name, used for logging"),
) -> HourlyForecastResponse:
    """Next twelve hours of forecast for a location."""
    return await handler.hourly_forecast(latitude, longitude, city_name)


@app.delete("/cache", response_model=dict[str, Any])
async def clear_cache(gateway: GatewayDep) -> dict[str, Any]:
    """Drop every cached search and forecast; breaker state is left alone."""
    cleared = gateway.cache.clear()
    return {"message": "Cache cleared successfully", "cleared": cleared}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "weather_gateway.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
