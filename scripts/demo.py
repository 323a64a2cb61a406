#!/usr/bin/env python3
"""
Demo script for the weather gateway.

Searches a city against the live Open-Meteo APIs, prints its daily and
hourly forecast, then repeats the lookups to show cache hits.
"""

import asyncio
import logging
import sys
import time

from weather_gateway import WeatherGateway, WeatherGatewayError
from weather_gateway.config import settings


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_forecast(gateway: WeatherGateway, name: str) -> None:
    """Look up a city and print its forecasts."""
    print_section(f"City search: {name}")

    cities = await gateway.search_cities(name)
    if not cities:
        print("  No matches.")
        return

    for city in cities:
        place = ", ".join(part for part in (city.region, city.country) if part)
        print(f"  • {city.name} ({place}) at {city.latitude:.4f}, {city.longitude:.4f}")

    city = cities[0]

    print_section(f"Daily forecast: {city.name}")
    for day in await gateway.get_daily_forecast(city.latitude, city.longitude, city.name):
        print(
            f"  {day.date:%a %d %b}  {day.min_temp:5.1f}° / {day.max_temp:5.1f}°  "
            f"{day.precipitation_mm:4.1f} mm  {day.description}"
        )

    print_section(f"Next hours: {city.name}")
    for hour in await gateway.get_hourly_forecast(city.latitude, city.longitude, city.name):
        print(f"  {hour.time:%H:%M}  {hour.temperature:5.1f}°  {hour.description}")


async def demo_cache(gateway: WeatherGateway, name: str) -> None:
    """Show that repeated lookups are served from cache."""
    print_section("Cache")

    for label in ("first", "second"):
        start = time.perf_counter()
        await gateway.search_cities(name.upper())
        elapsed = (time.perf_counter() - start) * 1000
        print(f"  {label} lookup of {name.upper()!r}: {elapsed:.1f} ms")

    health = gateway.health()
    print(f"\n  Circuits: {health['circuits']}")
    print(f"  Cache:    {health['cache']}")


async def main() -> int:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    name = " ".join(sys.argv[1:]) or "Budapest"

    gateway = WeatherGateway.create()
    try:
        await demo_forecast(gateway, name)
        await demo_cache(gateway, name)
    except WeatherGatewayError as e:
        print(f"\n  ✗ {e.message}")
        return 1
    finally:
        await gateway.close()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
