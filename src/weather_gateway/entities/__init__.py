"""Domain entities for internal representation.

These are pure dataclasses (frozen) produced by the gateway and handed to
callers. They are NOT used for API contracts - use DTOs from the dto
package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No I/O
"""

from .cache_entry import CacheEntryEntity
from .city import City
from .forecast import DailyForecast, HourlyForecast

__all__ = ["CacheEntryEntity", "City", "DailyForecast", "HourlyForecast"]
