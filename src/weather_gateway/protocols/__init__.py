"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the in-memory cache for another store without touching the gateway
- Driving retry and breaker timing from a fake clock in tests
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .clock import Clock

__all__ = [
    "CacheStore",
    "Clock",
]
