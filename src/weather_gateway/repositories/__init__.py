"""Repository layer for data access.

This layer hides external dependencies (process memory, the provider's
HTTP API) behind small classes the gateway service composes:

- MemoryTTLCache satisfies the CacheStore protocol
- RemoteCallExecutor issues provider requests through a ResiliencePolicy
"""

from weather_gateway.protocols import CacheStore

from .memory_cache import MemoryTTLCache
from .remote_executor import RemoteCallExecutor, RemoteRequest

__all__ = [
    "CacheStore",
    "MemoryTTLCache",
    "RemoteCallExecutor",
    "RemoteRequest",
]
