"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """A value held by the TTL cache.

    Attributes:
        key: The normalized cache key
        value: The cached payload (opaque to the cache)
        expires_at: Clock reading at which the entry stops being readable
    """

    key: str
    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
