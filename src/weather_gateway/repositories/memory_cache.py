"""In-memory implementation of CacheStore.

Entries live in a plain dict guarded by a lock. Expired entries are
treated as absent and dropped when read; ``set`` also sweeps the whole
dict at most once per ``purge_interval`` so that keys nobody reads again
do not pile up.
"""

import logging
import threading
from typing import Any

from weather_gateway.config import settings
from weather_gateway.entities import CacheEntryEntity
from weather_gateway.protocols import Clock
from weather_gateway.resilience import SystemClock

logger = logging.getLogger(__name__)


class MemoryTTLCache:
    """Process-local TTL cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        cache = MemoryTTLCache.create()
        cache.set("daily:47.50:19.04", forecasts, ttl=1800)
        cache.get("daily:47.50:19.04")
        ```
    """

    def __init__(
        self,
        clock: Clock | None = None,
        purge_interval: float | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            clock: Time source. Defaults to the system monotonic clock.
            purge_interval: Minimum seconds between full expiry sweeps.
                Defaults to settings.
        """
        self._clock = clock or SystemClock()
        self._purge_interval = (
            purge_interval if purge_interval is not None else settings.cache_purge_interval
        )
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()
        self._next_purge = self._clock.now() + self._purge_interval
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, purge_interval: float | None = None) -> "MemoryTTLCache":
        """Factory method to create MemoryTTLCache with defaults."""
        return cls(purge_interval=purge_interval)

    def get(self, key: str) -> Any | None:
        now = self._clock.now()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(now):
                del self._entries[key]
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        now = self._clock.now()
        entry = CacheEntryEntity(key=key, value=value, expires_at=now + ttl)
        with self._lock:
            self._entries[key] = entry
            if now >= self._next_purge:
                self._purge_locked(now)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def count_all(self) -> int:
        now = self._clock.now()
        with self._lock:
            return sum(1 for entry in self._entries.values() if not entry.is_expired(now))

    def purge_expired(self) -> int:
        """Drop every expired entry now.

        Returns:
            Number of entries removed
        """
        with self._lock:
            return self._purge_locked(self._clock.now())

    def _purge_locked(self, now: float) -> int:
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        self._next_purge = now + self._purge_interval
        if expired:
            logger.debug("Purged %d expired cache entries", len(expired))
        return len(expired)

    def get_stats(self) -> dict:
        now = self._clock.now()
        with self._lock:
            live = sum(1 for entry in self._entries.values() if not entry.is_expired(now))
            return {
                "total_entries": live,
                "hits": self._hits,
                "misses": self._misses,
            }
