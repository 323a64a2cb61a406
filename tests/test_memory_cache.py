"""Tests for the in-memory TTL cache."""

from __future__ import annotations

import threading

from weather_gateway.protocols import CacheStore
from weather_gateway.repositories import MemoryTTLCache

from .conftest import FakeClock


class TestMemoryTTLCache:
    def test_satisfies_protocol(self, clock: FakeClock) -> None:
        assert isinstance(MemoryTTLCache(clock=clock), CacheStore)

    def test_set_then_get_returns_value(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", [1, 2, 3], ttl=60)
        assert cache.get("k") == [1, 2, 3]

    def test_missing_key_is_absent(self, clock: FakeClock) -> None:
        assert MemoryTTLCache(clock=clock).get("nope") is None

    def test_entry_expires_exactly_at_ttl(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", "v", ttl=60)

        clock.advance(59.9)
        assert cache.get("k") == "v"

        clock.advance(0.1)
        assert cache.get("k") is None

    def test_expired_entry_is_removed_on_read(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", "v", ttl=1)
        clock.advance(5)

        assert cache.get("k") is None
        assert cache.delete("k") is False

    def test_set_overwrites_and_resets_expiry(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", "old", ttl=10)
        clock.advance(8)
        cache.set("k", "new", ttl=10)
        clock.advance(8)

        assert cache.get("k") == "new"

    def test_set_purges_expired_entries_after_interval(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock, purge_interval=60)
        for i in range(10):
            cache.set(f"old-{i}", i, ttl=1)

        clock.advance(61)
        cache.set("fresh", "v", ttl=100)

        assert cache.get_stats()["total_entries"] == 1
        assert cache.clear() == 1

    def test_purge_expired(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock, purge_interval=3600)
        cache.set("a", 1, ttl=1)
        cache.set("b", 2, ttl=100)
        clock.advance(2)

        assert cache.purge_expired() == 1
        assert cache.count_all() == 1

    def test_stats_track_hits_and_misses(self, clock: FakeClock) -> None:
        cache = MemoryTTLCache(clock=clock)
        cache.set("k", "v", ttl=60)
        cache.get("k")
        cache.get("k")
        cache.get("other")

        stats = cache.get_stats()
        assert stats == {"total_entries": 1, "hits": 2, "misses": 1}

    def test_concurrent_writers_never_tear(self) -> None:
        cache = MemoryTTLCache()
        values = [(n, str(n) * 3) for n in range(8)]
        torn: list[object] = []

        def writer(value: tuple[int, str]) -> None:
            for _ in range(500):
                cache.set("shared", value, ttl=60)
                seen = cache.get("shared")
                if seen not in values:
                    torn.append(seen)

        threads = [threading.Thread(target=writer, args=(v,)) for v in values]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert torn == []
        assert cache.get("shared") in values
