"""Cache storage protocol.

Defines the interface the gateway needs from a key/value cache with
per-entry expiry. The cache is best-effort: it is never the source of
truth and none of its operations raise.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL cache backends.

    Example:
        ```python
        from weather_gateway.protocols import CacheStore

        cache: CacheStore = MemoryTTLCache()
        ```
    """

    def get(self, key: str) -> Any | None:
        """Return the live value for a key.

        Args:
            key: The normalized cache key

        Returns:
            The stored value, or None if absent or expired
        """
        ...

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: The normalized cache key
            value: The payload to cache
            ttl: Time-to-live in seconds
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove an entry.

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def clear(self) -> int:
        """Remove all entries.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count live (unexpired) entries."""
        ...

    def get_stats(self) -> dict:
        """Get cache statistics (implementation-specific)."""
        ...
