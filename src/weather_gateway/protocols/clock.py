"""Clock protocol.

The cache, retry policy and circuit breaker read time and wait through
this interface instead of calling ``time`` and ``asyncio`` directly.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Protocol for a monotonic clock with an async sleep."""

    def now(self) -> float:
        """Return a monotonic reading in seconds."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Suspend the current task for the given number of seconds."""
        ...
