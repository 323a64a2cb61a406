"""Wall-clock implementation of the Clock protocol."""

import asyncio
import time


class SystemClock:
    """Monotonic clock backed by ``time.monotonic`` and ``asyncio.sleep``."""

    def now(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
