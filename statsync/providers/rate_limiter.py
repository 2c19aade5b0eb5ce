"""
statsync/providers/rate_limiter.py

Purpose:
    Process-local requests-per-minute pacing for the Source API. The provider
    publishes no explicit quota; the sync run stays under a configured RPM.

Dependencies:
    - asyncio
    - time
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable


class TokenBucket:
    """Token bucket refilled continuously at ``rpm / 60`` tokens per second."""

    def __init__(
        self,
        rpm: int | None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self.configure(rpm)
        self._tokens = self.capacity
        self._updated_at = clock()

    def configure(self, rpm: int | None) -> None:
        self.enabled = rpm is not None and int(rpm) > 0
        self.capacity = max(1.0, float(rpm or 1))
        self.refill_per_second = self.capacity / 60.0

    @property
    def tokens(self) -> float:
        return self._tokens

    async def acquire(self) -> None:
        if not self.enabled:
            return
        while True:
            async with self._lock:
                now = self._clock()
                elapsed = max(0.0, now - self._updated_at)
                if elapsed > 0:
                    self._tokens = min(self.capacity, self._tokens + elapsed * self.refill_per_second)
                self._updated_at = now

                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return

                wait_seconds = (1.0 - self._tokens) / max(self.refill_per_second, 1e-9)

            await self._sleep(wait_seconds)
