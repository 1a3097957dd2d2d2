"""Async rate limiter spacing out outbound requests."""

import asyncio
import time


class RateLimiter:
    """Lets at most ``requests_per_second`` calls start per second.

    Callers ``await limiter.acquire()`` (or use ``async with limiter``)
    before each request; concurrent callers are queued on a lock and
    released one interval apart.
    """

    def __init__(self, requests_per_second: float = 1.0):
        if requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        self.requests_per_second = requests_per_second
        self._min_interval = 1.0 / requests_per_second
        self._last_request: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            now = time.monotonic()
            if self._last_request is not None:
                wait = self._min_interval - (now - self._last_request)
                if wait > 0:
                    await asyncio.sleep(wait)
            self._last_request = time.monotonic()

    async def __aenter__(self) -> "RateLimiter":
        await self.acquire()
        return self

    async def __aexit__(self, *exc_info) -> None:
        return None
