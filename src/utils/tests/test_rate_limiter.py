"""Tests for RateLimiter."""

import asyncio
import time
import unittest

from utils.rate_limiter import RateLimiter


class TestRateLimiter(unittest.IsolatedAsyncioTestCase):

    def test_rejects_non_positive_rate(self):
        with self.assertRaises(ValueError):
            RateLimiter(0)
        with self.assertRaises(ValueError):
            RateLimiter(-1)

    async def test_first_acquire_does_not_wait(self):
        limiter = RateLimiter(requests_per_second=1)
        start = time.monotonic()
        await limiter.acquire()
        self.assertLess(time.monotonic() - start, 0.5)

    async def test_consecutive_acquires_are_spaced(self):
        limiter = RateLimiter(requests_per_second=20)
        start = time.monotonic()
        await limiter.acquire()
        await limiter.acquire()
        await limiter.acquire()
        # Two intervals of 50ms; allow for timer granularity
        self.assertGreaterEqual(time.monotonic() - start, 0.09)

    async def test_concurrent_callers_are_serialized(self):
        limiter = RateLimiter(requests_per_second=20)
        stamps: list[float] = []

        async def worker():
            async with limiter:
                stamps.append(time.monotonic())

        await asyncio.gather(*(worker() for _ in range(3)))

        self.assertEqual(len(stamps), 3)
        gaps = [b - a for a, b in zip(stamps, stamps[1:])]
        for gap in gaps:
            self.assertGreaterEqual(gap, 0.045)


if __name__ == '__main__':
    unittest.main()
