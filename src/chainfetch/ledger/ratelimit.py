"""Request pacing for ledger node calls."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass


@dataclass
class RateLimitConfig:
    """Pacing and 429 retry policy for one ledger endpoint."""

    requests_per_second: float = 25.0
    # 0 disables retrying on 429
    max_429_retries: int = 3
    max_backoff: float = 60.0

    def __post_init__(self) -> None:
        if self.requests_per_second <= 0:
            raise ValueError("requests_per_second must be positive")
        if self.max_429_retries < 0:
            raise ValueError("max_429_retries cannot be negative")


class AsyncRateLimiter:
    """
    Spaces requests at a fixed interval and pauses after 429 responses.

    Each caller reserves the next free slot under a lock and sleeps outside
    it, so concurrent callers queue up one interval apart.
    """

    def __init__(self, config: RateLimitConfig) -> None:
        self.config = config
        self._interval = 1.0 / config.requests_per_second
        self._next_slot = 0.0
        self._paused_until = 0.0
        self._consecutive_429s = 0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait for the next request slot."""
        async with self._lock:
            now = time.monotonic()
            start = max(now, self._next_slot, self._paused_until)
            self._next_slot = start + self._interval
        if start > now:
            await asyncio.sleep(start - now)

    def handle_429(self, retry_after: float | None = None) -> float:
        """Record a 429 and pause the endpoint, returning the pause length."""
        self._consecutive_429s += 1
        if retry_after is None:
            retry_after = 2.0 ** (self._consecutive_429s - 1)
        wait_time = min(max(retry_after, 0.0), self.config.max_backoff)
        self._paused_until = time.monotonic() + wait_time
        return wait_time

    def reset_429_state(self) -> None:
        self._consecutive_429s = 0

    @property
    def should_retry_429(self) -> bool:
        return self._consecutive_429s < self.config.max_429_retries
