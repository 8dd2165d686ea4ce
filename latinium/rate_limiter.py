"""
Server-side sliding-window rate limiting, backed by `limits`.

Only requests inside the trailing window count toward the cap. The storage is
chosen by URI ("memory://" by default) so the process-local map can be swapped
for redis or memcached without touching callers.
"""

import time

from limits import RateLimitItemPerSecond
from limits.storage import storage_from_string
from limits.strategies import MovingWindowRateLimiter

ANONYMOUS_CLIENT = "anonymous"
DEFAULT_STORAGE_URI = "memory://"


class SlidingWindowLimiter:
    """Allow at most `max_requests` per `window_seconds` for each client."""

    def __init__(self, max_requests: int, window_seconds: float, storage_uri: str = DEFAULT_STORAGE_URI):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds < 1:
            raise ValueError("window_seconds must be at least 1")
        self.max_requests = max_requests
        self.window_seconds = int(window_seconds)
        self._item = RateLimitItemPerSecond(max_requests, self.window_seconds)
        self._storage = storage_from_string(storage_uri)
        self._limiter = MovingWindowRateLimiter(self._storage)

    def is_limited(self, client_id: str) -> bool:
        return not self._limiter.test(self._item, client_id)

    def record(self, client_id: str) -> None:
        # Callers check is_limited() first; a hit past the cap is simply not stored
        self._limiter.hit(self._item, client_id)

    def remaining(self, client_id: str) -> int:
        return max(0, self._limiter.get_window_stats(self._item, client_id).remaining)

    def time_until_reset(self, client_id: str) -> float:
        """Seconds until the oldest in-window request expires; 0 if the window is empty."""
        stats = self._limiter.get_window_stats(self._item, client_id)
        if stats.remaining >= self.max_requests:
            return 0.0
        return max(0.0, stats.reset_time - time.time())


def client_id_from_headers(headers) -> str:
    """First hop of x-forwarded-for, or the shared anonymous bucket."""
    forwarded = headers.get("x-forwarded-for")
    if not forwarded:
        return ANONYMOUS_CLIENT
    first_hop = forwarded.split(",")[0].strip()
    return first_hop or ANONYMOUS_CLIENT
