import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict


@dataclass
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    """Fixed-window request counter keyed by client identity.

    A client's window opens with its first request and lasts ``window_seconds``;
    once it expires the next request opens a fresh one. Counting is done under
    a lock so concurrent requests from the same client are never lost.
    """

    def __init__(self, max_requests: int, window_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        # key -> [window_start, count]
        self._windows: Dict[str, list] = {}
        self._last_purge = clock()

    def hit(self, key: str) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            if now - self._last_purge >= self.window_seconds:
                self._purge_expired(now)
            window = self._windows.get(key)
            if window is None or now - window[0] >= self.window_seconds:
                window = [now, 0]
                self._windows[key] = window
            window[1] += 1
            count = window[1]
            reset_after = max(0.0, window[0] + self.window_seconds - now)
        return RateLimitResult(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - count),
            reset_after=reset_after,
        )

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (start, _) in self._windows.items() if now - start >= self.window_seconds]
        for k in expired:
            del self._windows[k]
        self._last_purge = now

    def reset(self, key: str = None) -> None:
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    @staticmethod
    def retry_after_seconds(result: RateLimitResult) -> int:
        return max(1, math.ceil(result.reset_after))
