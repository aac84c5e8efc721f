import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class RateLimitInfo:
    remaining: int
    reset_at: float


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """
    Fixed-window request counter keyed by client identifier.

    One instance is created by the application and handed to routes through a
    dependency, so tests and workers each get their own state.
    """

    def __init__(
        self,
        max_requests: int = 10,
        window_seconds: float = 60.0,
        max_tracked: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.max_tracked = max_tracked
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def allow(self, identifier: str) -> bool:
        """Count one request; False once the identifier is over its limit for the current window."""
        now = self._clock()
        with self._lock:
            if identifier not in self._windows and len(self._windows) >= self.max_tracked:
                self._purge_expired(now)
                self._evict_oldest(len(self._windows) - self.max_tracked + 1)
            window = self._windows.get(identifier)
            if window is None or now > window.reset_at:
                self._windows[identifier] = _Window(count=1, reset_at=now + self.window_seconds)
                return True
            if window.count >= self.max_requests:
                return False
            window.count += 1
            return True

    def info(self, identifier: str) -> Optional[RateLimitInfo]:
        with self._lock:
            window = self._windows.get(identifier)
            if window is None:
                return None
            return RateLimitInfo(remaining=max(0, self.max_requests - window.count), reset_at=window.reset_at)

    def cleanup(self) -> int:
        """Drop expired windows; returns how many were removed."""
        with self._lock:
            return self._purge_expired(self._clock())

    def _evict_oldest(self, count: int) -> None:
        # All windows still live: drop the ones closest to expiry
        if count <= 0:
            return
        for k in sorted(self._windows, key=lambda k: self._windows[k].reset_at)[:count]:
            del self._windows[k]

    def _purge_expired(self, now: float) -> int:
        expired = [k for k, w in self._windows.items() if now > w.reset_at]
        for k in expired:
            del self._windows[k]
        return len(expired)
