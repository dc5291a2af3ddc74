"""
Rate limiter for outbound provider requests
"""
import time
from collections import deque
from threading import Lock
from loguru import logger


class RateLimiter:
    """
    Sliding-window rate limiter.

    Non-blocking: callers ask ``try_acquire()`` and treat a refusal as a
    provider miss, moving on to the next tier instead of sleeping.
    """

    def __init__(self, max_requests: int, time_window: float = 60, name: str = ""):
        """
        Args:
            max_requests: Maximum number of requests allowed per window
            time_window: Window length in seconds
            name: Label used in log messages
        """
        self.max_requests = max_requests
        self.time_window = time_window
        self.name = name
        self.requests = deque()
        self.lock = Lock()

    def _prune(self, now: float):
        while self.requests and self.requests[0] <= now - self.time_window:
            self.requests.popleft()

    def try_acquire(self) -> bool:
        """Record a request if the window has room; return whether it did."""
        with self.lock:
            now = time.monotonic()
            self._prune(now)

            if len(self.requests) >= self.max_requests:
                retry_in = self.time_window - (now - self.requests[0])
                logger.debug(f"{self.name or 'provider'} rate window full, next slot in {retry_in:.1f}s")
                return False

            self.requests.append(now)
            return True

    def remaining(self) -> int:
        """Requests still available in the current window"""
        with self.lock:
            self._prune(time.monotonic())
            return max(0, self.max_requests - len(self.requests))
