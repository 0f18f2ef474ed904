"""
Request identification and admission control.
"""

import secrets
import time
from dataclasses import dataclass
from typing import Callable


def generate_request_id() -> str:
    """
    Generate a unique request ID for tracing.

    Returns:
        A random 8-byte hex string prefixed with 'req_'
    """
    return f"req_{secrets.token_hex(8)}"


@dataclass
class _Window:
    started_at: float
    count: int


class FixedWindowRateLimiter:
    """
    Fixed-window request counter keyed by client identifier.

    A window opens on the first request from a client and lasts
    ``window_seconds``. Requests beyond ``max_requests`` inside the window
    are rejected until it elapses; nothing is queued. Expired windows are
    dropped on each request, so only clients seen within the last window
    are tracked.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: int = 900,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def _evict_expired(self, now: float) -> None:
        expired = [
            key
            for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]

    def _current_window(self, identifier: str) -> _Window:
        now = self._clock()
        self._evict_expired(now)
        window = self._windows.get(identifier)
        if window is None:
            window = _Window(started_at=now, count=0)
            self._windows[identifier] = window
        return window

    def is_allowed(self, identifier: str) -> bool:
        """
        Record a request and report whether it is admitted.

        Args:
            identifier: Unique identifier (e.g., client IP address)

        Returns:
            True if request is allowed, False if rate limited
        """
        window = self._current_window(identifier)
        if window.count >= self.max_requests:
            return False
        window.count += 1
        return True

    def get_retry_after(self, identifier: str) -> int:
        """
        Get the number of seconds until the client's window resets.

        Args:
            identifier: Unique identifier

        Returns:
            Seconds until next allowed request
        """
        window = self._windows.get(identifier)
        if window is None:
            return 0
        remaining = window.started_at + self.window_seconds - self._clock()
        return max(int(remaining) + 1, 0) if remaining > 0 else 0

    @property
    def tracked_clients(self) -> int:
        """Number of clients with an open window."""
        return len(self._windows)

    def reset(self) -> None:
        """Forget all windows."""
        self._windows.clear()
