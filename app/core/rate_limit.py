"""In-memory sliding-window rate limiter, constructed once at startup and held on app.state."""

import threading
import time
from collections import deque
from collections.abc import Callable

WINDOW_SECONDS = 60.0
# Idle keys are swept after this many recorded hits.
PRUNE_EVERY = 1024


class LoginRateLimiter:
    """
    Allow at most `limit` hits per client key within a sliding one-minute window.

    Per-process only; with several workers each one keeps its own counts.
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float = WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._recorded = 0
        self._lock = threading.Lock()

    def hit(self, key: str) -> bool:
        """Record one attempt for key. Returns False (and records nothing) if over the limit."""
        now = self._clock()
        cutoff = now - self.window_seconds
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if len(hits) >= self.limit:
                return False
            hits.append(now)
            self._recorded += 1
            sweep = self._recorded % PRUNE_EVERY == 0
        if sweep:
            self.prune()
        return True

    def prune(self) -> int:
        """Drop keys with no hits left in the window. Returns how many were dropped."""
        cutoff = self._clock() - self.window_seconds
        with self._lock:
            stale = [k for k, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
            for key in stale:
                del self._hits[key]
        return len(stale)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
