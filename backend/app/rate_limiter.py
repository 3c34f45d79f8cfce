"""In-memory per-client rate limiter."""

import threading
import time
from typing import Dict, List


class InMemoryRateLimiter:
    """Thread-safe sliding-window limiter keyed by client."""

    def __init__(self, max_requests: int, window_seconds: int):
        self._max = max(1, int(max_requests))
        self._window = max(1, int(window_seconds))
        self._counters: Dict[str, List[float]] = {}
        self._last_sweep = 0.0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._counters)

    def allow(self, key: str, now: float = None) -> bool:
        now = time.time() if now is None else now
        with self._lock:
            if now - self._last_sweep >= self._window:
                self._sweep(now)
            hits = [t for t in self._counters.get(key, []) if now - t < self._window]
            if len(hits) >= self._max:
                self._counters[key] = hits
                return False
            hits.append(now)
            self._counters[key] = hits
            return True

    def _sweep(self, now: float) -> None:
        # Caller holds the lock; drop clients with no hits inside the window.
        stale = [k for k, hits in self._counters.items() if not hits or now - hits[-1] >= self._window]
        for key in stale:
            del self._counters[key]
        self._last_sweep = now
