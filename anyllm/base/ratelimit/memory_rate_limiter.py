"""
In-process rate limiter.

Windows live in a dict guarded by one ``threading.RLock``; every public
operation, including the check-and-increment used by ``attempt``, runs under
the lock. An expired window is dropped when its key is next touched; windows
of keys nobody touches again are removed by a full sweep at most once per
``sweep_interval`` seconds.
"""
from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .rate_limiter import RateLimiter

DEFAULT_SWEEP_INTERVAL_SECONDS = 60.0


@dataclass
class _Window:
    attempts: int
    reset_at: float


class MemoryRateLimiter(RateLimiter):
    """Thread-safe in-memory fixed-window limiter.

    Parameters
    ----------
    clock: Callable[[], float]
        Time source in epoch seconds (injectable for tests).
    sweep_interval: float
        Minimum seconds between full sweeps of expired windows.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.RLock()
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval

    def __len__(self) -> int:
        """Number of tracked windows, including expired ones not yet dropped."""
        with self._lock:
            return len(self._windows)

    def _live(self, key: str, now: float) -> Optional[_Window]:
        """Return the active window for ``key``, dropping it when expired."""
        if now >= self._next_sweep:
            self._sweep(now)
        window = self._windows.get(key)
        if window is not None and window.reset_at <= now:
            del self._windows[key]
            return None
        return window

    def _sweep(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if w.reset_at <= now]
        for k in expired:
            del self._windows[k]
        self._next_sweep = now + self._sweep_interval

    def hit(self, key: str, decay_seconds: int = 60) -> int:
        with self._lock:
            now = self._clock()
            window = self._live(key, now)
            if window is None:
                window = self._windows[key] = _Window(attempts=0, reset_at=now + decay_seconds)
            window.attempts += 1
            return window.attempts

    def attempts(self, key: str) -> int:
        with self._lock:
            window = self._live(key, self._clock())
            return window.attempts if window else 0

    def _reserve(self, key: str, max_attempts: int, decay_seconds: int) -> Optional[int]:
        with self._lock:
            if self.too_many_attempts(key, max_attempts):
                return None
            return self.hit(key, decay_seconds)

    def available_in(self, key: str) -> int:
        with self._lock:
            now = self._clock()
            window = self._live(key, now)
            if window is None:
                return 0
            return max(0, math.ceil(window.reset_at - now))

    def clear(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def reset_all(self) -> None:
        with self._lock:
            self._windows.clear()


__all__ = ["MemoryRateLimiter", "DEFAULT_SWEEP_INTERVAL_SECONDS"]
