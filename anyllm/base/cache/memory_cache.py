"""
In-process cache backend.

Entries live in a dict guarded by a ``threading.RLock``; expiry is checked on
access. Values are stored by reference (no copy, no serialization).
"""
from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

_MISSING = object()


class MemoryCache:
    """Thread-safe dict cache with lazy TTL expiry.

    Parameters
    ----------
    default_ttl: Optional[int]
        TTL applied when ``set`` is called without one; ``None`` keeps
        entries until deleted.
    clock: Callable[[], float]
        Time source in epoch seconds (injectable for tests).
    """

    def __init__(self, default_ttl: Optional[int] = None, clock: Callable[[], float] = time.time) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}
        self._lock = threading.RLock()

    def _lookup(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return _MISSING
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._entries[key]
            return _MISSING
        return value

    def has(self, key: str) -> bool:
        with self._lock:
            return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            value = self._lookup(key)
            return default if value is _MISSING else value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store ``value``; a non-positive TTL removes the key instead."""
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            if ttl is not None and ttl <= 0:
                self._entries.pop(key, None)
                return
            expires_at = None if ttl is None else self._clock() + ttl
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            now = self._clock()
            return sum(1 for _, exp in self._entries.values() if exp is None or exp > now)


__all__ = ["MemoryCache"]
