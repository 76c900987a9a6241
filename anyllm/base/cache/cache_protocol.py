"""
Cache contract consumed by ``CachingMiddleware``.

Backends own expiry: an expired entry must never be returned as a hit. There is
no background eviction; entries are purged lazily when touched.
"""
from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Cache(Protocol):
    """Key/value store with optional per-entry TTL (seconds)."""

    def has(self, key: str) -> bool:  # pragma: no cover - interface
        ...

    def get(self, key: str, default: Any = None) -> Any:  # pragma: no cover - interface
        ...

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:  # pragma: no cover - interface
        ...

    def delete(self, key: str) -> bool:  # pragma: no cover - interface
        ...

    def clear(self) -> None:  # pragma: no cover - interface
        ...


__all__ = ["Cache"]
