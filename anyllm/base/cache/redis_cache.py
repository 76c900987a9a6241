"""
Redis cache backend.

Values are pickled and written with ``SETEX`` so Redis itself enforces expiry;
fractional TTLs round up to the next whole second.
The client must return raw bytes (do not create it with
``decode_responses=True``). Only point this at a Redis instance you trust:
unpickling executes code embedded in the stored payload.
"""
from __future__ import annotations

import math
import pickle
from typing import Any, Optional

from ...config.defaults import REDIS_CACHE_PREFIX
from ..logging import get_logger

_logger = get_logger("anyllm.cache.redis")
_SCAN_BATCH = 500


class RedisCache:
    """Cache backed by a ``redis.Redis`` client (or any API-compatible client).

    Parameters
    ----------
    client:
        Connected Redis client.
    prefix: str
        Namespace prepended to every key; ``clear`` only removes this namespace.
    default_ttl: Optional[int]
        TTL applied when ``set`` is called without one.
    """

    def __init__(self, client: Any, prefix: str = REDIS_CACHE_PREFIX, default_ttl: Optional[int] = None) -> None:
        self._client = client
        self._prefix = prefix
        self._default_ttl = default_ttl

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def has(self, key: str) -> bool:
        return bool(self._client.exists(self._key(key)))

    def get(self, key: str, default: Any = None) -> Any:
        blob = self._client.get(self._key(key))
        if blob is None:
            return default
        try:
            return pickle.loads(blob)
        except (pickle.UnpicklingError, EOFError, TypeError, AttributeError, ImportError) as exc:
            _logger.warning("dropping undecodable cache entry %s: %s", key, exc)
            self._client.delete(self._key(key))
            return default

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        if ttl is not None and ttl <= 0:
            self._client.delete(self._key(key))
            return
        blob = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        if ttl is None:
            self._client.set(self._key(key), blob)
        else:
            self._client.setex(self._key(key), int(math.ceil(ttl)), blob)

    def delete(self, key: str) -> bool:
        return bool(self._client.delete(self._key(key)))

    def clear(self) -> None:
        batch = []
        for name in self._client.scan_iter(match=f"{self._prefix}*", count=_SCAN_BATCH):
            batch.append(name)
            if len(batch) >= _SCAN_BATCH:
                self._client.delete(*batch)
                batch = []
        if batch:
            self._client.delete(*batch)


__all__ = ["RedisCache"]
