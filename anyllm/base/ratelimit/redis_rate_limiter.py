"""
Redis rate limiter.

``hit`` is a single server-side Lua ``EVAL`` (INCR, plus EXPIRE when the key is
new or lost its TTL), so concurrent callers across processes never race
between the increment and the expiry. ``attempt`` uses a second script that
checks the limit and increments in the same atomic step.
"""
from __future__ import annotations

import math
from typing import Any, Optional

from ...config.defaults import REDIS_RATE_LIMIT_PREFIX
from .rate_limiter import RateLimiter

HIT_SCRIPT = """
local c = redis.call('INCR', KEYS[1])
if c == 1 or redis.call('TTL', KEYS[1]) < 0 then
  redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return c
"""

RESERVE_SCRIPT = """
local c = tonumber(redis.call('GET', KEYS[1]) or '0')
if c >= tonumber(ARGV[2]) then
  return -1
end
c = redis.call('INCR', KEYS[1])
if c == 1 or redis.call('TTL', KEYS[1]) < 0 then
  redis.call('EXPIRE', KEYS[1], ARGV[1])
end
return c
"""

_SCAN_BATCH = 500


class RedisRateLimiter(RateLimiter):
    """Fixed-window limiter stored in Redis counters with native expiry.

    Parameters
    ----------
    client:
        ``redis.Redis`` (or API-compatible) client.
    prefix: str
        Namespace for limiter keys; ``reset_all`` only removes this namespace.
    """

    def __init__(self, client: Any, prefix: str = REDIS_RATE_LIMIT_PREFIX) -> None:
        self._client = client
        self._prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def hit(self, key: str, decay_seconds: int = 60) -> int:
        return int(self._client.eval(HIT_SCRIPT, 1, self._key(key), int(math.ceil(decay_seconds))))

    def _reserve(self, key: str, max_attempts: int, decay_seconds: int) -> Optional[int]:
        count = int(
            self._client.eval(RESERVE_SCRIPT, 1, self._key(key), int(math.ceil(decay_seconds)), max_attempts)
        )
        return None if count < 0 else count

    def attempts(self, key: str) -> int:
        value = self._client.get(self._key(key))
        if value is None:
            return 0
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    def available_in(self, key: str) -> int:
        ttl_ms = self._client.pttl(self._key(key))
        if ttl_ms is None or ttl_ms < 0:
            return 0
        return int(math.ceil(ttl_ms / 1000))

    def clear(self, key: str) -> None:
        self._client.delete(self._key(key))

    def reset_all(self) -> None:
        batch = []
        for name in self._client.scan_iter(match=f"{self._prefix}*", count=_SCAN_BATCH):
            batch.append(name)
            if len(batch) >= _SCAN_BATCH:
                self._client.delete(*batch)
                batch = []
        if batch:
            self._client.delete(*batch)


__all__ = ["RedisRateLimiter", "HIT_SCRIPT", "RESERVE_SCRIPT"]
