"""Cache backend selection by driver name."""
from __future__ import annotations

from typing import Any

import redis

from ..errors import ValidationError
from .cache_protocol import Cache
from .memory_cache import MemoryCache
from .redis_cache import RedisCache
from .sqlite_cache import SqliteCache

CACHE_DRIVERS = ("memory", "redis", "sqlite")
_ALIASES = {"array": "memory", "database": "sqlite"}


def create_cache(driver: str = "memory", **config: Any) -> Cache:
    """Build a cache backend.

    Parameters
    ----------
    driver: str
        ``"memory"``, ``"redis"`` or ``"sqlite"`` (``"array"`` and
        ``"database"`` are accepted aliases).
    **config:
        Backend keyword arguments. For Redis either ``client`` or ``url``
        (default ``redis://localhost:6379/0``) must resolve to a client.

    Raises
    ------
    ValidationError
        When ``driver`` is not a known backend.
    """
    name = _ALIASES.get((driver or "").lower(), (driver or "").lower())
    if name == "memory":
        return MemoryCache(**config)
    if name == "sqlite":
        return SqliteCache(**config)
    if name == "redis":
        client = config.pop("client", None)
        url = config.pop("url", "redis://localhost:6379/0")
        if client is None:
            client = redis.Redis.from_url(url)
        return RedisCache(client, **config)
    raise ValidationError(
        f"Unsupported cache driver: {driver!r}",
        [f"driver must be one of {', '.join(CACHE_DRIVERS)}"],
    )


__all__ = ["create_cache", "CACHE_DRIVERS"]
