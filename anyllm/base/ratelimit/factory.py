"""Rate limiter backend selection by driver name."""
from __future__ import annotations

from typing import Any

import redis

from ..errors import ValidationError
from .memory_rate_limiter import MemoryRateLimiter
from .rate_limiter import RateLimiter
from .redis_rate_limiter import RedisRateLimiter
from .sqlite_rate_limiter import SqliteRateLimiter

RATE_LIMIT_DRIVERS = ("memory", "redis", "sqlite")
_ALIASES = {"array": "memory", "database": "sqlite"}


def create_rate_limiter(driver: str = "memory", **config: Any) -> RateLimiter:
    """Build a rate limiter backend.

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
        return MemoryRateLimiter(**config)
    if name == "sqlite":
        return SqliteRateLimiter(**config)
    if name == "redis":
        client = config.pop("client", None)
        url = config.pop("url", "redis://localhost:6379/0")
        if client is None:
            client = redis.Redis.from_url(url)
        return RedisRateLimiter(client, **config)
    raise ValidationError(
        f"Unsupported rate limiter driver: {driver!r}",
        [f"driver must be one of {', '.join(RATE_LIMIT_DRIVERS)}"],
    )


__all__ = ["create_rate_limiter", "RATE_LIMIT_DRIVERS"]
