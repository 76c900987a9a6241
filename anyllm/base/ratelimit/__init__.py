"""Fixed-window rate limiting with memory, Redis and SQLite backends."""

from .rate_limit_result import RateLimitResult
from .rate_limiter import RateLimiter
from .memory_rate_limiter import MemoryRateLimiter
from .redis_rate_limiter import RedisRateLimiter
from .sqlite_rate_limiter import SqliteRateLimiter
from .factory import RATE_LIMIT_DRIVERS, create_rate_limiter

__all__ = [
    "RateLimiter",
    "RateLimitResult",
    "MemoryRateLimiter",
    "RedisRateLimiter",
    "SqliteRateLimiter",
    "create_rate_limiter",
    "RATE_LIMIT_DRIVERS",
]
