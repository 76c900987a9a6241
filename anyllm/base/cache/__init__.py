"""Cache abstraction and backends used by ``CachingMiddleware``."""

from .cache_protocol import Cache
from .memory_cache import MemoryCache
from .redis_cache import RedisCache
from .sqlite_cache import SqliteCache
from .factory import CACHE_DRIVERS, create_cache

__all__ = [
    "Cache",
    "MemoryCache",
    "RedisCache",
    "SqliteCache",
    "create_cache",
    "CACHE_DRIVERS",
]
