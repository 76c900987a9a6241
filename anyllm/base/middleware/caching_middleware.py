"""Response caching middleware.

Cache key
---------
``"llm:" + md5(canonical_json({provider, model, method, params}))`` where the
canonical JSON uses sorted keys and compact separators, so two requests with
equal parameters always map to the same entry regardless of dict ordering.

Only ``chat``, ``generate_text`` and ``embed`` are cached; other methods pass
straight through without annotation. Only successful results are stored, as
``{"response", "cached_at"}`` entries; the response may be a canonical
``Response`` or a raw payload and is served back as stored.
Cache backend errors propagate to the caller.
"""
from __future__ import annotations

import hashlib
import logging
import time
from typing import Any, Dict, FrozenSet, Mapping, Optional

from ...config.defaults import CACHE_DEFAULT_TTL_SECONDS, CACHE_KEY_PREFIX
from ..cache.cache_protocol import Cache
from ..logging import get_logger, log_event
from ..log_support import LogContext
from .canonical import canonical_json
from .middleware_base import Handler, Middleware
from .request_context import RequestContext
from .response_context import ResponseContext
from .single_flight import SingleFlight

CACHEABLE_METHODS: FrozenSet[str] = frozenset({"chat", "generate_text", "embed"})

_logger = get_logger("anyllm.middleware.cache")


def cache_key(ctx: RequestContext) -> str:
    """Deterministic cache key for a request context."""
    payload = {
        "provider": ctx.provider,
        "model": ctx.model,
        "method": ctx.method,
        "params": ctx.params,
    }
    digest = hashlib.md5(canonical_json(payload).encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest}"


class CachingMiddleware(Middleware):
    """Serve repeated identical requests from a :class:`Cache`.

    Parameters
    ----------
    cache: Cache
        Backend storing ``{"response", "cached_at"}`` entries.
    ttl: int
        Entry lifetime in seconds.
    enabled: bool
        When ``False`` every request passes through untouched.
    single_flight: bool
        Coalesce concurrent identical misses in this process: one caller runs
        the request and the others receive its result annotated as cached.
    """

    def __init__(
        self,
        cache: Cache,
        ttl: int = CACHE_DEFAULT_TTL_SECONDS,
        enabled: bool = True,
        single_flight: bool = False,
    ) -> None:
        self.cache = cache
        self.ttl = ttl
        self.enabled = enabled
        self._flights: Optional[SingleFlight] = SingleFlight() if single_flight else None

    def enable(self) -> "CachingMiddleware":
        self.enabled = True
        return self

    def disable(self) -> "CachingMiddleware":
        self.enabled = False
        return self

    def _lookup(self, key: str) -> Optional[Dict[str, Any]]:
        entry = self.cache.get(key)
        if isinstance(entry, Mapping) and entry.get("response") is not None:
            return dict(entry)
        return None

    @staticmethod
    def _hit(ctx: RequestContext, key: str, entry: Dict[str, Any]) -> ResponseContext:
        log_event(
            _logger,
            "cache.hit",
            LogContext.from_request(ctx),
            level=logging.DEBUG,
            cache_key=key,
        )
        return ResponseContext(
            request=ctx,
            response=entry["response"],
            error=None,
            metadata={**ctx.metadata, "cached": True, "cache_key": key, "cached_at": entry.get("cached_at")},
        )

    def _miss(self, ctx: RequestContext, key: str, next_handler: Handler) -> ResponseContext:
        result = next_handler(ctx)
        if result.is_successful():
            self.cache.set(key, {"response": result.response, "cached_at": time.time()}, self.ttl)
        return result.with_metadata("cached", False).with_metadata("cache_key", key)

    def handle(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        if not self.enabled or ctx.method not in CACHEABLE_METHODS:
            return next_handler(ctx)

        key = cache_key(ctx)
        entry = self._lookup(key)
        if entry is not None:
            return self._hit(ctx, key, entry)

        if self._flights is None:
            return self._miss(ctx, key, next_handler)

        result, shared = self._flights.do(
            key,
            lambda: self._miss(ctx, key, next_handler),
            lookup=lambda: self._lookup(key),
        )
        if not shared:
            return result
        if isinstance(result, dict):
            return self._hit(ctx, key, result)
        if result.is_successful():
            return self._hit(ctx, key, {"response": result.response, "cached_at": None})
        return result


__all__ = ["CachingMiddleware", "CACHEABLE_METHODS", "cache_key"]
