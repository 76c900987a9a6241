"""Rate limiting middleware.

Key format: ``<prefix>:<provider>:<model>[:<user_id>]`` where ``user_id`` comes
from request metadata when present. The rest of the chain runs through
``RateLimiter.attempt``, so an exhausted key raises
:class:`~anyllm.base.errors.RateLimitError` without reaching the provider.
"""
from __future__ import annotations

import copy
import logging

from ...config.defaults import (
    RATE_LIMIT_DEFAULT_DECAY_SECONDS,
    RATE_LIMIT_DEFAULT_KEY_PREFIX,
    RATE_LIMIT_DEFAULT_MAX_ATTEMPTS,
)
from ..errors import RateLimitError
from ..log_support import LogContext
from ..logging import get_logger, log_event
from ..ratelimit import RateLimiter
from .middleware_base import Handler, Middleware
from .request_context import RequestContext
from .response_context import ResponseContext

_logger = get_logger("anyllm.middleware.ratelimit")


class RateLimitMiddleware(Middleware):
    """Limit calls per provider/model (and per user when known)."""

    def __init__(
        self,
        limiter: RateLimiter,
        max_attempts: int = RATE_LIMIT_DEFAULT_MAX_ATTEMPTS,
        decay_seconds: int = RATE_LIMIT_DEFAULT_DECAY_SECONDS,
        key_prefix: str = RATE_LIMIT_DEFAULT_KEY_PREFIX,
    ) -> None:
        self.limiter = limiter
        self.max_attempts = max_attempts
        self.decay_seconds = decay_seconds
        self.key_prefix = key_prefix

    def key_for(self, ctx: RequestContext) -> str:
        parts = [self.key_prefix, ctx.provider, ctx.model]
        user_id = ctx.metadata.get("user_id")
        if user_id is not None:
            parts.append(str(user_id))
        return ":".join(parts)

    def with_key_prefix(self, prefix: str) -> "RateLimitMiddleware":
        clone = copy.copy(self)
        clone.key_prefix = prefix
        return clone

    def handle(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        key = self.key_for(ctx)
        try:
            result = self.limiter.attempt(key, lambda: next_handler(ctx), self.max_attempts, self.decay_seconds)
        except RateLimitError as exc:
            if exc.key != key:
                raise
            log_event(
                _logger,
                "ratelimit.denied",
                LogContext.from_request(ctx),
                level=logging.INFO,
                key=key,
                retry_after=exc.retry_after,
            )
            exc.provider = ctx.provider
            exc.model = ctx.model
            raise
        remaining = self.limiter.remaining(key, self.max_attempts)
        return result.with_metadata("rate_limit_remaining", remaining).with_metadata(
            "rate_limit_max", self.max_attempts
        )


__all__ = ["RateLimitMiddleware"]
