"""Middleware pipeline public surface.

Exports the pipeline, the context value objects, the middleware base class and
the built-in handlers (caching, logging, rate limiting, metrics).
"""

from .request_context import RequestContext
from .response_context import ResponseContext
from .middleware_base import Handler, Middleware
from .pipeline import MiddlewarePipeline
from .caching_middleware import CACHEABLE_METHODS, CachingMiddleware, cache_key
from .logging_middleware import LoggingMiddleware
from .rate_limit_middleware import RateLimitMiddleware
from .metrics_middleware import MetricsMiddleware
from .single_flight import SingleFlight

__all__ = [
    "RequestContext",
    "ResponseContext",
    "Handler",
    "Middleware",
    "MiddlewarePipeline",
    "CachingMiddleware",
    "CACHEABLE_METHODS",
    "cache_key",
    "LoggingMiddleware",
    "RateLimitMiddleware",
    "MetricsMiddleware",
    "SingleFlight",
]
