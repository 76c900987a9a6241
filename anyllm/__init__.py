"""anyllm package

One canonical request (chat, text generation, embedding) executed against any
supported LLM vendor, with caching, logging, rate limiting, metrics and cost
accounting applied uniformly through a middleware pipeline.

Public API (re-exported):
    - Factory: :func:`create_provider`, :class:`ProviderFactory`, :class:`Provider`
    - Models: :class:`Message` and content parts, responses, :class:`Usage`
    - Middleware: pipeline, contexts and the built-in handlers
    - Backends: :func:`create_cache`, :func:`create_rate_limiter`
    - Pricing: :class:`PricingRegistry`, :class:`ModelPricing`
    - Errors: :class:`ProviderError`, :class:`ErrorCode`, :class:`ValidationError`
"""

from .base.errors import (
    ErrorCode,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
    ValidationError,
)
from .base.models import (
    ChatResponse,
    EmbeddingResponse,
    FileContent,
    FinishReason,
    ImageContent,
    Message,
    Response,
    Role,
    TextContent,
    TextResponse,
    ToolCall,
    Usage,
)
from .config import ProviderConfig, get_provider_config
from .base.cost import ModelPricing, PricingRegistry
from .base.cache import Cache, create_cache
from .base.ratelimit import RateLimiter, create_rate_limiter
from .base.middleware import (
    CachingMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    Middleware,
    MiddlewarePipeline,
    RateLimitMiddleware,
    RequestContext,
    ResponseContext,
)
from .base.log_drivers import LogEntry, LoggerLogDriver, NullLogDriver, SqliteLogDriver
from .base.provider import BaseProvider
from .base.factory import Provider, ProviderFactory, create_provider

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ProviderError",
    "RateLimitError",
    "UnsupportedProviderError",
    "ValidationError",
    "ChatResponse",
    "EmbeddingResponse",
    "FileContent",
    "FinishReason",
    "ImageContent",
    "Message",
    "Response",
    "Role",
    "TextContent",
    "TextResponse",
    "ToolCall",
    "Usage",
    "ProviderConfig",
    "get_provider_config",
    "ModelPricing",
    "PricingRegistry",
    "Cache",
    "create_cache",
    "RateLimiter",
    "create_rate_limiter",
    "CachingMiddleware",
    "LoggingMiddleware",
    "MetricsMiddleware",
    "Middleware",
    "MiddlewarePipeline",
    "RateLimitMiddleware",
    "RequestContext",
    "ResponseContext",
    "LogEntry",
    "LoggerLogDriver",
    "NullLogDriver",
    "SqliteLogDriver",
    "BaseProvider",
    "Provider",
    "ProviderFactory",
    "create_provider",
]
