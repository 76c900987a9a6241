"""
anyllm base package.

Provider-agnostic building blocks: the canonical models, the error taxonomy and
structured logging. Heavier layers (provider, middleware, cache, rate limiter)
are imported from their own subpackages so importing ``anyllm.config`` never
pulls in the adapters.
"""

from .errors import ErrorCode, ProviderError, RateLimitError, UnsupportedProviderError, ValidationError
from .logging import LogContext, configure_logger, get_logger, log_event
from .models import (
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

__all__ = [
    "ErrorCode",
    "ProviderError",
    "RateLimitError",
    "UnsupportedProviderError",
    "ValidationError",
    "LogContext",
    "configure_logger",
    "get_logger",
    "log_event",
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
]
