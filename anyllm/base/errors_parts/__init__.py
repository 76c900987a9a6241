"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `anyllm.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .rate_limit_error import RATE_LIMIT_STATUS, RateLimitError
from .validation_error import UnsupportedProviderError, ValidationError
from .classification import RETRYABLE_CODES, classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "RateLimitError",
    "RATE_LIMIT_STATUS",
    "ValidationError",
    "UnsupportedProviderError",
    "RETRYABLE_CODES",
    "classify_exception",
]
