"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``anyllm.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.rate_limit_error import RATE_LIMIT_STATUS, RateLimitError
from .errors_parts.validation_error import UnsupportedProviderError, ValidationError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception

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
