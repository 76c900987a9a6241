"""Resilience helpers (retry policy)."""

from .retry import DEFAULT_RETRY_CONFIG, RetryConfig, call_with_retry

__all__ = ["RetryConfig", "DEFAULT_RETRY_CONFIG", "call_with_retry"]
