"""
Normalized error codes (taxonomy).

Every failure that leaves an adapter, the rate limiter or a middleware handler
carries one of these codes. The string values end up in log entries and metrics,
so they must not be renamed.

Retryable codes
---------------
``TRANSIENT``, ``RATE_LIMIT``, ``TIMEOUT`` and ``UNAVAILABLE`` describe
conditions expected to clear on their own; the adapter retry policy only
re-issues requests failing with one of them.
"""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet


class ErrorCode(str, Enum):
    """Failure categories shared by every vendor adapter."""

    # Caller-side problems
    AUTH = "auth"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNSUPPORTED = "unsupported"

    # Vendor or network conditions
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    UNAVAILABLE = "unavailable"
    SERVER_ERROR = "server_error"

    # The vendor answered, but not in a shape the adapter understands
    BAD_RESPONSE = "bad_response"
    UNKNOWN = "unknown"

    @property
    def is_retryable(self) -> bool:
        return self in RETRYABLE_CODES


RETRYABLE_CODES: FrozenSet[ErrorCode] = frozenset(
    {ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE}
)


__all__ = ["ErrorCode", "RETRYABLE_CODES"]
