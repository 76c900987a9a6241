"""
Structured provider error exception type.

Wraps vendor and transport failures with a normalized `ErrorCode` so the
middleware chain, retry policy and log drivers can treat every vendor alike.
Provider errors travel through the pipeline unchanged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        retryable: Hint for the adapter retry policy (not authoritative).
        status_code: HTTP status returned by the vendor, when there was one.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    status_code: Optional[int] = None
    raw: Optional[Exception] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe summary for log entries (``raw`` is left out)."""
        data = {
            "code": self.code.value,
            "message": self.message,
            "provider": self.provider,
            "model": self.model,
            "retryable": self.retryable,
            "status_code": self.status_code,
        }
        return {k: v for k, v in data.items() if v is not None}

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]
