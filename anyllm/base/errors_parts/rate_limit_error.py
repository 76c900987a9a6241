"""
Rate limit exhaustion error.

Raised by ``RateLimiter.attempt`` (and therefore by ``RateLimitMiddleware``)
before the guarded operation runs. Carries the seconds to wait and an
HTTP-429-equivalent status so API layers can map it directly to a response.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError

RATE_LIMIT_STATUS = 429


class RateLimitError(ProviderError):
    """Attempts for a rate-limit key are exhausted for the current window.

    Attributes:
        retry_after: Whole seconds until the window resets.
        key: Rate-limit key that was exhausted.
    """

    def __init__(
        self,
        message: str,
        *,
        retry_after: int,
        key: Optional[str] = None,
        provider: str = "ratelimit",
        model: Optional[str] = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.RATE_LIMIT,
            message=message,
            provider=provider,
            model=model,
            retryable=True,
            status_code=RATE_LIMIT_STATUS,
        )
        self.retry_after = retry_after
        self.key = key


__all__ = ["RateLimitError", "RATE_LIMIT_STATUS"]
