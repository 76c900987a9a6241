"""Result object returned by ``RateLimiter.try_attempt``."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a rate-limited call that does not raise when denied.

    Attributes:
        allowed: ``True`` when the operation ran.
        value: Operation return value (``None`` when denied).
        retry_after: Seconds until the window resets (0 when allowed).
        remaining: Attempts left in the current window after this call.
    """

    allowed: bool
    value: Any = None
    retry_after: int = 0
    remaining: int = 0

    def __bool__(self) -> bool:
        return self.allowed


__all__ = ["RateLimitResult"]
