"""
Fixed-window rate limiter contract.

A window is created by the first hit on a key (``attempts=1``,
``reset_at = now + decay_seconds``), counts further hits until ``reset_at``,
and is replaced by a fresh window on the first hit after expiry.

Backends implement the storage primitives (:meth:`hit`, :meth:`attempts`,
:meth:`available_in`, :meth:`clear`, :meth:`reset_all`) and may override
:meth:`_reserve` with a single atomic check-and-increment; the default
composes :meth:`too_many_attempts` and :meth:`hit`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from ..errors import RateLimitError, ValidationError
from .rate_limit_result import RateLimitResult

T = TypeVar("T")


def check_window_args(max_attempts: int, decay_seconds: int) -> None:
    errors = []
    if not isinstance(max_attempts, int) or isinstance(max_attempts, bool) or max_attempts < 0:
        errors.append(f"max_attempts must be a non-negative integer (got: {max_attempts!r})")
    if not isinstance(decay_seconds, (int, float)) or isinstance(decay_seconds, bool) or decay_seconds <= 0:
        errors.append(f"decay_seconds must be positive (got: {decay_seconds!r})")
    if errors:
        raise ValidationError.from_errors("Invalid rate limit window", errors)


class RateLimiter(ABC):
    """Abstract fixed-window limiter keyed by arbitrary strings."""

    # ------------------------------------------------------------------
    # Storage primitives
    # ------------------------------------------------------------------
    @abstractmethod
    def hit(self, key: str, decay_seconds: int = 60) -> int:
        """Atomically increment (or open) the window for ``key``; return the new count."""

    @abstractmethod
    def attempts(self, key: str) -> int:
        """Return the hit count of the active window (0 when none)."""

    @abstractmethod
    def available_in(self, key: str) -> int:
        """Whole seconds (rounded up) until the window resets; 0 when none is active."""

    @abstractmethod
    def clear(self, key: str) -> None:
        """Forget the window for ``key``."""

    @abstractmethod
    def reset_all(self) -> None:
        """Forget every window owned by this limiter."""

    # ------------------------------------------------------------------
    # Derived operations
    # ------------------------------------------------------------------
    def too_many_attempts(self, key: str, max_attempts: int) -> bool:
        return self.attempts(key) >= max_attempts

    def remaining(self, key: str, max_attempts: int) -> int:
        return max(0, max_attempts - self.attempts(key))

    def _reserve(self, key: str, max_attempts: int, decay_seconds: int) -> Optional[int]:
        """Record one attempt unless exhausted; return the new count or ``None``."""
        if self.too_many_attempts(key, max_attempts):
            return None
        return self.hit(key, decay_seconds)

    def attempt(self, key: str, operation: Callable[[], T], max_attempts: int, decay_seconds: int = 60) -> T:
        """Run ``operation`` if ``key`` has attempts left in its window.

        Raises
        ------
        RateLimitError
            When the window is exhausted; ``operation`` is not called.
        """
        check_window_args(max_attempts, decay_seconds)
        if self._reserve(key, max_attempts, decay_seconds) is None:
            retry_after = self.available_in(key)
            raise RateLimitError(
                f"Too many attempts for key '{key}'. Try again in {retry_after} seconds.",
                retry_after=retry_after,
                key=key,
            )
        return operation()

    def try_attempt(
        self,
        key: str,
        operation: Callable[[], T],
        max_attempts: int,
        decay_seconds: int = 60,
    ) -> RateLimitResult:
        """Like :meth:`attempt` but report denial through the result instead of raising."""
        check_window_args(max_attempts, decay_seconds)
        count = self._reserve(key, max_attempts, decay_seconds)
        if count is None:
            return RateLimitResult(allowed=False, retry_after=self.available_in(key), remaining=0)
        value = operation()
        return RateLimitResult(allowed=True, value=value, remaining=max(0, max_attempts - count))


__all__ = ["RateLimiter", "check_window_args"]
