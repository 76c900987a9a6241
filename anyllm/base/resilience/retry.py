from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Protocol, TypeVar

from ...config.defaults import (
    DEFAULT_RETRY_DELAY_BASE,
    DEFAULT_RETRY_MAX_ATTEMPTS,
    DEFAULT_RETRY_MAX_DELAY,
)
from ..errors import RETRYABLE_CODES, ErrorCode, ProviderError

T = TypeVar("T")


class AttemptLogger(Protocol):  # pragma: no cover - structural protocol
    def __call__(
        self,
        *,
        attempt: int,
        max_attempts: int,
        delay: float | None,
        error: ProviderError | None,
    ) -> None: ...


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    delay_base: float = DEFAULT_RETRY_DELAY_BASE  # first delay; doubles per attempt
    max_delay: float = DEFAULT_RETRY_MAX_DELAY
    retryable_codes: FrozenSet[ErrorCode] = RETRYABLE_CODES
    attempt_logger: AttemptLogger | None = None
    sleep: Callable[[float], None] = time.sleep

    def delays(self) -> Iterable[float]:
        for attempt in range(max(1, self.max_attempts) - 1):
            yield min(self.max_delay, self.delay_base * (2**attempt))


DEFAULT_RETRY_CONFIG = RetryConfig()


def call_with_retry(func: Callable[[], T], config: RetryConfig = DEFAULT_RETRY_CONFIG) -> T:
    """Invoke ``func`` applying the retry policy in ``config``.

    - Retries only ``ProviderError`` whose code is in ``retryable_codes``
    - Exponential backoff capped at ``max_delay``
    - The last error is re-raised unchanged
    """
    schedule = list(config.delays()) + [None]  # final attempt has delay None
    for attempt, delay in enumerate(schedule):
        try:
            result = func()
        except ProviderError as e:
            if config.attempt_logger:
                config.attempt_logger(attempt=attempt, max_attempts=config.max_attempts, delay=delay, error=e)
            if e.code in config.retryable_codes and delay is not None:
                config.sleep(delay)
                continue
            raise
        if config.attempt_logger:
            config.attempt_logger(attempt=attempt, max_attempts=config.max_attempts, delay=None, error=None)
        return result
    raise RuntimeError("retry: schedule exhausted without result")  # pragma: no cover - unreachable


__all__ = [
    "AttemptLogger",
    "RetryConfig",
    "DEFAULT_RETRY_CONFIG",
    "call_with_retry",
]
