"""Thread-based single-flight helper.

Coordinates concurrent calls for the same key so only one thread performs the
work while the others block on the same Future and receive its outcome.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


class SingleFlight(Generic[T]):
    """Per-key call coalescing within one process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._inflight: Dict[str, Future] = {}
        self._finished = 0

    def do(
        self,
        key: str,
        work: Callable[[], T],
        lookup: Optional[Callable[[], Optional[T]]] = None,
    ) -> Tuple[T, bool]:
        """Run ``work`` once per concurrent burst of callers for ``key``.

        ``lookup`` runs outside the lock before a new flight starts. If any
        flight completed while it ran, the lookup is repeated, so a caller
        arriving just after the previous flight finished reuses its stored
        result instead of starting another one.

        Returns ``(value, shared)`` where ``shared`` is ``True`` for callers that
        did not execute ``work`` themselves. Exceptions raised by ``work``
        propagate to every waiting caller.
        """
        while True:
            with self._lock:
                fut = self._inflight.get(key)
                seen = self._finished
            if fut is not None:
                return fut.result(), True
            if lookup is not None:
                found = lookup()
                if found is not None:
                    return found, True
            with self._lock:
                if key not in self._inflight and self._finished == seen:
                    fut = self._inflight[key] = Future()
                    break

        try:
            value = work()
        except BaseException as exc:
            fut.set_exception(exc)
            raise
        else:
            fut.set_result(value)
            return value, False
        finally:
            with self._lock:
                self._inflight.pop(key, None)
                self._finished += 1

    def inflight(self) -> int:
        with self._lock:
            return len(self._inflight)


__all__ = ["SingleFlight"]
