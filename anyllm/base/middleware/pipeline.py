"""Ordered middleware pipeline.

Handlers run in insertion order: the first one added is the outermost and sees
the request first and the result last. The pipeline never reorders handlers.
"""
from __future__ import annotations

import threading
from functools import reduce
from typing import Iterable, List, Optional, Tuple

from .middleware_base import Handler, Middleware
from .request_context import RequestContext
from .response_context import ResponseContext


class MiddlewarePipeline:
    """Composable chain executing middleware around a terminal handler.

    Attributes:
        middleware: Snapshot tuple of the configured handlers, outermost first.
    """

    def __init__(self, middleware: Optional[Iterable[Middleware]] = None) -> None:
        self._items: List[Middleware] = list(middleware or [])
        self._lock = threading.Lock()

    def add(self, middleware: Middleware) -> "MiddlewarePipeline":
        """Append ``middleware`` as the new innermost handler; returns ``self``."""
        with self._lock:
            self._items.append(middleware)
        return self

    @property
    def middleware(self) -> Tuple[Middleware, ...]:
        with self._lock:
            return tuple(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self.middleware)

    def execute(self, ctx: RequestContext, handler: Handler) -> ResponseContext:
        """Run ``ctx`` through every handler and finally ``handler``."""
        chain = reduce(
            lambda nxt, mw: (lambda c, _mw=mw, _nxt=nxt: _mw.handle(c, _nxt)),
            reversed(self.middleware),
            handler,
        )
        return chain(ctx)


__all__ = ["MiddlewarePipeline"]
