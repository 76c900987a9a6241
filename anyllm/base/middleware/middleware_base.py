"""Base class for pipeline middleware.

A middleware wraps the rest of the chain: it receives the request context and
a ``next_handler`` continuation, and returns a :class:`ResponseContext`. It may
short-circuit by returning without calling ``next_handler`` (cache hit), call
it exactly once, annotate the result, or let exceptions propagate.

Failure modes:
- Exceptions raised by ``next_handler`` must propagate unchanged; a handler may
  record them (logging, metrics) but never turns a failure into a success.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from .request_context import RequestContext
from .response_context import ResponseContext

Handler = Callable[[RequestContext], ResponseContext]


class Middleware(ABC):
    """Chain-of-responsibility handler around an outbound provider call."""

    @abstractmethod
    def handle(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        """Process ``ctx``, usually by delegating to ``next_handler``.

        Parameters:
            ctx: Request context for the current provider operation.
            next_handler: Continuation running the remaining handlers and,
                innermost, the provider call itself.

        Returns:
            The (possibly annotated) response context.
        """

    def __call__(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        return self.handle(ctx, next_handler)


__all__ = ["Middleware", "Handler"]
