"""Request logging middleware.

Times the rest of the chain and writes one :class:`LogEntry` per call to the
configured driver. Failures are logged with zero usage and ``cost=0.0`` and
the original exception is re-raised unchanged.
"""
from __future__ import annotations

import time
from typing import Any, Dict, Optional

from ..cost import PricingRegistry
from ..errors import ProviderError
from ..log_drivers import LogDriver, LogEntry
from ..logging import get_logger
from ..models import Response
from .canonical import to_jsonable
from .middleware_base import Handler, Middleware
from .request_context import RequestContext
from .response_context import ResponseContext

_logger = get_logger("anyllm.middleware.logging")


def _response_summary(response: Any) -> Dict[str, Any]:
    if isinstance(response, Response):
        return response.to_dict()
    if response is None:
        return {}
    value = to_jsonable(response)
    return value if isinstance(value, dict) else {"value": value}


class LoggingMiddleware(Middleware):
    """Write a log entry for every call passing through the pipeline.

    Parameters
    ----------
    driver: LogDriver
        Destination for entries (logger, SQLite table, null...).
    pricing: Optional[PricingRegistry]
        Used to price successful calls; without it ``cost`` is ``None``.
    """

    def __init__(self, driver: LogDriver, pricing: Optional[PricingRegistry] = None) -> None:
        self.driver = driver
        self.pricing = pricing

    def _cost(self, ctx: RequestContext, prompt: int, completion: int) -> Optional[float]:
        if self.pricing is None:
            return None
        return self.pricing.calculate_cost(ctx.provider, ctx.model, prompt, completion)

    def handle(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        started = time.perf_counter()
        try:
            result = next_handler(ctx)
        except Exception as exc:
            self._write_failure(ctx, exc, (time.perf_counter() - started) * 1000)
            raise
        self._write_result(ctx, result, (time.perf_counter() - started) * 1000)
        return result

    def _write_result(self, ctx: RequestContext, result: ResponseContext, duration_ms: float) -> None:
        response = result.response
        usage = response.usage if isinstance(response, Response) else None
        prompt = usage.prompt_tokens if usage else 0
        completion = usage.completion_tokens if usage else 0
        if result.is_successful():
            cost = self._cost(ctx, prompt, completion)
        else:
            cost = 0.0
        entry = LogEntry(
            provider=ctx.provider,
            model=ctx.model,
            method=ctx.method,
            request=to_jsonable(ctx.params),
            response=_response_summary(response),
            error=result.error,
            duration_ms=duration_ms,
            tokens_used=usage.total_tokens if usage else 0,
            prompt_tokens=prompt,
            completion_tokens=completion,
            cost=cost,
            metadata=to_jsonable({**ctx.metadata, **result.metadata}),
            request_id=ctx.request_id,
        )
        self.driver.write(entry)

    @staticmethod
    def _failure_metadata(ctx: RequestContext, exc: BaseException) -> Dict[str, Any]:
        meta = {**ctx.metadata, "error_type": type(exc).__name__}
        if isinstance(exc, ProviderError):
            meta["error"] = exc.to_dict()
        return meta

    def _write_failure(self, ctx: RequestContext, exc: BaseException, duration_ms: float) -> None:
        entry = LogEntry(
            provider=ctx.provider,
            model=ctx.model,
            method=ctx.method,
            request=to_jsonable(ctx.params),
            response={},
            error=str(exc) or type(exc).__name__,
            duration_ms=duration_ms,
            cost=0.0,
            metadata=to_jsonable(self._failure_metadata(ctx, exc)),
            request_id=ctx.request_id,
        )
        try:
            self.driver.write(entry)
        except Exception:  # the provider failure is the one surfaced to the caller
            _logger.exception("log driver failed while recording an error entry")


__all__ = ["LoggingMiddleware"]
