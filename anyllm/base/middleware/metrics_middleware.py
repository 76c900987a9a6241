"""In-process request metrics middleware.

Counters are guarded by a ``threading.Lock`` so one instance can be shared by
every thread using the pipeline. Failures are recorded and re-raised.
"""
from __future__ import annotations

import copy
import threading
import time
from typing import Any, Dict

from ..models import Response
from .middleware_base import Handler, Middleware
from .request_context import RequestContext
from .response_context import ResponseContext


def _empty() -> Dict[str, Any]:
    return {
        "total_requests": 0,
        "failed_requests": 0,
        "total_duration_ms": 0.0,
        "total_tokens": 0,
        "by_provider": {},
        "by_method": {},
    }


class MetricsMiddleware(Middleware):
    """Aggregate request counts, latency and token usage."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._metrics: Dict[str, Any] = _empty()

    def handle(self, ctx: RequestContext, next_handler: Handler) -> ResponseContext:
        started = time.perf_counter()
        try:
            result = next_handler(ctx)
        except Exception:
            self._record(ctx, (time.perf_counter() - started) * 1000, tokens=0, failed=True)
            raise
        response = result.response
        tokens = response.usage.total_tokens if isinstance(response, Response) else 0
        self._record(ctx, (time.perf_counter() - started) * 1000, tokens=tokens, failed=result.is_failed())
        return result.with_metadata("metrics_recorded", True)

    def _record(self, ctx: RequestContext, duration_ms: float, tokens: int, failed: bool) -> None:
        with self._lock:
            m = self._metrics
            m["total_requests"] += 1
            m["total_duration_ms"] += duration_ms
            m["total_tokens"] += tokens
            if failed:
                m["failed_requests"] += 1
            prov = m["by_provider"].setdefault(
                ctx.provider, {"requests": 0, "failed": 0, "duration_ms": 0.0, "tokens": 0}
            )
            prov["requests"] += 1
            prov["duration_ms"] += duration_ms
            prov["tokens"] += tokens
            if failed:
                prov["failed"] += 1
            meth = m["by_method"].setdefault(ctx.method, {"requests": 0, "duration_ms": 0.0})
            meth["requests"] += 1
            meth["duration_ms"] += duration_ms

    def snapshot(self) -> Dict[str, Any]:
        """Return a deep copy of the counters plus derived averages."""
        with self._lock:
            data = copy.deepcopy(self._metrics)
        total = data["total_requests"]
        if total:
            data["avg_duration_ms"] = data["total_duration_ms"] / total
            data["success_rate"] = 1 - data["failed_requests"] / total
        else:
            data["avg_duration_ms"] = 0.0
            data["success_rate"] = 1.0
        return data

    def reset(self) -> None:
        with self._lock:
            self._metrics = _empty()


__all__ = ["MetricsMiddleware"]
