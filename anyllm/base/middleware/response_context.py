"""Response context returned by every middleware handler."""
from __future__ import annotations

import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from .canonical import to_jsonable
from .request_context import RequestContext


@dataclass(frozen=True)
class ResponseContext:
    """Result of a pipeline execution.

    Attributes:
        request: Context of the request that produced this result.
        response: Canonical provider response (``None`` on failure).
        error: Failure description when the call did not succeed.
        metadata: Annotations added by handlers (``cached``, ``rate_limit_remaining``...).
        finished_at: ``time.perf_counter()`` reading when the result was produced.

    ``with_metadata`` and ``with_response`` return new contexts; the metadata
    dict of an existing context is never mutated.
    """

    request: RequestContext
    response: Optional[Any] = None
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    finished_at: float = field(default_factory=time.perf_counter)

    def is_successful(self) -> bool:
        return self.error is None and self.response is not None

    def is_failed(self) -> bool:
        return not self.is_successful()

    def with_metadata(self, key: str, value: Any) -> "ResponseContext":
        return replace(self, metadata={**self.metadata, key: value})

    def with_response(self, response: Any) -> "ResponseContext":
        return replace(self, response=response, metadata=dict(self.metadata))

    def duration_ms(self) -> float:
        return max(0.0, (self.finished_at - self.request.start_time) * 1000)

    def to_dict(self) -> Dict[str, Any]:
        summary = self.response.to_dict() if hasattr(self.response, "to_dict") else to_jsonable(self.response)
        return {
            "request": self.request.to_dict(),
            "response": summary,
            "error": self.error,
            "metadata": to_jsonable(self.metadata),
            "duration_ms": round(self.duration_ms(), 3),
        }


__all__ = ["ResponseContext"]
