"""
Request context flowing through the middleware pipeline.

Contexts are treated as values: the ``with_*`` helpers return copies and never
touch the original, so a handler cannot change what handlers further out
observe.
"""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict

from .canonical import to_jsonable


@dataclass
class RequestContext:
    """One canonical call on its way to a provider.

    Attributes:
        provider: Provider key (``"openai"``, ``"anthropic"``...).
        model: Target model identifier.
        method: Operation name (``"chat"``, ``"generate_text"``, ``"embed"``).
        params: Canonical request parameters (messages, sampling options...).
        metadata: Free-form annotations (``user_id``, tags...).
        start_time: ``time.perf_counter()`` reading at creation.
        request_id: Correlation identifier shared by all log events of the call.
    """

    provider: str
    model: str
    method: str
    params: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: float = field(default_factory=time.perf_counter)
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def with_metadata(self, key: str, value: Any) -> "RequestContext":
        return replace(self, params=dict(self.params), metadata={**self.metadata, key: value})

    def with_params(self, params: Dict[str, Any]) -> "RequestContext":
        return replace(self, params=dict(params), metadata=dict(self.metadata))

    def with_model(self, model: str) -> "RequestContext":
        return replace(self, model=model, params=dict(self.params), metadata=dict(self.metadata))

    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request_id": self.request_id,
            "provider": self.provider,
            "model": self.model,
            "method": self.method,
            "params": to_jsonable(self.params),
            "metadata": to_jsonable(self.metadata),
        }


__all__ = ["RequestContext"]
