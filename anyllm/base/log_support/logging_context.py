"""Per-call structured logging context.

Every event emitted while serving one request (adapter HTTP events, cache hits,
rate-limit denials, request log entries) shares the same identifying fields;
:class:`LogContext` carries them so call sites only add what is specific to the
event.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Identifying fields of one provider call plus free-form extras."""

    provider: Optional[str] = None
    model: Optional[str] = None
    method: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_request(cls, ctx: Any, provider: Optional[str] = None) -> "LogContext":
        """Build from anything exposing ``provider/model/method/request_id``.

        ``provider`` overrides the value read from ``ctx`` (adapters log under
        their own name).
        """
        return cls(
            provider=provider or getattr(ctx, "provider", None),
            model=getattr(ctx, "model", None),
            method=getattr(ctx, "method", None),
            request_id=getattr(ctx, "request_id", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
