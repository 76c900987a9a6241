"""
Request log record written by ``LoggingMiddleware``.

``request`` and ``response`` hold JSON-safe summaries (the response's
``to_dict()`` without the raw vendor payload). ``cost`` is ``None`` when the
model has no known price, ``0.0`` for failed calls.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class LogEntry:
    """One logged provider call."""

    provider: str
    model: str
    method: str
    request: Dict[str, Any] = field(default_factory=dict)
    response: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    duration_ms: float = 0.0
    tokens_used: int = 0
    prompt_tokens: int = 0
    completion_tokens: int = 0
    cost: Optional[float] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    request_id: Optional[str] = None
    created_at: str = field(default_factory=_utc_now)

    @property
    def successful(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "model": self.model,
            "method": self.method,
            "request": self.request,
            "response": self.response,
            "duration_ms": round(self.duration_ms, 3),
            "tokens_used": self.tokens_used,
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "cost": self.cost,
            "metadata": self.metadata,
            "request_id": self.request_id,
            "created_at": self.created_at,
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    @classmethod
    def from_row(cls, row: Any) -> "LogEntry":
        """Rebuild an entry from a ``llm_logs`` row (``sqlite3.Row`` or mapping)."""
        return cls(
            provider=row["provider"],
            model=row["model"],
            method=row["method"],
            request=json.loads(row["request_json"] or "{}"),
            response=json.loads(row["response_json"] or "{}"),
            error=row["error"],
            duration_ms=float(row["duration_ms"]),
            tokens_used=int(row["tokens_used"]),
            prompt_tokens=int(row["prompt_tokens"]),
            completion_tokens=int(row["completion_tokens"]),
            cost=row["cost"],
            metadata=json.loads(row["metadata_json"] or "{}"),
            request_id=row["request_id"],
            created_at=row["created_at"],
        )


__all__ = ["LogEntry"]
