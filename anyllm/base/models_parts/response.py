"""
Base response DTO shared by chat, text and embedding results.

The ``raw`` vendor payload is kept for diagnostics but is excluded from
``to_dict`` so log entries and cache summaries never carry large vendor object
graphs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .usage import Usage


@dataclass(frozen=True)
class Response:
    """Fields common to every normalized provider response.

    Attributes:
        id: Vendor response identifier, when one was returned.
        model: Model that actually served the request.
        usage: Normalized token usage (zeros when the vendor omits it).
        raw: Decoded vendor payload, for diagnostics only.
        error: Vendor-reported error text for partially failed responses.
    """

    id: Optional[str] = None
    model: str = ""
    usage: Usage = field(default_factory=Usage)
    raw: Optional[Any] = field(default=None, compare=False, repr=False)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary (``raw`` omitted)."""
        data: Dict[str, Any] = {
            "type": type(self).__name__,
            "id": self.id,
            "model": self.model,
            "usage": self.usage.to_dict(),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


__all__ = ["Response"]
