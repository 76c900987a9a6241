"""Embedding vectors response."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .response import Response


@dataclass(frozen=True)
class EmbeddingResponse(Response):
    """One vector per input, in input order."""

    embeddings: List[List[float]] = field(default_factory=list)

    def first(self) -> Optional[List[float]]:
        return self.embeddings[0] if self.embeddings else None

    @property
    def dimensions(self) -> int:
        return len(self.embeddings[0]) if self.embeddings else 0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["count"] = len(self.embeddings)
        data["dimensions"] = self.dimensions
        return data


__all__ = ["EmbeddingResponse"]
