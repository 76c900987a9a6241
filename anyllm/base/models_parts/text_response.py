"""Single-prompt text generation response."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .enums import FinishReason
from .response import Response


@dataclass(frozen=True)
class TextResponse(Response):
    """Generated text for a plain prompt."""

    text: str = ""
    finish_reason: Optional[FinishReason] = None

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["text"] = self.text
        data["finish_reason"] = self.finish_reason.value if self.finish_reason else None
        return data


__all__ = ["TextResponse"]
