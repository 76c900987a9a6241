"""Plain text content part."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class TextContent:
    """A text segment of a multi-part message."""

    text: str

    @property
    def type(self) -> str:
        return "text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


__all__ = ["TextContent"]
