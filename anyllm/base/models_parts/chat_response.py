"""Chat completion response."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .enums import FinishReason
from .response import Response
from .tool_call import ToolCall


@dataclass(frozen=True)
class ChatResponse(Response):
    """Assistant reply to a chat request.

    Attributes:
        content: Assistant text (empty when the reply is only tool calls).
        tool_calls: Tool invocations requested by the model.
        finish_reason: Normalized stop reason, ``None`` when unknown.
    """

    content: str = ""
    tool_calls: Tuple[ToolCall, ...] = ()
    finish_reason: Optional[FinishReason] = None

    def __post_init__(self) -> None:
        if not isinstance(self.tool_calls, tuple):
            object.__setattr__(self, "tool_calls", tuple(self.tool_calls))

    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["content"] = self.content
        data["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        data["finish_reason"] = self.finish_reason.value if self.finish_reason else None
        return data


__all__ = ["ChatResponse"]
