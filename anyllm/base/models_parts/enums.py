"""
Role and finish-reason enumerations shared by messages and responses.

Values are the lowercase wire strings used by the OpenAI-compatible family;
adapters for other vendors map their own vocabulary onto these members.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Conversation role of a message author."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FinishReason(str, Enum):
    """Normalized reason a completion stopped producing output."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    FUNCTION_CALL = "function_call"

    @classmethod
    def parse(cls, value: object) -> Optional["FinishReason"]:
        """Map a vendor finish reason onto a member; unknown values yield ``None``."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        aliases = {
            "end_turn": cls.STOP,
            "stop_sequence": cls.STOP,
            "max_tokens": cls.LENGTH,
            "tool_use": cls.TOOL_CALLS,
            "safety": cls.CONTENT_FILTER,
        }
        if text in aliases:
            return aliases[text]
        try:
            return cls(text)
        except ValueError:
            return None


__all__ = ["Role", "FinishReason"]
