"""Canonical messages -> OpenAI Chat Completions ``messages`` array."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from ..models import FileContent, ImageContent, Message, Role, TextContent


def _content_part(part: Any) -> Dict[str, Any]:
    if isinstance(part, TextContent):
        return {"type": "text", "text": part.text}
    if isinstance(part, ImageContent):
        return {"type": "image_url", "image_url": {"url": part.data_url()}}
    if isinstance(part, FileContent):
        return {"type": "file", "file": {"filename": part.filename, "file_data": part.data_url()}}
    raise TypeError(f"unsupported content part: {type(part).__name__}")


def to_openai_message(message: Message) -> Dict[str, Any]:
    """Render one message.

    Plain-text content stays a string; multi-part content becomes a list of
    typed parts. Assistant tool calls carry JSON-encoded argument strings.
    """
    out: Dict[str, Any] = {"role": message.role.value}
    if isinstance(message.content, str):
        out["content"] = message.content
    else:
        out["content"] = [_content_part(p) for p in message.content]
    if message.name:
        out["name"] = message.name
    if message.role is Role.TOOL:
        out["tool_call_id"] = message.tool_call_id
        out["content"] = message.text_or_joined()
    if message.tool_calls:
        out["tool_calls"] = [
            {
                "id": tc.id,
                "type": "function",
                "function": {"name": tc.name, "arguments": json.dumps(tc.arguments)},
            }
            for tc in message.tool_calls
        ]
        if not out["content"]:
            out["content"] = None
    return out


def to_openai_messages(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    return [to_openai_message(m) for m in messages]


__all__ = ["to_openai_message", "to_openai_messages"]
