"""Response parsing for OpenAI-compatible payloads.

Missing fields degrade to defaults (empty content, zero usage); a payload
without ``choices`` or ``data`` is a malformed response and raises ``KeyError``
so the caller can classify it as ``BAD_RESPONSE``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from ..models import ChatResponse, EmbeddingResponse, FinishReason, ToolCall, Usage


def _text(content: Any) -> str:
    """Message content may be a string or a list of ``{type: text}`` parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            str(p.get("text", "")) for p in content if isinstance(p, Mapping) and p.get("type") in (None, "text")
        )
    return ""


def parse_chat_response(payload: Mapping[str, Any]) -> ChatResponse:
    choice = payload["choices"][0]
    message = choice.get("message") or {}
    return ChatResponse(
        id=payload.get("id"),
        model=str(payload.get("model") or ""),
        usage=Usage.from_dict(payload.get("usage")),
        raw=dict(payload),
        content=_text(message.get("content")),
        tool_calls=tuple(ToolCall.from_dict(tc) for tc in message.get("tool_calls") or ()),
        finish_reason=FinishReason.parse(choice.get("finish_reason")),
    )


def parse_embedding_response(payload: Mapping[str, Any]) -> EmbeddingResponse:
    data = sorted(payload["data"], key=lambda item: item.get("index", 0))
    vectors: List[List[float]] = [[float(x) for x in item["embedding"]] for item in data]
    return EmbeddingResponse(
        id=payload.get("id"),
        model=str(payload.get("model") or ""),
        usage=Usage.from_dict(payload.get("usage")),
        raw=dict(payload),
        embeddings=vectors,
    )


__all__ = ["parse_chat_response", "parse_embedding_response"]
