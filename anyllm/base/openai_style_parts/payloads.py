"""Request payload builders for OpenAI-compatible endpoints."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..provider import vendor_options
from .messages import to_openai_messages
from .tools import to_openai_tool_choice, to_openai_tools

_SAMPLING_KEYS = ("temperature", "max_tokens", "top_p")


def build_chat_payload(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Build a ``/chat/completions`` body from canonical chat params.

    Vendor options are merged last so callers can set fields the canonical
    model does not know about (``seed``, ``response_format``...).
    """
    payload: Dict[str, Any] = {
        "model": params["model"],
        "messages": to_openai_messages(params["messages"]),
    }
    for key in _SAMPLING_KEYS:
        if params.get(key) is not None:
            payload[key] = params[key]
    if params.get("tools"):
        payload["tools"] = to_openai_tools(params["tools"])
        choice = to_openai_tool_choice(params.get("tool_choice"))
        if choice is not None:
            payload["tool_choice"] = choice
    payload.update(vendor_options(params))
    return payload


def build_embedding_payload(params: Mapping[str, Any]) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"model": params["model"], "input": list(params["input"])}
    payload.update(vendor_options(params))
    return payload


__all__ = ["build_chat_payload", "build_embedding_payload"]
