"""Gemini ``generateContent`` translation helpers.

The conversation becomes ``contents`` of ``user``/``model`` turns made of
``parts``; system messages go to ``systemInstruction``; sampling options live
under ``generationConfig``. Tool results are ``functionResponse`` parts, which
need the function name; it is taken from the tool message's ``name`` or looked
up from the assistant tool call with the same id.
"""

from __future__ import annotations

import mimetypes
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..base.models import (
    ChatResponse,
    FileContent,
    FinishReason,
    ImageContent,
    Message,
    Role,
    TextContent,
    ToolCall,
    Usage,
)
from ..base.provider import vendor_options
from ..base.tool_specs import normalize_tools, tool_choice_name

_GENERATION_KEYS = {"temperature": "temperature", "max_tokens": "maxOutputTokens", "top_p": "topP"}


def _part(part: Any) -> Dict[str, Any]:
    if isinstance(part, TextContent):
        return {"text": part.text}
    if isinstance(part, ImageContent) and not part.is_base64:
        mime = mimetypes.guess_type(part.data)[0] or "image/jpeg"
        return {"file_data": {"mime_type": mime, "file_uri": part.data}}
    if isinstance(part, (ImageContent, FileContent)):
        return {"inline_data": {"mime_type": part.media_type, "data": part.data}}
    raise TypeError(f"unsupported content part: {type(part).__name__}")


def to_google_contents(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    contents: List[Dict[str, Any]] = []
    call_names: Dict[str, str] = {}
    for m in messages:
        if m.role is Role.SYSTEM:
            continue
        if m.role is Role.TOOL:
            name = m.name or call_names.get(m.tool_call_id or "", "")
            contents.append(
                {
                    "role": "user",
                    "parts": [{"functionResponse": {"name": name, "response": {"content": m.text_or_joined()}}}],
                }
            )
            continue
        parts = [_part(p) for p in m.parts if not (isinstance(p, TextContent) and not p.text)]
        for tc in m.tool_calls:
            call_names[tc.id] = tc.name
            parts.append({"functionCall": {"name": tc.name, "args": tc.arguments}})
        contents.append({"role": "model" if m.role is Role.ASSISTANT else "user", "parts": parts or [{"text": ""}]})
    return contents


def system_instruction(messages: Sequence[Message]) -> Optional[Dict[str, Any]]:
    texts = [m.text_or_joined() for m in messages if m.role is Role.SYSTEM]
    if not texts:
        return None
    return {"parts": [{"text": "\n\n".join(texts)}]}


def to_google_tool_config(choice: Any) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    if isinstance(choice, str):
        mode = {"auto": "AUTO", "required": "ANY", "any": "ANY", "none": "NONE"}.get(choice)
        return {"functionCallingConfig": {"mode": mode}} if mode else None
    name = tool_choice_name(choice)
    if not name:
        return None
    return {"functionCallingConfig": {"mode": "ANY", "allowedFunctionNames": [name]}}


def build_generate_payload(params: Mapping[str, Any]) -> Dict[str, Any]:
    messages = params["messages"]
    payload: Dict[str, Any] = {"contents": to_google_contents(messages)}
    system = system_instruction(messages)
    if system:
        payload["systemInstruction"] = system
    generation = {wire: params[key] for key, wire in _GENERATION_KEYS.items() if params.get(key) is not None}
    if generation:
        payload["generationConfig"] = generation
    if params.get("tools"):
        payload["tools"] = [{"functionDeclarations": normalize_tools(params["tools"])}]
        config = to_google_tool_config(params.get("tool_choice"))
        if config is not None:
            payload["toolConfig"] = config
    payload.update(vendor_options(params))
    return payload


def parse_generate_response(payload: Mapping[str, Any]) -> ChatResponse:
    """Normalize the first candidate; a body without ``candidates`` is malformed."""
    candidate = payload["candidates"][0]
    parts = (candidate.get("content") or {}).get("parts") or []
    text = "".join(str(p["text"]) for p in parts if "text" in p)
    tool_calls = tuple(
        ToolCall.from_dict(
            {
                "id": p["functionCall"].get("id") or f"call_{i}",
                "name": p["functionCall"].get("name"),
                "arguments": p["functionCall"].get("args"),
            }
        )
        for i, p in enumerate(q for q in parts if "functionCall" in q)
    )
    meta = payload.get("usageMetadata") or {}
    usage = Usage.from_dict(
        {
            "prompt_tokens": meta.get("promptTokenCount"),
            "completion_tokens": meta.get("candidatesTokenCount"),
            "total_tokens": meta.get("totalTokenCount"),
        }
    )
    finish = FinishReason.parse(candidate.get("finishReason"))
    if tool_calls and finish in (None, FinishReason.STOP):
        finish = FinishReason.TOOL_CALLS
    return ChatResponse(
        id=payload.get("responseId"),
        model=str(payload.get("modelVersion") or ""),
        usage=usage,
        raw=dict(payload),
        content=text,
        tool_calls=tool_calls,
        finish_reason=finish,
    )


__all__ = [
    "to_google_contents",
    "system_instruction",
    "to_google_tool_config",
    "build_generate_payload",
    "parse_generate_response",
]
