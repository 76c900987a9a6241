"""Anthropic Messages API translation helpers.

Purpose:
- Keep ``client.py`` limited to endpoint/header wiring; every mapping between
  the canonical model and the Messages API lives here and is side-effect free.

Mapping notes:
- System messages are hoisted into the top-level ``system`` string.
- Tool results travel as ``tool_result`` blocks inside a user turn; consecutive
  results are merged into one turn.
- Assistant tool calls become ``tool_use`` blocks.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

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
from ..config.defaults import ANTHROPIC_DEFAULT_MAX_TOKENS


def _block(part: Any) -> Dict[str, Any]:
    if isinstance(part, TextContent):
        return {"type": "text", "text": part.text}
    if isinstance(part, ImageContent):
        if part.is_base64:
            source = {"type": "base64", "media_type": part.media_type, "data": part.data}
        else:
            source = {"type": "url", "url": part.data}
        return {"type": "image", "source": source}
    if isinstance(part, FileContent):
        return {
            "type": "document",
            "source": {"type": "base64", "media_type": part.media_type, "data": part.data},
        }
    raise TypeError(f"unsupported content part: {type(part).__name__}")


def split_system(messages: Sequence[Message]) -> Tuple[Optional[str], List[Message]]:
    """Return the joined system prompt and the remaining conversation."""
    system = [m.text_or_joined() for m in messages if m.role is Role.SYSTEM]
    rest = [m for m in messages if m.role is not Role.SYSTEM]
    return ("\n\n".join(system) if system else None), rest


def to_anthropic_messages(messages: Sequence[Message]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for m in messages:
        if m.role is Role.TOOL:
            block = {"type": "tool_result", "tool_use_id": m.tool_call_id, "content": m.text_or_joined()}
            prev = out[-1] if out else None
            if prev and prev["role"] == "user" and all(b.get("type") == "tool_result" for b in prev["content"]):
                prev["content"].append(block)
            else:
                out.append({"role": "user", "content": [block]})
            continue
        if m.tool_calls:
            blocks = [_block(p) for p in m.parts if not (isinstance(p, TextContent) and not p.text)]
            blocks.extend({"type": "tool_use", "id": tc.id, "name": tc.name, "input": tc.arguments} for tc in m.tool_calls)
            out.append({"role": "assistant", "content": blocks})
        elif isinstance(m.content, str):
            out.append({"role": m.role.value, "content": m.content})
        else:
            out.append({"role": m.role.value, "content": [_block(p) for p in m.content]})
    return out


def to_anthropic_tools(tools: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    out = []
    for spec in normalize_tools(tools):
        tool = {"name": spec["name"], "input_schema": spec["parameters"]}
        if spec.get("description"):
            tool["description"] = spec["description"]
        out.append(tool)
    return out


def to_anthropic_tool_choice(choice: Any) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    if isinstance(choice, str):
        return {"auto": {"type": "auto"}, "required": {"type": "any"}, "any": {"type": "any"}, "none": {"type": "none"}}.get(choice)
    name = tool_choice_name(choice)
    return {"type": "tool", "name": name} if name else None


def build_messages_payload(params: Mapping[str, Any]) -> Dict[str, Any]:
    system, conversation = split_system(params["messages"])
    payload: Dict[str, Any] = {
        "model": params["model"],
        "messages": to_anthropic_messages(conversation),
        "max_tokens": params.get("max_tokens") or ANTHROPIC_DEFAULT_MAX_TOKENS,
    }
    if system:
        payload["system"] = system
    for key in ("temperature", "top_p"):
        if params.get(key) is not None:
            payload[key] = params[key]
    if params.get("tools"):
        payload["tools"] = to_anthropic_tools(params["tools"])
        choice = to_anthropic_tool_choice(params.get("tool_choice"))
        if choice is not None:
            payload["tool_choice"] = choice
    payload.update(vendor_options(params))
    return payload


def parse_messages_response(payload: Mapping[str, Any]) -> ChatResponse:
    """Normalize a Messages API body; ``content`` is required."""
    blocks = payload["content"]
    text = "".join(str(b.get("text", "")) for b in blocks if b.get("type") == "text")
    tool_calls = tuple(
        ToolCall.from_dict({"id": b.get("id"), "name": b.get("name"), "arguments": b.get("input")})
        for b in blocks
        if b.get("type") == "tool_use"
    )
    raw_usage = payload.get("usage") or {}
    usage = Usage.from_dict({"prompt_tokens": raw_usage.get("input_tokens"), "completion_tokens": raw_usage.get("output_tokens")})
    usage = Usage(usage.prompt_tokens, usage.completion_tokens, usage.prompt_tokens + usage.completion_tokens)
    return ChatResponse(
        id=payload.get("id"),
        model=str(payload.get("model") or ""),
        usage=usage,
        raw=dict(payload),
        content=text,
        tool_calls=tool_calls,
        finish_reason=FinishReason.parse(payload.get("stop_reason")),
    )


__all__ = [
    "split_system",
    "to_anthropic_messages",
    "to_anthropic_tools",
    "to_anthropic_tool_choice",
    "build_messages_payload",
    "parse_messages_response",
]
