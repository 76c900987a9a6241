"""Tool specs and tool choice in the OpenAI ``function`` shape."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..tool_specs import normalize_tools, tool_choice_name


def to_openai_tools(tools: Optional[Sequence[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    return [{"type": "function", "function": spec} for spec in normalize_tools(tools)]


def to_openai_tool_choice(choice: Any) -> Any:
    """Pass ``"auto"``/``"none"``/``"required"`` through; a named tool is nested."""
    if choice is None or isinstance(choice, str):
        return choice
    name = tool_choice_name(choice)
    if name is None:
        return None
    return {"type": "function", "function": {"name": name}}


__all__ = ["to_openai_tools", "to_openai_tool_choice"]
