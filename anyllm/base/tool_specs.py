"""
Tool (function) specification normalization.

Callers may describe tools either in the OpenAI shape
``{"type": "function", "function": {"name", "description", "parameters"}}`` or
flat as ``{"name", "description", "parameters"}``. Adapters normalize to the
flat shape first and then render their vendor format.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import ValidationError

EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


def normalize_tool(spec: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``{"name", "description", "parameters"}`` for one tool spec."""
    if not isinstance(spec, Mapping):
        raise ValidationError(f"tool spec must be a mapping (got: {type(spec).__name__})")
    fn = spec.get("function") if isinstance(spec.get("function"), Mapping) else spec
    name = fn.get("name")
    if not isinstance(name, str) or not name:
        raise ValidationError("tool spec requires a non-empty 'name'")
    params = fn.get("parameters") or fn.get("input_schema") or EMPTY_SCHEMA
    out: Dict[str, Any] = {"name": name, "parameters": dict(params)}
    if fn.get("description"):
        out["description"] = str(fn["description"])
    return out


def normalize_tools(specs: Optional[Iterable[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    return [normalize_tool(s) for s in specs or ()]


def tool_choice_name(choice: Any) -> Optional[str]:
    """Extract a forced tool name from ``{"name": ...}`` or OpenAI's nested form."""
    if not isinstance(choice, Mapping):
        return None
    fn = choice.get("function")
    if isinstance(fn, Mapping) and fn.get("name"):
        return str(fn["name"])
    name = choice.get("name")
    return str(name) if name else None


__all__ = ["normalize_tool", "normalize_tools", "tool_choice_name", "EMPTY_SCHEMA"]
