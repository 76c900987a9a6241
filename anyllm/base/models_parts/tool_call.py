"""
Tool (function) call requested by an assistant message.

Vendors emit tool calls in two shapes:

- flat: ``{"id", "name", "arguments"}``
- nested: ``{"id", "function": {"name", "arguments"}}``

with ``arguments`` either a JSON-encoded string or an already decoded mapping.
:meth:`ToolCall.from_dict` accepts all of them and never raises; arguments that
do not decode to a JSON object become ``{}``.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


def _decode_arguments(value: Any) -> Dict[str, Any]:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes, bytearray)):
        try:
            decoded = json.loads(value)
        except (ValueError, TypeError):
            return {}
        return decoded if isinstance(decoded, dict) else {}
    return {}


@dataclass(frozen=True)
class ToolCall:
    """Normalized tool call.

    Attributes:
        id: Vendor-assigned call identifier echoed back by tool messages.
        name: Function name the model wants invoked.
        arguments: Decoded argument object (always a dict).
    """

    id: str
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "ToolCall":
        """Build a tool call from either wire shape (see module docstring)."""
        if not isinstance(data, Mapping):
            return cls(id="", name="", arguments={})
        function = data.get("function")
        if not isinstance(function, Mapping):
            function = {}
        name = data.get("name") or function.get("name") or ""
        raw_args = data["arguments"] if "arguments" in data else function.get("arguments")
        return cls(
            id=str(data.get("id") or ""),
            name=str(name),
            arguments=_decode_arguments(raw_args),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "arguments": dict(self.arguments)}


__all__ = ["ToolCall"]
