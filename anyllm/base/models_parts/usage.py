"""
Token usage accounting for one provider call.

Vendors report usage under different key spellings and sometimes as strings.
:meth:`Usage.from_dict` coerces each field independently so one malformed
counter never discards the others.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping


def _coerce_count(value: Any) -> int:
    """Coerce an int, numeric string or float to a non-negative int (else 0)."""
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        number = int(value)
    elif isinstance(value, (str, bytes)):
        try:
            parsed = float(value.strip())
        except ValueError:
            return 0
        if not math.isfinite(parsed):
            return 0
        number = int(parsed)
    else:
        return 0
    return max(0, number)


def _pick(data: Mapping[str, Any], snake: str, camel: str) -> Any:
    if data.get(snake) is not None:
        return data[snake]
    return data.get(camel)


@dataclass(frozen=True)
class Usage:
    """Token counts reported for one call; all values are >= 0."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Usage":
        """Read snake_case or camelCase keys; absent or non-numeric values become 0."""
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            prompt_tokens=_coerce_count(_pick(data, "prompt_tokens", "promptTokens")),
            completion_tokens=_coerce_count(_pick(data, "completion_tokens", "completionTokens")),
            total_tokens=_coerce_count(_pick(data, "total_tokens", "totalTokens")),
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


__all__ = ["Usage"]
