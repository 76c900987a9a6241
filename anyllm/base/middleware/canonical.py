"""
Canonical JSON encoding of request parameters.

Used for cache keys and log summaries: message objects, enums and dataclasses
are reduced to plain JSON values so equal requests always serialize to the
same bytes.
"""
from __future__ import annotations

import base64
import dataclasses
import json
from enum import Enum
from typing import Any


def canonical_default(obj: Any) -> Any:
    """``json.dumps`` ``default=`` hook for non-JSON values."""
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, Enum):
        return obj.value
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    return str(obj)


def canonical_json(value: Any) -> str:
    """Serialize with sorted keys and no insignificant whitespace."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=canonical_default, ensure_ascii=False)


def to_jsonable(value: Any) -> Any:
    """Return ``value`` converted to plain JSON types."""
    return json.loads(canonical_json(value))


__all__ = ["canonical_default", "canonical_json", "to_jsonable"]
