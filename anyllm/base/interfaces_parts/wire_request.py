"""Vendor-specific HTTP request produced by ``translate_request``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class WireRequest:
    """One outbound HTTP call.

    Attributes:
        endpoint: Path relative to the provider base URI (e.g. ``/chat/completions``).
        payload: JSON body.
        headers: Extra headers for this call only.
        query: Query-string parameters.
        http_method: HTTP verb, ``POST`` for every supported operation.
    """

    endpoint: str
    payload: Dict[str, Any] = field(default_factory=dict)
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    http_method: str = "POST"


__all__ = ["WireRequest"]
