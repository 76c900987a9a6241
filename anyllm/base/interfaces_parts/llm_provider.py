"""LLMProvider Protocol (single-class module).

Defines the normalization contract every provider adapter satisfies: the
pipeline and middleware depend only on this capability set.
"""

from __future__ import annotations

from typing import Any, Dict, Protocol, runtime_checkable

from ..models import Response
from .wire_request import WireRequest


@runtime_checkable
class LLMProvider(Protocol):
    """Translate canonical requests to a vendor wire format and back.

    Implementations must never leak vendor objects upstream: ``parse_response``
    always returns a canonical :class:`Response` with ``usage`` populated and
    tool-call arguments decoded.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"openai"`` or ``"anthropic"``."""
        ...

    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        """Build the vendor HTTP request for ``method`` from canonical ``params``."""
        ...

    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        """Normalize a decoded vendor response body."""
        ...
