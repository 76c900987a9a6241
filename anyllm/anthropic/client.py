"""Anthropic provider adapter (Messages API over HTTP).

Auth uses the ``x-api-key`` header plus the pinned ``anthropic-version``.
Embeddings are not offered by the API; ``embed`` fails with ``UNSUPPORTED``
before any network call.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import ValidationError
from ..base.interfaces import WireRequest
from ..base.models import Response
from ..base.provider import BaseProvider
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_BASE_URL
from .helpers import build_messages_payload, parse_messages_response


class AnthropicProvider(BaseProvider):
    provider_name = "anthropic"
    default_base_uri = ANTHROPIC_DEFAULT_BASE_URL
    supports_embeddings = False

    def auth_headers(self) -> Dict[str, str]:
        headers = {"anthropic-version": str(self.config.option("api_version", ANTHROPIC_API_VERSION))}
        if self.config.api_key:
            headers["x-api-key"] = self.config.api_key
        return headers

    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        if method != "chat":
            raise ValidationError(f"unsupported method for anthropic: {method}")
        return WireRequest("/messages", build_messages_payload(params))

    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        return parse_messages_response(payload)


__all__ = ["AnthropicProvider"]
