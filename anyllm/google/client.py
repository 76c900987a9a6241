"""Google Gemini provider adapter (``generateContent`` over HTTP).

The API key travels in the ``x-goog-api-key`` header. Only chat is wired;
``embed`` fails with ``UNSUPPORTED`` before any network call.
"""

from __future__ import annotations

from typing import Any, Dict

from ..base.errors import ValidationError
from ..base.interfaces import WireRequest
from ..base.models import Response
from ..base.provider import BaseProvider
from ..config.defaults import GOOGLE_DEFAULT_BASE_URL
from .helpers import build_generate_payload, parse_generate_response


class GoogleProvider(BaseProvider):
    provider_name = "google"
    default_base_uri = GOOGLE_DEFAULT_BASE_URL
    supports_embeddings = False

    def auth_headers(self) -> Dict[str, str]:
        return {"x-goog-api-key": self.config.api_key} if self.config.api_key else {}

    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        if method != "chat":
            raise ValidationError(f"unsupported method for google: {method}")
        return WireRequest(f"/models/{params['model']}:generateContent", build_generate_payload(params))

    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        return parse_generate_response(payload)


__all__ = ["GoogleProvider"]
