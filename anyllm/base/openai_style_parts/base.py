"""OpenAICompatibleProvider: shared adapter for Chat Completions style APIs.

Purpose:
- One translator for every vendor exposing ``/chat/completions`` and
  ``/embeddings`` with the OpenAI schema (openai, openrouter, xai, mistral,
  ollama). Subclasses only set ``provider_name``, ``default_base_uri`` and any
  extra headers.
"""

from __future__ import annotations

from typing import Any, Dict

from ..errors import ValidationError
from ..interfaces import WireRequest
from ..models import Response
from ..provider import BaseProvider
from .parsing import parse_chat_response, parse_embedding_response
from .payloads import build_chat_payload, build_embedding_payload


class OpenAICompatibleProvider(BaseProvider):
    """Base adapter for OpenAI-compatible vendors."""

    chat_endpoint = "/chat/completions"
    embeddings_endpoint = "/embeddings"

    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        if method == "chat":
            return WireRequest(self.chat_endpoint, build_chat_payload(params))
        if method == "embed":
            return WireRequest(self.embeddings_endpoint, build_embedding_payload(params))
        raise ValidationError(f"unsupported method for {self.provider_name}: {method}")

    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        if method == "embed":
            return parse_embedding_response(payload)
        return parse_chat_response(payload)


__all__ = ["OpenAICompatibleProvider"]
