"""OpenAI provider adapter (Chat Completions and Embeddings over HTTP).

Auth is a bearer token; ``organization`` and ``project`` from the provider
config are sent as ``OpenAI-Organization`` / ``OpenAI-Project`` headers.
"""

from __future__ import annotations

from typing import Dict

from ..base.openai_style_parts import OpenAICompatibleProvider
from ..config.defaults import OPENAI_DEFAULT_BASE_URL


class OpenAIProvider(OpenAICompatibleProvider):
    provider_name = "openai"
    default_base_uri = OPENAI_DEFAULT_BASE_URL

    def auth_headers(self) -> Dict[str, str]:
        headers = super().auth_headers()
        if self.config.organization:
            headers["OpenAI-Organization"] = self.config.organization
        if self.config.project:
            headers["OpenAI-Project"] = self.config.project
        return headers


__all__ = ["OpenAIProvider"]
