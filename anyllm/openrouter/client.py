"""OpenRouter provider adapter (OpenAI-style over HTTP).

OpenRouter ranks apps by the optional ``HTTP-Referer`` and ``X-Title``
headers; they are read from the ``http_referer`` and ``app_title`` config
options.
"""

from __future__ import annotations

from typing import Dict

from ..base.openai_style_parts import OpenAICompatibleProvider
from ..config.defaults import OPENROUTER_DEFAULT_BASE_URL


class OpenRouterProvider(OpenAICompatibleProvider):
    provider_name = "openrouter"
    default_base_uri = OPENROUTER_DEFAULT_BASE_URL

    def auth_headers(self) -> Dict[str, str]:
        headers = super().auth_headers()
        referer = self.config.option("http_referer")
        title = self.config.option("app_title")
        if referer:
            headers["HTTP-Referer"] = str(referer)
        if title:
            headers["X-Title"] = str(title)
        return headers


__all__ = ["OpenRouterProvider"]
