"""Ollama provider adapter.

Targets the local server's OpenAI-compatible ``/v1`` endpoints. No API key is
required; one is sent only when configured (e.g. behind an auth proxy).
"""

from __future__ import annotations

from ..base.openai_style_parts import OpenAICompatibleProvider
from ..config.defaults import OLLAMA_DEFAULT_BASE_URL


class OllamaProvider(OpenAICompatibleProvider):
    provider_name = "ollama"
    default_base_uri = OLLAMA_DEFAULT_BASE_URL


__all__ = ["OllamaProvider"]
