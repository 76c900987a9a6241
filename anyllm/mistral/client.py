"""Mistral provider adapter; chat and embeddings use the OpenAI schema."""

from __future__ import annotations

from ..base.openai_style_parts import OpenAICompatibleProvider
from ..config.defaults import MISTRAL_DEFAULT_BASE_URL


class MistralProvider(OpenAICompatibleProvider):
    provider_name = "mistral"
    default_base_uri = MISTRAL_DEFAULT_BASE_URL


__all__ = ["MistralProvider"]
