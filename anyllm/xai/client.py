"""xAI (Grok) provider adapter; the API is OpenAI-compatible."""

from __future__ import annotations

from ..base.openai_style_parts import OpenAICompatibleProvider
from ..config.defaults import XAI_DEFAULT_BASE_URL


class XAIProvider(OpenAICompatibleProvider):
    provider_name = "xai"
    default_base_uri = XAI_DEFAULT_BASE_URL


__all__ = ["XAIProvider"]
