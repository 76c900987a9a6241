"""
Built-in pricing table (USD per 1M tokens).

Local (ollama) and routed (openrouter) providers have no fixed prices; their
empty sections make cost lookups return ``None`` rather than ``0``.
"""
from __future__ import annotations

from typing import Dict

from .model_pricing import ModelPricing

DEFAULT_PRICING: Dict[str, Dict[str, ModelPricing]] = {
    "openai": {
        "gpt-5.1": ModelPricing(2.50, 10.00),
        "gpt-5.1-mini": ModelPricing(0.40, 1.60),
        "gpt-5.1-nano": ModelPricing(0.10, 0.40),
        "gpt-4o": ModelPricing(2.50, 10.00),
        "gpt-4o-mini": ModelPricing(0.15, 0.60),
    },
    "anthropic": {
        "claude-opus-4-5": ModelPricing(15.00, 75.00),
        "claude-sonnet-4-5": ModelPricing(3.00, 15.00),
        "claude-haiku-4-5": ModelPricing(0.80, 4.00),
    },
    "google": {
        "gemini-2.5-flash": ModelPricing(0.075, 0.30),
        "gemini-3-pro-preview": ModelPricing(1.25, 5.00),
    },
    "mistral": {
        "mistral-large-latest": ModelPricing(3.00, 9.00),
        "mistral-medium-latest": ModelPricing(2.70, 8.10),
        "mistral-small-latest": ModelPricing(1.00, 3.00),
        "pixtral-12b-2409": ModelPricing(0.15, 0.15),
    },
    "xai": {
        "grok-beta": ModelPricing(5.00, 15.00),
        "grok-vision-beta": ModelPricing(5.00, 15.00),
    },
    "ollama": {},
    "openrouter": {},
}


__all__ = ["DEFAULT_PRICING"]
