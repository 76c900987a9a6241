"""Pricing registry and cost computation tests."""

from __future__ import annotations

import pytest

from anyllm.base.cost import ModelPricing, PricingRegistry


def test_cost_is_linear_in_token_counts():
    pricing = ModelPricing(input_per_1m=2.50, output_per_1m=10.00)
    assert pricing.calculate_cost(1_000_000, 500_000) == pytest.approx(7.50)
    assert pricing.calculate_cost(0, 0) == 0.0


def test_cached_tokens_use_cached_rate_only_when_known():
    with_cache = ModelPricing(input_per_1m=2.00, output_per_1m=8.00, cached_input_per_1m=0.50)
    without = ModelPricing(input_per_1m=2.00, output_per_1m=8.00)
    assert with_cache.calculate_cost(1_000_000, 0, cached_tokens=1_000_000) == pytest.approx(2.50)
    assert without.calculate_cost(1_000_000, 0, cached_tokens=1_000_000) == pytest.approx(2.00)


def test_registry_defaults_and_unknown_models():
    registry = PricingRegistry()
    assert registry.has("openai", "gpt-4o")
    assert registry.calculate_cost("openai", "gpt-4o", 1_000_000, 500_000) == pytest.approx(7.50)
    assert registry.get("openai", "no-such-model") is None
    assert registry.calculate_cost("ollama", "llama3", 100, 100) is None


def test_registry_register_overrides_and_empty_registry():
    registry = PricingRegistry(include_defaults=False)
    assert not registry.has("openai", "gpt-4o")
    registry.register("acme", "tiny", ModelPricing(1.0, 2.0))
    assert registry.calculate_cost("acme", "tiny", 500_000, 500_000) == pytest.approx(1.5)
