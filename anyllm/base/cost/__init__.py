"""Pricing and cost computation."""

from .model_pricing import ModelPricing
from .default_pricing import DEFAULT_PRICING
from .pricing_registry import PricingRegistry

__all__ = ["ModelPricing", "PricingRegistry", "DEFAULT_PRICING"]
