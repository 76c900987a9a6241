"""
Thread-safe registry mapping (provider, model) to :class:`ModelPricing`.

The built-in table is loaded lazily on first access under a lock; afterwards
lookups are read-mostly. A registry is an ordinary object owned by whoever
builds the pipeline (no process-global state), so tests can register prices
without leaking into each other.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional

from .default_pricing import DEFAULT_PRICING
from .model_pricing import ModelPricing


class PricingRegistry:
    """Pricing lookups and cost computation.

    Parameters
    ----------
    include_defaults: bool
        Seed the registry with :data:`DEFAULT_PRICING` on first use.
    """

    def __init__(self, include_defaults: bool = True) -> None:
        self._include_defaults = include_defaults
        self._pricing: Dict[str, Dict[str, ModelPricing]] = {}
        self._loaded = False
        self._lock = threading.Lock()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            if self._include_defaults:
                for provider, models in DEFAULT_PRICING.items():
                    self._pricing.setdefault(provider, {}).update(models)
            self._loaded = True

    def register(self, provider: str, model: str, pricing: ModelPricing) -> None:
        """Add or replace the price of ``provider``/``model``."""
        self._ensure_loaded()
        with self._lock:
            self._pricing.setdefault(provider, {})[model] = pricing

    def get(self, provider: str, model: str) -> Optional[ModelPricing]:
        self._ensure_loaded()
        return self._pricing.get(provider, {}).get(model)

    def has(self, provider: str, model: str) -> bool:
        return self.get(provider, model) is not None

    def calculate_cost(
        self,
        provider: str,
        model: str,
        input_tokens: int,
        output_tokens: int,
        cached_tokens: int = 0,
    ) -> Optional[float]:
        """Return the USD cost, or ``None`` when the model has no known price."""
        pricing = self.get(provider, model)
        if pricing is None:
            return None
        return pricing.calculate_cost(input_tokens, output_tokens, cached_tokens)


__all__ = ["PricingRegistry"]
