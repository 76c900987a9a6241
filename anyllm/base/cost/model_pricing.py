"""Per-model token pricing."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

TOKENS_PER_UNIT = 1_000_000


@dataclass(frozen=True)
class ModelPricing:
    """USD prices per one million tokens.

    Attributes:
        input_per_1m: Prompt token rate.
        output_per_1m: Completion token rate.
        cached_input_per_1m: Rate for cached prompt tokens, when the vendor
            discounts them.
    """

    input_per_1m: float
    output_per_1m: float
    cached_input_per_1m: Optional[float] = None

    def calculate_cost(self, input_tokens: int, output_tokens: int, cached_tokens: int = 0) -> float:
        """Return the cost in USD rounded to 6 decimals.

        Cached tokens are only charged when a cached rate is defined.
        """
        cost = (input_tokens / TOKENS_PER_UNIT) * self.input_per_1m
        cost += (output_tokens / TOKENS_PER_UNIT) * self.output_per_1m
        if cached_tokens > 0 and self.cached_input_per_1m is not None:
            cost += (cached_tokens / TOKENS_PER_UNIT) * self.cached_input_per_1m
        return round(cost, 6)


__all__ = ["ModelPricing", "TOKENS_PER_UNIT"]
