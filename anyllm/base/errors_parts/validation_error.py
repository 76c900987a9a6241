"""
Validation error types raised before any network call.

`ValidationError` collects every violated rule so callers see the complete
list in one exception. `UnsupportedProviderError` is raised by the provider
factory for identifiers outside the supported set.
"""
from __future__ import annotations

from typing import Iterable, List


class ValidationError(ValueError):
    """Invalid configuration or request parameters.

    Attributes:
        errors: Individual rule violations, in the order they were detected.
    """

    def __init__(self, message: str, errors: Iterable[str] = ()) -> None:
        self.errors: List[str] = list(errors)
        super().__init__(message)

    @classmethod
    def from_errors(cls, title: str, errors: Iterable[str]) -> "ValidationError":
        """Build an error whose message lists every violation on its own line."""
        collected = list(errors)
        return cls(f"{title}:\n- " + "\n- ".join(collected), collected)


class UnsupportedProviderError(ValidationError):
    """Raised when a provider identifier cannot be resolved to an adapter."""


__all__ = ["ValidationError", "UnsupportedProviderError"]
