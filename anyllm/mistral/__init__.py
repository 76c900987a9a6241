"""Mistral provider package."""

from .client import MistralProvider

__all__ = ["MistralProvider"]
