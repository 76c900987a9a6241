"""Interface parts package public surface."""

from .wire_request import WireRequest
from .llm_provider import LLMProvider

__all__ = ["WireRequest", "LLMProvider"]
