"""
Provider-agnostic interfaces for the providers layer.

Re-exports the single-class modules under ``anyllm.base.interfaces_parts`` to
keep imports stable for upstream code.
"""

from __future__ import annotations

from .interfaces_parts import LLMProvider, WireRequest

__all__ = ["LLMProvider", "WireRequest"]
