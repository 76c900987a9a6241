"""Fake provider package for deterministic offline tests."""

from .client import FakeProvider

__all__ = ["FakeProvider"]
