"""Sink contract for :class:`LogEntry` records."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from .log_entry import LogEntry


@runtime_checkable
class LogDriver(Protocol):
    """Anything that can persist or forward a log entry."""

    def write(self, entry: LogEntry) -> None:  # pragma: no cover - interface
        ...


__all__ = ["LogDriver"]
