"""Log driver that discards every entry."""
from __future__ import annotations

from .log_entry import LogEntry


class NullLogDriver:
    def write(self, entry: LogEntry) -> None:
        return None


__all__ = ["NullLogDriver"]
