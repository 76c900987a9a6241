"""Log driver forwarding entries to the structured ``anyllm`` logger."""
from __future__ import annotations

import logging
from typing import Optional

from ..log_support import LogContext
from ..logging import get_logger, log_event
from .log_entry import LogEntry

LOG_EVENT = "llm.request"


class LoggerLogDriver:
    """Emit each entry as one JSON log line (event ``llm.request``).

    Successful calls log at ``level``; failed calls log at ``error_level``.
    File output and rotation are configured through
    :func:`anyllm.base.logging.configure_logger`.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        level: int = logging.INFO,
        error_level: int = logging.WARNING,
    ) -> None:
        self._logger = logger or get_logger("anyllm.requests")
        self._level = level
        self._error_level = error_level

    def write(self, entry: LogEntry) -> None:
        data = entry.to_dict()
        ctx = LogContext.from_request(entry)
        for name in ("provider", "model", "method", "request_id"):
            data.pop(name, None)
        level = self._level if entry.successful else self._error_level
        log_event(self._logger, LOG_EVENT, ctx, level=level, **data)


__all__ = ["LoggerLogDriver", "LOG_EVENT"]
