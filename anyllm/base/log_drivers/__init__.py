"""Sinks for request log entries produced by ``LoggingMiddleware``."""

from .log_entry import LogEntry
from .log_driver import LogDriver
from .logger_log_driver import LoggerLogDriver
from .sqlite_log_driver import SqliteLogDriver
from .null_log_driver import NullLogDriver

__all__ = [
    "LogEntry",
    "LogDriver",
    "LoggerLogDriver",
    "SqliteLogDriver",
    "NullLogDriver",
]
