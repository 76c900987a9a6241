"""Base structured logging utilities for the anyllm package.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters and middleware.
- Child loggers (``anyllm.openai``, ``anyllm.middleware.cache``) propagate to
  the shared ``anyllm`` logger, which owns the only console handler.

The level is read from ``ANYLLM_LOG_LEVEL`` on first use; ``configure_logger``
adjusts it (and an optional rotating file handler) at runtime.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "anyllm"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_BASE_LOGGER_ATTR = "_anyllm_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_anyllm_console_handler"
_FILE_HANDLER_ATTR = "_anyllm_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize (once) and return the shared ``anyllm`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger

    desired_level = _parse_level(os.getenv("ANYLLM_LOG_LEVEL"), default=level)
    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [h for h in logger.handlers if not getattr(h, _CONSOLE_HANDLER_ATTR, False)]
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return the shared logger or one of its children.

    Names outside the ``anyllm`` hierarchy are nested under it so every event
    reaches the managed handlers.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (numeric or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (or reused). When ``None``, any managed file handler is removed.
    json_mode: bool
        Use the JSON formatter (default) or a plain text formatter.

    Returns
    -------
    logging.Logger
        The configured ``anyllm`` logger.
    """
    logger = get_logger(json_mode=json_mode)

    if level is not None:
        resolved = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(resolved)
        for h in logger.handlers:
            h.setLevel(resolved)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    if file_path is None:
        for h in managed:
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()
        return logger

    abs_path = os.path.abspath(os.path.expanduser(file_path))
    os.makedirs(os.path.dirname(abs_path), exist_ok=True)

    existing: Optional[logging.FileHandler] = None
    for h in managed:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == abs_path:
            existing = h
        else:
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()

    if existing is None:
        # 10MB x 5 backups
        existing = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        setattr(existing, _FILE_HANDLER_ATTR, True)
        logger.addHandler(existing)
    existing.setFormatter(_make_formatter(json_mode))
    existing.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (normally obtained via ``get_logger``).
    event: str
        Event name (e.g. ``provider.request``, ``cache.hit``).
    ctx: LogContext | None
        Provider/model context merged shallowly into the payload.
    level: int
        Logging level for the record.
    keep_none: bool
        Preserve keys whose values are ``None`` instead of dropping them.
    **fields: Any
        Additional JSON-serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
