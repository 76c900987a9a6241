"""SQLite engine helpers for the persistence layer.

Purpose
-------
Provide centralized helpers for opening SQLite connections and ensuring the
tables used by the SQLite rate limiter, cache and log driver exist.

External dependencies
---------------------
- Standard library only (``sqlite3``). No side effects at import time.

Concurrency strategy
--------------------
- Every operation opens its own short-lived connection (see :func:`db_session`)
  so threads and processes never share a connection object.
- Applies ``busy_timeout`` from ``anyllm.config.defaults`` to wait out writer
  lock contention instead of failing immediately.
- Enables WAL journaling and NORMAL synchronous mode so readers do not block
  the single writer.

Table names are interpolated into DDL/DML and therefore validated with
:func:`check_identifier` first.
"""

from __future__ import annotations

import re
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

from ...base.errors import ValidationError
from ...config.defaults import (
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_CACHE_TABLE,
    SQLITE_JOURNAL_MODE,
    SQLITE_LOG_TABLE,
    SQLITE_RATE_LIMIT_TABLE,
    SQLITE_SYNCHRONOUS,
)

DEFAULT_DB_PATH = Path("~/.anyllm/anyllm.db")

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]{0,62}$")

DbPath = Union[str, Path, None]


def check_identifier(name: str) -> str:
    """Return ``name`` if it is a safe SQL identifier, else raise ValidationError."""
    if not isinstance(name, str) or not _IDENTIFIER_RE.match(name):
        raise ValidationError(f"invalid SQLite table name: {name!r}")
    return name


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def get_db_path(db_path: DbPath = None) -> Path:
    """Return a concrete database file path.

    Parameters
    ----------
    db_path:
        Optional path. When ``None``, defaults to ``DEFAULT_DB_PATH``. Values are
        passed through ``Path.expanduser()`` to allow ``~`` home shortcuts.
    """
    return Path(db_path).expanduser() if db_path else DEFAULT_DB_PATH.expanduser()


def create_connection(db_path: DbPath = None) -> sqlite3.Connection:
    """Open a SQLite connection with sane defaults and apply PRAGMA settings.

    Behavior
    --------
    - Ensures the parent directory exists prior to opening the database file.
    - Applies journal mode, synchronous mode, and busy timeout from centralized
      defaults.

    Returns
    -------
    sqlite3.Connection
        An open connection with ``row_factory`` set to ``sqlite3.Row``.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), timeout=SQLITE_BUSY_TIMEOUT_MS / 1000)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")  # ms
    return conn


def ensure_rate_limit_table(conn: sqlite3.Connection, table: str = SQLITE_RATE_LIMIT_TABLE) -> None:
    """Create the rate-limit counter table and its indexes.

    ``reset_at`` is a Unix epoch (REAL) so window checks are plain numeric
    comparisons inside the upsert.
    """
    t = check_identifier(table)
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {t} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rate_key TEXT NOT NULL UNIQUE,
            attempts INTEGER NOT NULL DEFAULT 0 CHECK (attempts >= 0),
            reset_at REAL NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        """
    )
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_reset_at ON {t} (reset_at);")
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_key_reset ON {t} (rate_key, reset_at);")


def ensure_cache_table(conn: sqlite3.Connection, table: str = SQLITE_CACHE_TABLE) -> None:
    """Create the key/value cache table (pickled BLOB values)."""
    t = check_identifier(table)
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {t} (
            cache_key TEXT PRIMARY KEY,
            value BLOB NOT NULL,
            expires_at REAL,
            created_at TEXT NOT NULL
        );
        """
    )
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_expires_at ON {t} (expires_at);")


def ensure_log_table(conn: sqlite3.Connection, table: str = SQLITE_LOG_TABLE) -> None:
    """Create the request log table written by ``SqliteLogDriver``."""
    t = check_identifier(table)
    conn.execute(
        f"""
        CREATE TABLE IF NOT EXISTS {t} (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            request_id TEXT,
            provider TEXT NOT NULL,
            model TEXT NOT NULL,
            method TEXT NOT NULL,
            request_json TEXT NOT NULL,
            response_json TEXT,
            error TEXT,
            duration_ms REAL NOT NULL,
            prompt_tokens INTEGER NOT NULL DEFAULT 0,
            completion_tokens INTEGER NOT NULL DEFAULT 0,
            tokens_used INTEGER NOT NULL DEFAULT 0,
            cost REAL,
            metadata_json TEXT NOT NULL,
            created_at TEXT NOT NULL
        );
        """
    )
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_provider_model ON {t} (provider, model);")
    conn.execute(f"CREATE INDEX IF NOT EXISTS idx_{t}_created_at ON {t} (created_at);")


def init_schema(conn: sqlite3.Connection) -> None:
    """Create all default tables if they do not exist, then commit."""
    ensure_rate_limit_table(conn)
    ensure_cache_table(conn)
    ensure_log_table(conn)
    conn.commit()


@contextmanager
def db_session(db_path: DbPath = None) -> Iterator[sqlite3.Connection]:
    """Context manager yielding a fresh connection.

    Transaction semantics
    ---------------------
    - Commits when the context exits normally.
    - Rolls back if an exception is raised inside the context.
    - Always closes the connection on exit.
    """
    conn = create_connection(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


__all__ = [
    "DEFAULT_DB_PATH",
    "check_identifier",
    "utc_now_iso",
    "get_db_path",
    "create_connection",
    "ensure_rate_limit_table",
    "ensure_cache_table",
    "ensure_log_table",
    "init_schema",
    "db_session",
]
