"""
SQLite cache backend.

Each value is pickled into a BLOB alongside an absolute ``expires_at`` epoch.
Expired rows are purged lazily before reads; every operation uses its own
connection so the cache can be shared across threads and processes.
"""
from __future__ import annotations

import pickle
import sqlite3
import time
from typing import Any, Callable, Optional

from ...config.defaults import SQLITE_CACHE_TABLE
from ...persistence.sqlite.engine import DbPath, check_identifier, db_session, ensure_cache_table, utc_now_iso
from ..logging import get_logger

_logger = get_logger("anyllm.cache.sqlite")


class SqliteCache:
    """Cache persisted in a SQLite table.

    Parameters
    ----------
    db_path:
        Database file path (created on first use).
    table: str
        Table name; validated as a plain SQL identifier.
    default_ttl: Optional[int]
        TTL applied when ``set`` is called without one.
    clock: Callable[[], float]
        Time source in epoch seconds.
    """

    def __init__(
        self,
        db_path: DbPath = None,
        table: str = SQLITE_CACHE_TABLE,
        default_ttl: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = db_path
        self._table = check_identifier(table)
        self._default_ttl = default_ttl
        self._clock = clock
        with db_session(self._db_path) as conn:
            ensure_cache_table(conn, self._table)

    def _purge(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            f"DELETE FROM {self._table} WHERE expires_at IS NOT NULL AND expires_at <= ?",
            (self._clock(),),
        )

    def _fetch(self, key: str) -> Optional[bytes]:
        with db_session(self._db_path) as conn:
            self._purge(conn)
            row = conn.execute(
                f"SELECT value FROM {self._table} WHERE cache_key = ?",
                (key,),
            ).fetchone()
        return None if row is None else row["value"]

    def has(self, key: str) -> bool:
        return self._fetch(key) is not None

    def get(self, key: str, default: Any = None) -> Any:
        blob = self._fetch(key)
        if blob is None:
            return default
        try:
            return pickle.loads(blob)
        except (pickle.UnpicklingError, EOFError, TypeError, AttributeError, ImportError) as exc:
            _logger.warning("dropping undecodable cache entry %s: %s", key, exc)
            self.delete(key)
            return default

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        if ttl is not None and ttl <= 0:
            self.delete(key)
            return
        expires_at = None if ttl is None else self._clock() + ttl
        blob = pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)
        with db_session(self._db_path) as conn:
            conn.execute(
                f"""
                INSERT INTO {self._table} (cache_key, value, expires_at, created_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(cache_key) DO UPDATE SET
                    value = excluded.value,
                    expires_at = excluded.expires_at,
                    created_at = excluded.created_at
                """,
                (key, sqlite3.Binary(blob), expires_at, utc_now_iso()),
            )

    def delete(self, key: str) -> bool:
        with db_session(self._db_path) as conn:
            cur = conn.execute(f"DELETE FROM {self._table} WHERE cache_key = ?", (key,))
            return cur.rowcount > 0

    def clear(self) -> None:
        with db_session(self._db_path) as conn:
            conn.execute(f"DELETE FROM {self._table}")


__all__ = ["SqliteCache"]
