"""
SQLite rate limiter.

``hit`` is one ``INSERT .. ON CONFLICT(rate_key) DO UPDATE .. RETURNING``
statement: it opens a window for a new key, increments an active one, and
replaces an expired one, all inside SQLite's write lock. ``attempt`` adds a
``WHERE`` guard to the same upsert so the limit check and the increment are a
single statement too. Expired rows are purged lazily before each operation.

Each call opens its own connection (WAL + busy_timeout, see
:mod:`anyllm.persistence.sqlite.engine`), so one limiter instance can be used
from many threads, and several processes can share the database file.
"""
from __future__ import annotations

import math
import sqlite3
import time
from typing import Callable, Optional

from ...config.defaults import SQLITE_RATE_LIMIT_TABLE
from ...persistence.sqlite.engine import (
    DbPath,
    check_identifier,
    db_session,
    ensure_rate_limit_table,
    utc_now_iso,
)
from .rate_limiter import RateLimiter


class SqliteRateLimiter(RateLimiter):
    """Fixed-window limiter persisted in a SQLite table.

    Parameters
    ----------
    db_path:
        Database file path (created on first use).
    table: str
        Counter table name; validated as a plain SQL identifier.
    clock: Callable[[], float]
        Time source in epoch seconds.
    """

    def __init__(
        self,
        db_path: DbPath = None,
        table: str = SQLITE_RATE_LIMIT_TABLE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._db_path = db_path
        self._table = check_identifier(table)
        self._clock = clock
        with db_session(self._db_path) as conn:
            ensure_rate_limit_table(conn, self._table)
        t = self._table
        self._upsert_sql = f"""
            INSERT INTO {t} (rate_key, attempts, reset_at, created_at, updated_at)
            VALUES (:key, 1, :reset_at, :ts, :ts)
            ON CONFLICT(rate_key) DO UPDATE SET
                attempts = CASE WHEN {t}.reset_at <= :now THEN 1 ELSE {t}.attempts + 1 END,
                reset_at = CASE WHEN {t}.reset_at <= :now THEN excluded.reset_at ELSE {t}.reset_at END,
                updated_at = excluded.updated_at
        """

    def _purge(self, conn: sqlite3.Connection, now: float) -> None:
        conn.execute(f"DELETE FROM {self._table} WHERE reset_at <= ?", (now,))

    def _upsert(self, key: str, decay_seconds: int, max_attempts: Optional[int]) -> Optional[int]:
        now = self._clock()
        params = {"key": key, "reset_at": now + decay_seconds, "ts": utc_now_iso(), "now": now}
        sql = self._upsert_sql
        if max_attempts is not None:
            sql += f" WHERE {self._table}.reset_at <= :now OR {self._table}.attempts < :max_attempts"
            params["max_attempts"] = max_attempts
        sql += " RETURNING attempts"
        with db_session(self._db_path) as conn:
            self._purge(conn, now)
            rows = conn.execute(sql, params).fetchall()
        return int(rows[0]["attempts"]) if rows else None

    def hit(self, key: str, decay_seconds: int = 60) -> int:
        count = self._upsert(key, decay_seconds, None)
        return count if count is not None else 0

    def _reserve(self, key: str, max_attempts: int, decay_seconds: int) -> Optional[int]:
        if max_attempts <= 0:
            return None
        return self._upsert(key, decay_seconds, max_attempts)

    def attempts(self, key: str) -> int:
        now = self._clock()
        with db_session(self._db_path) as conn:
            self._purge(conn, now)
            row = conn.execute(
                f"SELECT attempts FROM {self._table} WHERE rate_key = ? AND reset_at > ?",
                (key, now),
            ).fetchone()
        return int(row["attempts"]) if row else 0

    def available_in(self, key: str) -> int:
        now = self._clock()
        with db_session(self._db_path) as conn:
            self._purge(conn, now)
            row = conn.execute(
                f"SELECT reset_at FROM {self._table} WHERE rate_key = ? AND reset_at > ?",
                (key, now),
            ).fetchone()
        if row is None:
            return 0
        return max(0, math.ceil(row["reset_at"] - now))

    def clear(self, key: str) -> None:
        with db_session(self._db_path) as conn:
            conn.execute(f"DELETE FROM {self._table} WHERE rate_key = ?", (key,))

    def reset_all(self) -> None:
        with db_session(self._db_path) as conn:
            conn.execute(f"DELETE FROM {self._table}")


__all__ = ["SqliteRateLimiter"]
