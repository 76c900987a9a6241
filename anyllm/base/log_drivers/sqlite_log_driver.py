"""
SQLite log driver (``llm_logs`` table).

Rows are appended with one short-lived connection per write; ``recent`` reads
them back newest first for dashboards and tests.
"""
from __future__ import annotations

import json
from typing import List, Optional

from ...config.defaults import SQLITE_LOG_TABLE
from ...persistence.sqlite.engine import DbPath, check_identifier, db_session, ensure_log_table
from .log_entry import LogEntry


class SqliteLogDriver:
    """Persist log entries to a SQLite table.

    Parameters
    ----------
    db_path:
        Database file path (created on first use).
    table: str
        Log table name; validated as a plain SQL identifier.
    """

    def __init__(self, db_path: DbPath = None, table: str = SQLITE_LOG_TABLE) -> None:
        self._db_path = db_path
        self._table = check_identifier(table)
        with db_session(self._db_path) as conn:
            ensure_log_table(conn, self._table)

    def write(self, entry: LogEntry) -> None:
        with db_session(self._db_path) as conn:
            conn.execute(
                f"""
                INSERT INTO {self._table} (
                    request_id, provider, model, method, request_json, response_json,
                    error, duration_ms, prompt_tokens, completion_tokens, tokens_used,
                    cost, metadata_json, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.request_id,
                    entry.provider,
                    entry.model,
                    entry.method,
                    json.dumps(entry.request, default=str),
                    json.dumps(entry.response, default=str),
                    entry.error,
                    float(entry.duration_ms),
                    entry.prompt_tokens,
                    entry.completion_tokens,
                    entry.tokens_used,
                    entry.cost,
                    json.dumps(entry.metadata, default=str),
                    entry.created_at,
                ),
            )

    def recent(self, limit: int = 50, provider: Optional[str] = None) -> List[LogEntry]:
        """Return up to ``limit`` entries, newest first, optionally for one provider."""
        sql = f"SELECT * FROM {self._table}"
        params: tuple = ()
        if provider is not None:
            sql += " WHERE provider = ?"
            params = (provider,)
        sql += " ORDER BY id DESC LIMIT ?"
        with db_session(self._db_path) as conn:
            rows = conn.execute(sql, params + (int(limit),)).fetchall()
        return [LogEntry.from_row(r) for r in rows]

    def total_cost(self, provider: Optional[str] = None) -> float:
        sql = f"SELECT COALESCE(SUM(cost), 0) AS total FROM {self._table}"
        params: tuple = ()
        if provider is not None:
            sql += " WHERE provider = ?"
            params = (provider,)
        with db_session(self._db_path) as conn:
            row = conn.execute(sql, params).fetchone()
        return float(row["total"])


__all__ = ["SqliteLogDriver"]
