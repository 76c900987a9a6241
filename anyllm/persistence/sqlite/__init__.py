"""SQLite persistence helpers shared by the rate limiter, cache and log driver."""

from .engine import (
    check_identifier,
    create_connection,
    db_session,
    ensure_cache_table,
    ensure_log_table,
    ensure_rate_limit_table,
    init_schema,
    utc_now_iso,
)

__all__ = [
    "check_identifier",
    "create_connection",
    "db_session",
    "ensure_cache_table",
    "ensure_log_table",
    "ensure_rate_limit_table",
    "init_schema",
    "utc_now_iso",
]
