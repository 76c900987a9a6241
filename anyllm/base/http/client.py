"""Shared HTTP client pool for providers.

Purpose:
    Provide a centralized, thread-safe pool of reusable ``httpx.Client``
    instances to avoid per-call allocations and reduce connection overhead
    across provider adapters.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose, timeout)``. Credentials are
      never baked into pooled clients; adapters send auth headers per request,
      so two adapters with different keys can share a connection pool.
    - All clients are closed at interpreter exit via ``atexit``. Tests may call
      :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..logging import get_logger

_CLIENTS: Dict[Tuple[Optional[str], str, float], httpx.Client] = {}
_LOCK = threading.RLock()
_logger = get_logger("anyllm.http")


def get_httpx_client(base_url: Optional[str], purpose: str, timeout: float) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL, purpose and timeout.

    Parameters:
        base_url: API base URL set on the client so adapters can issue relative
            requests. ``None`` groups clients under a shared key.
        purpose: Short string discriminating separate pools (e.g. "openai").
        timeout: Per-request timeout in seconds.

    Thread-safety:
        Safe for concurrent use; per-key creation is guarded by a re-entrant lock.
    """
    key = (base_url, purpose, float(timeout))
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        if base_url:
            client = httpx.Client(base_url=base_url, timeout=timeout)
        else:
            client = httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except (httpx.HTTPError, OSError, RuntimeError) as exc:
                _logger.debug("ignoring error while closing pooled client: %s", exc)
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients"]
