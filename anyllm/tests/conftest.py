"""Pytest configuration for the anyllm test suite.

Provides deterministic clocks, an isolated ``fakeredis`` server per test for
the Redis backends, and isolation of provider environment variables / config
file memoization so tests never depend on the developer's shell.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, List

import fakeredis
import pytest

from anyllm.config import CONFIG_FILE_ENV, DEFAULTS, ENV_FIELD_MAP, clear_config_cache

_PROVIDER_ENV_PREFIXES = tuple(DEFAULTS) + ("fake", "local")


class FakeClock:
    """Manually advanced epoch clock.

    Callbacks registered with ``on_advance`` receive the number of seconds
    every time the clock moves forward.
    """

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start
        self._listeners: List[Callable[[float], None]] = []

    def __call__(self) -> float:
        return self.now

    def on_advance(self, listener: Callable[[float], None]) -> None:
        self._listeners.append(listener)

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for listener in self._listeners:
            listener(seconds)


def age_redis_keys(client: Any, seconds: float) -> None:
    """Shorten every key's TTL by ``seconds``, deleting keys that run out.

    Redis expiry follows wall time, so this keeps keys written through the
    Redis backends in step with a ``FakeClock``.
    """
    elapsed_ms = int(seconds * 1000)
    for name in list(client.scan_iter()):
        ttl_ms = client.pttl(name)
        if ttl_ms is None or ttl_ms < 0:
            continue
        remaining = ttl_ms - elapsed_ms
        if remaining <= 0:
            client.delete(name)
        else:
            client.pexpire(name, remaining)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_redis(clock: FakeClock) -> fakeredis.FakeRedis:
    """A ``fakeredis`` client on a private server whose keys age with ``clock``."""
    client = fakeredis.FakeRedis(server=fakeredis.FakeServer())
    clock.on_advance(lambda seconds: age_redis_keys(client, seconds))
    return client


@pytest.fixture()
def db_path(tmp_path) -> str:
    return str(tmp_path / "anyllm-test.db")


@pytest.fixture(autouse=True)
def isolated_provider_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove provider env vars and the config file pointer for every test."""
    for provider in _PROVIDER_ENV_PREFIXES:
        for suffix in ENV_FIELD_MAP.values():
            monkeypatch.delenv(f"{provider.upper()}_{suffix}", raising=False)
    monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture()
def fake_provider():
    """A ``FakeProvider`` with an empty reply queue and its own pipeline."""
    from anyllm.mock import FakeProvider

    return FakeProvider()
