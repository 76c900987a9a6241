"""Cache backend behavior (memory, SQLite, Redis)."""

from __future__ import annotations

import pytest

from anyllm.base.cache import Cache, MemoryCache, RedisCache, SqliteCache, create_cache
from anyllm.base.errors import ValidationError
from anyllm.base.models import ChatResponse, Usage


@pytest.fixture(params=["memory", "sqlite", "redis"])
def cache(request, clock, fake_redis, db_path) -> Cache:
    if request.param == "memory":
        return MemoryCache(clock=clock)
    if request.param == "sqlite":
        return SqliteCache(db_path=db_path, clock=clock)
    return RedisCache(fake_redis)


def test_set_get_has_delete(cache):
    assert cache.get("missing", "dflt") == "dflt"
    cache.set("k", {"n": 1}, 60)
    assert cache.has("k")
    assert cache.get("k") == {"n": 1}
    assert cache.delete("k") is True
    assert cache.delete("k") is False
    assert not cache.has("k")


def test_entries_expire_by_time(cache, clock):
    cache.set("k", "v", 5)
    clock.advance(4)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_non_positive_ttl_removes_entry(cache):
    cache.set("k", "v", 60)
    cache.set("k", "v2", 0)
    assert not cache.has("k")


def test_clear(cache):
    cache.set("a", 1, 60)
    cache.set("b", 2, 60)
    cache.clear()
    assert not cache.has("a") and not cache.has("b")


def test_responses_round_trip_through_storage(cache):
    resp = ChatResponse(id="r1", model="m", usage=Usage(1, 2, 3), content="hi", raw={"x": 1})
    cache.set("resp", {"response": resp, "cached_at": 1.0}, 60)
    stored = cache.get("resp")
    assert stored["response"] == resp
    assert stored["response"].raw == {"x": 1}


def test_backends_satisfy_protocol(cache):
    assert isinstance(cache, Cache)


def test_default_ttl_applies(clock):
    cache = MemoryCache(default_ttl=10, clock=clock)
    cache.set("k", "v")
    clock.advance(11)
    assert cache.get("k") is None


def test_redis_undecodable_entry_is_a_miss(fake_redis):
    cache = RedisCache(fake_redis, prefix="c:")
    fake_redis.set("c:bad", b"not a pickle")
    assert cache.get("bad", "fallback") == "fallback"
    assert fake_redis.get("c:bad") is None


def test_redis_clear_only_touches_prefix(fake_redis):
    cache = RedisCache(fake_redis, prefix="c:")
    cache.set("a", 1)
    fake_redis.set("other", b"keep")
    cache.clear()
    assert fake_redis.get("other") == b"keep"
    assert not cache.has("a")


def test_cache_factory(db_path, fake_redis):
    assert isinstance(create_cache("memory"), MemoryCache)
    assert isinstance(create_cache("array"), MemoryCache)
    assert isinstance(create_cache("sqlite", db_path=db_path), SqliteCache)
    assert isinstance(create_cache("redis", client=fake_redis), RedisCache)
    with pytest.raises(ValidationError):
        create_cache("filesystem")


def test_fractional_ttl_keeps_entry_until_it_elapses(cache, clock):
    cache.set("k", "v", 0.5)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_redis_fractional_ttl_rounds_up(fake_redis):
    cache = RedisCache(fake_redis, prefix="c:")
    cache.set("k", "v", 0.4)
    assert 0 < fake_redis.pttl("c:k") <= 1000
