"""FakeProvider replays and end-to-end pipeline behaviour without a network."""

from __future__ import annotations

import pytest

from anyllm.base.cache import MemoryCache
from anyllm.base.errors import ErrorCode, ProviderError, RateLimitError, ValidationError
from anyllm.base.log_drivers import SqliteLogDriver
from anyllm.base.middleware import (
    CachingMiddleware,
    LoggingMiddleware,
    MetricsMiddleware,
    MiddlewarePipeline,
    RateLimitMiddleware,
)
from anyllm.base.models import ChatResponse, EmbeddingResponse, Message, TextResponse, Usage
from anyllm.base.ratelimit import MemoryRateLimiter
from anyllm.mock import FakeProvider


def test_default_replies_are_deterministic(fake_provider):
    resp = fake_provider.chat("fake-model", [{"role": "user", "content": "hello there"}])
    assert isinstance(resp, ChatResponse)
    assert resp.content == "echo: hello there"
    assert resp.usage == Usage(2, 3, 5)
    assert fake_provider.call_count == 1

    again = FakeProvider().chat("fake-model", [Message.user("hello there")])
    assert again.content == resp.content and again.usage == resp.usage


def test_generate_text_and_embed_defaults(fake_provider):
    text = fake_provider.generate_text("fake-model", "ping")
    assert isinstance(text, TextResponse)
    assert text.text == "echo: ping"

    emb = fake_provider.embed("fake-embed", ["ab", "abc"])
    assert isinstance(emb, EmbeddingResponse)
    assert emb.embeddings == [[2.0, 195.0, 1.0], [3.0, 294.0, 1.0]]


def test_queued_replies_and_errors_are_replayed_in_order():
    canned = ChatResponse(id="c1", model="m", content="canned")
    boom = ProviderError(code=ErrorCode.SERVER_ERROR, message="boom", provider="fake", model="m")
    provider = FakeProvider(responses=[canned]).queue_error(boom)

    assert provider.chat("m", [Message.user("a")]) is canned
    with pytest.raises(ProviderError) as ei:
        provider.chat("m", [Message.user("b")])
    assert ei.value is boom
    assert provider.chat("m", [Message.user("c")]).content == "echo: c"
    assert [ctx.params["messages"][0].content for ctx in provider.calls] == ["a", "b", "c"]


def test_validation_runs_before_the_provider_is_reached(fake_provider):
    with pytest.raises(ValidationError):
        fake_provider.chat("fake-model", [Message.user("x")], max_tokens=0)
    with pytest.raises(ValidationError):
        fake_provider.generate_text("fake-model", "")
    with pytest.raises(ValidationError):
        fake_provider.embed("fake-model", [])
    assert fake_provider.calls == []


def test_full_pipeline_cache_ratelimit_logging_metrics(db_path):
    cache = MemoryCache()
    driver = SqliteLogDriver(db_path)
    metrics = MetricsMiddleware()
    pipeline = MiddlewarePipeline(
        [
            metrics,
            LoggingMiddleware(driver),
            CachingMiddleware(cache, ttl=60),
            RateLimitMiddleware(MemoryRateLimiter(), max_attempts=2, decay_seconds=60),
        ]
    )
    provider = FakeProvider(pipeline=pipeline)

    first = provider.chat("fake-model", [Message.user("same")], temperature=0.0)
    second = provider.chat("fake-model", [Message.user("same")], temperature=0.0)
    assert second == first
    assert provider.call_count == 1

    provider.chat("fake-model", [Message.user("other")])
    with pytest.raises(RateLimitError) as ei:
        provider.chat("fake-model", [Message.user("third")])
    assert ei.value.code is ErrorCode.RATE_LIMIT
    assert provider.call_count == 2

    rows = driver.recent(10)
    assert len(rows) == 4
    snap = metrics.snapshot()
    assert snap["total_requests"] == 4
    assert snap["failed_requests"] == 1
