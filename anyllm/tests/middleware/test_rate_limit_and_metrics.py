"""RateLimitMiddleware and MetricsMiddleware tests."""

from __future__ import annotations

import pytest

from anyllm.base.errors import ErrorCode, ProviderError, RateLimitError
from anyllm.base.middleware import (
    MetricsMiddleware,
    MiddlewarePipeline,
    RateLimitMiddleware,
    RequestContext,
    ResponseContext,
)
from anyllm.base.models import ChatResponse, Message, Usage
from anyllm.base.ratelimit import MemoryRateLimiter
from anyllm.mock import FakeProvider


def test_rate_limit_denies_without_reaching_provider(clock):
    limiter = MemoryRateLimiter(clock=clock)
    provider = FakeProvider(pipeline=MiddlewarePipeline([RateLimitMiddleware(limiter, max_attempts=2)]))
    provider.chat("m", [Message.user("1")])
    provider.chat("m", [Message.user("2")])
    with pytest.raises(RateLimitError) as ei:
        provider.chat("m", [Message.user("3")])
    assert provider.call_count == 2
    assert ei.value.provider == "fake"
    assert ei.value.model == "m"
    assert ei.value.key == "ratelimit:fake:m"
    assert 0 < ei.value.retry_after <= 60

    clock.advance(60)
    provider.chat("m", [Message.user("4")])
    assert provider.call_count == 3


def test_rate_limit_key_includes_user_and_annotates_remaining():
    limiter = MemoryRateLimiter()
    middleware = RateLimitMiddleware(limiter, max_attempts=5, key_prefix="rl")
    ctx = RequestContext(provider="openai", model="gpt-4o", method="chat", metadata={"user_id": 7})
    assert middleware.key_for(ctx) == "rl:openai:gpt-4o:7"
    assert middleware.with_key_prefix("other").key_for(ctx) == "other:openai:gpt-4o:7"
    assert middleware.key_prefix == "rl"

    result = middleware.handle(ctx, lambda c: ResponseContext(request=c, response=ChatResponse()))
    assert result.metadata["rate_limit_remaining"] == 4
    assert result.metadata["rate_limit_max"] == 5


def test_per_user_windows_are_independent():
    limiter = MemoryRateLimiter()
    provider = FakeProvider(pipeline=MiddlewarePipeline([RateLimitMiddleware(limiter, max_attempts=1)]))
    provider.chat("m", [Message.user("a")], metadata={"user_id": "alice"})
    provider.chat("m", [Message.user("a")], metadata={"user_id": "bob"})
    with pytest.raises(RateLimitError):
        provider.chat("m", [Message.user("a")], metadata={"user_id": "alice"})


def test_metrics_count_success_and_failure():
    metrics = MetricsMiddleware()
    provider = FakeProvider(pipeline=MiddlewarePipeline([metrics]))
    provider.queue_response(ChatResponse(usage=Usage(3, 4, 7), content="ok"))
    provider.queue_error(ProviderError(code=ErrorCode.SERVER_ERROR, message="down", provider="fake"))

    provider.chat("m", [Message.user("hi")])
    with pytest.raises(ProviderError):
        provider.chat("m", [Message.user("hi")])
    provider.embed("e", "vector me")

    snap = metrics.snapshot()
    assert snap["total_requests"] == 3
    assert snap["failed_requests"] == 1
    assert snap["total_tokens"] >= 7
    assert snap["by_provider"]["fake"]["requests"] == 3
    assert snap["by_provider"]["fake"]["failed"] == 1
    assert snap["by_method"]["chat"]["requests"] == 2
    assert snap["by_method"]["embed"]["requests"] == 1
    assert snap["success_rate"] == pytest.approx(2 / 3)
    assert snap["avg_duration_ms"] >= 0

    snap["total_requests"] = 99
    assert metrics.snapshot()["total_requests"] == 3
    metrics.reset()
    assert metrics.snapshot()["total_requests"] == 0
    assert metrics.snapshot()["success_rate"] == 1.0
