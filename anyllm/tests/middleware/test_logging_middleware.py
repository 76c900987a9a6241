"""LoggingMiddleware and log driver tests."""

from __future__ import annotations

import json
import logging

import pytest

from anyllm.base.cost import ModelPricing, PricingRegistry
from anyllm.base.errors import ErrorCode, ProviderError
from anyllm.base.log_drivers import LogEntry, LoggerLogDriver, SqliteLogDriver
from anyllm.base.logging import get_logger
from anyllm.base.middleware import LoggingMiddleware, MiddlewarePipeline, RequestContext, ResponseContext
from anyllm.base.models import ChatResponse, Message, Usage
from anyllm.mock import FakeProvider


class _ListDriver:
    def __init__(self):
        self.entries = []

    def write(self, entry: LogEntry) -> None:
        self.entries.append(entry)


class _BrokenDriver:
    def write(self, entry: LogEntry) -> None:
        raise OSError("disk full")


def _pricing() -> PricingRegistry:
    registry = PricingRegistry(include_defaults=False)
    registry.register("fake", "priced", ModelPricing(input_per_1m=2.50, output_per_1m=10.00))
    return registry


def test_successful_call_is_logged_with_usage_and_cost():
    driver = _ListDriver()
    provider = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(driver, _pricing())]))
    provider.queue_response(ChatResponse(model="priced", usage=Usage(1_000_000, 500_000, 1_500_000), content="hi"))
    provider.chat("priced", [Message.user("hello")], metadata={"user_id": "u1"})

    (entry,) = driver.entries
    assert entry.successful
    assert entry.provider == "fake" and entry.model == "priced" and entry.method == "chat"
    assert entry.tokens_used == 1_500_000
    assert entry.prompt_tokens == 1_000_000
    assert entry.cost == pytest.approx(7.50)
    assert entry.metadata["user_id"] == "u1"
    assert entry.request["messages"] == [{"role": "user", "content": "hello"}]
    assert entry.response["content"] == "hi"
    assert entry.duration_ms >= 0


def test_unknown_model_cost_is_none_and_no_registry_is_none():
    driver = _ListDriver()
    provider = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(driver, _pricing())]))
    provider.chat("unpriced", [Message.user("hello")])
    assert driver.entries[-1].cost is None

    bare = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(driver)]))
    bare.chat("priced", [Message.user("hello")])
    assert driver.entries[-1].cost is None


def test_failure_is_logged_with_zero_cost_and_reraised():
    driver = _ListDriver()
    provider = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(driver, _pricing())]))
    error = ProviderError(code=ErrorCode.SERVER_ERROR, message="upstream exploded", provider="fake")
    provider.queue_error(error)

    with pytest.raises(ProviderError) as ei:
        provider.chat("priced", [Message.user("hello")])
    assert ei.value is error

    (entry,) = driver.entries
    assert not entry.successful
    assert entry.cost == 0.0
    assert entry.tokens_used == 0
    assert "upstream exploded" in entry.error
    assert entry.metadata["error_type"] == "ProviderError"
    assert entry.metadata["error"] == {
        "code": "server_error",
        "message": "upstream exploded",
        "provider": "fake",
        "retryable": False,
    }


def test_failed_result_context_costs_zero():
    driver = _ListDriver()
    middleware = LoggingMiddleware(driver, _pricing())
    ctx = RequestContext(provider="fake", model="priced", method="chat")
    middleware.handle(ctx, lambda c: ResponseContext(request=c, error="soft failure"))
    assert driver.entries[0].cost == 0.0
    assert driver.entries[0].error == "soft failure"


def test_broken_driver_does_not_mask_provider_error():
    provider = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(_BrokenDriver())]))
    provider.queue_error(ProviderError(code=ErrorCode.TIMEOUT, message="slow", provider="fake"))
    with pytest.raises(ProviderError) as ei:
        provider.chat("m", [Message.user("hello")])
    assert ei.value.code is ErrorCode.TIMEOUT


def test_logger_driver_emits_request_event(caplog):
    logger = get_logger("anyllm.tests.requests")
    base = get_logger()
    base.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="anyllm"):
            LoggerLogDriver(logger).write(LogEntry(provider="fake", model="m", method="chat", cost=0.1))
            LoggerLogDriver(logger).write(LogEntry(provider="fake", model="m", method="chat", error="x"))
    finally:
        base.removeHandler(caplog.handler)
    ok, failed = [json.loads(r.getMessage()) for r in caplog.records[-2:]]
    assert ok["event"] == "llm.request" and ok["provider"] == "fake" and ok["cost"] == 0.1
    assert "error" not in ok
    assert failed["error"] == "x"
    assert caplog.records[-1].levelno == logging.WARNING


def test_pipeline_with_sqlite_driver(db_path):
    driver = SqliteLogDriver(db_path=db_path)
    provider = FakeProvider(pipeline=MiddlewarePipeline([LoggingMiddleware(driver, PricingRegistry())]))
    provider.chat("gpt-4o", [Message.user("one two three")])
    (entry,) = driver.recent()
    assert entry.method == "chat"
    assert entry.tokens_used > 0
