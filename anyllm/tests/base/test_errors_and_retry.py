"""Error classification and retry policy tests."""

from __future__ import annotations

import httpx
import pytest

from anyllm.base.errors import (
    RETRYABLE_CODES,
    ErrorCode,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
    ValidationError,
    classify_exception,
)
from anyllm.base.resilience.retry import RetryConfig, call_with_retry


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://api.example.com/v1/chat/completions")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize(
    "status, code",
    [
        (401, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
        (599, ErrorCode.SERVER_ERROR),
    ],
)
def test_classify_http_status(status, code):
    assert classify_exception(_status_error(status)) is code


def test_classify_transport_and_heuristics():
    assert classify_exception(httpx.ReadTimeout("slow")) is ErrorCode.TIMEOUT
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.TRANSIENT
    assert classify_exception(RuntimeError("rate limit exceeded")) is ErrorCode.RATE_LIMIT
    assert classify_exception(RuntimeError("mystery")) is ErrorCode.UNKNOWN
    err = ProviderError(code=ErrorCode.AUTH, message="bad key", provider="openai")
    assert classify_exception(err) is ErrorCode.AUTH


def test_rate_limit_error_shape():
    err = RateLimitError("slow down", retry_after=12, key="ratelimit:openai:gpt")
    assert isinstance(err, ProviderError)
    assert err.code is ErrorCode.RATE_LIMIT
    assert err.status_code == 429
    assert err.retry_after == 12
    assert err.key == "ratelimit:openai:gpt"
    assert err.code in RETRYABLE_CODES


def test_validation_error_lists_all_violations():
    err = ValidationError.from_errors("Configuration validation failed", ["a", "b"])
    assert err.errors == ["a", "b"]
    assert "- a" in str(err) and "- b" in str(err)
    assert issubclass(UnsupportedProviderError, ValidationError)
    assert isinstance(err, ValueError)


class _Flaky:
    def __init__(self, fail_times: int, code: ErrorCode):
        self.calls = 0
        self.fail_times = fail_times
        self.code = code

    def __call__(self):
        self.calls += 1
        if self.calls <= self.fail_times:
            raise ProviderError(code=self.code, message="boom", provider="x")
        return "ok"


def test_retry_succeeds_after_transient():
    delays = []
    attempt_log = []
    cfg = RetryConfig(
        max_attempts=3,
        delay_base=1.0,
        sleep=delays.append,
        attempt_logger=lambda **kw: attempt_log.append(kw),
    )
    flaky = _Flaky(fail_times=2, code=ErrorCode.TRANSIENT)
    assert call_with_retry(flaky, cfg) == "ok"
    assert flaky.calls == 3
    assert delays == [1.0, 2.0]
    assert attempt_log[-1]["error"] is None


def test_retry_stops_on_non_retryable():
    cfg = RetryConfig(max_attempts=4, delay_base=1.0, sleep=lambda _: None)
    flaky = _Flaky(fail_times=99, code=ErrorCode.VALIDATION)

    with pytest.raises(ProviderError) as ei:
        call_with_retry(flaky, cfg)
    assert ei.value.code is ErrorCode.VALIDATION
    assert flaky.calls == 1


def test_retry_reraises_last_error_when_exhausted():
    cfg = RetryConfig(max_attempts=2, delay_base=0.1, sleep=lambda _: None)
    flaky = _Flaky(fail_times=99, code=ErrorCode.UNAVAILABLE)
    with pytest.raises(ProviderError):
        call_with_retry(flaky, cfg)
    assert flaky.calls == 2


def test_retry_delays_are_capped():
    cfg = RetryConfig(max_attempts=6, delay_base=1.0, max_delay=4.0)
    assert list(cfg.delays()) == [1.0, 2.0, 4.0, 4.0, 4.0]
