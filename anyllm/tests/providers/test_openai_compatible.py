"""OpenAI-compatible adapters exercised over ``httpx.MockTransport``."""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from anyllm.base.errors import ErrorCode, ProviderError, ValidationError
from anyllm.base.models import (
    ChatResponse,
    EmbeddingResponse,
    FinishReason,
    ImageContent,
    Message,
    TextContent,
    TextResponse,
    ToolCall,
)
from anyllm.ollama import OllamaProvider
from anyllm.openai import OpenAIProvider
from anyllm.openrouter import OpenRouterProvider

CHAT_BODY: Dict[str, Any] = {
    "id": "chatcmpl-1",
    "model": "gpt-4o-2024-08-06",
    "choices": [
        {
            "index": 0,
            "finish_reason": "tool_calls",
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "get_weather", "arguments": "{\"city\": \"Paris\"}"},
                    }
                ],
            },
        }
    ],
    "usage": {"prompt_tokens": 11, "completion_tokens": 7, "total_tokens": 18},
}


class _Recorder:
    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []
        self._responder = responder

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responder(request)

    def body(self, i: int = -1) -> Dict[str, Any]:
        return json.loads(self.requests[i].content)


def _client(recorder: _Recorder) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(recorder))


def _openai(recorder: _Recorder, **options: Any) -> OpenAIProvider:
    config = {
        "api_key": "sk-test",
        "organization": "org-1",
        "project": "proj-1",
        "options": {"retry_max_attempts": 1, **options},
    }
    return OpenAIProvider(config, http_client=_client(recorder))


def test_chat_request_translation_and_tool_call_parsing():
    rec = _Recorder(lambda r: httpx.Response(200, json=CHAT_BODY))
    provider = _openai(rec)
    resp = provider.chat(
        "gpt-4o",
        [Message.system("be terse"), Message.user("weather in Paris?")],
        temperature=0.1,
        max_tokens=50,
        tools=[{"name": "get_weather", "description": "Weather", "parameters": {"type": "object"}}],
        tool_choice={"name": "get_weather"},
        options={"seed": 7, "retry_max_attempts": 1},
    )

    request = rec.requests[0]
    assert str(request.url) == "https://api.openai.com/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert request.headers["OpenAI-Organization"] == "org-1"
    assert request.headers["OpenAI-Project"] == "proj-1"
    body = rec.body()
    assert body["model"] == "gpt-4o"
    assert body["messages"] == [
        {"role": "system", "content": "be terse"},
        {"role": "user", "content": "weather in Paris?"},
    ]
    assert body["temperature"] == 0.1 and body["max_tokens"] == 50
    assert body["tools"][0] == {
        "type": "function",
        "function": {"name": "get_weather", "description": "Weather", "parameters": {"type": "object"}},
    }
    assert body["tool_choice"] == {"type": "function", "function": {"name": "get_weather"}}
    assert body["seed"] == 7
    assert "retry_max_attempts" not in body

    assert isinstance(resp, ChatResponse)
    assert resp.content == ""
    assert resp.tool_calls == (ToolCall("call_1", "get_weather", {"city": "Paris"}),)
    assert resp.finish_reason is FinishReason.TOOL_CALLS
    assert resp.usage.total_tokens == 18
    assert resp.raw["id"] == "chatcmpl-1"


def test_multipart_and_tool_history_rendering():
    rec = _Recorder(lambda r: httpx.Response(200, json=CHAT_BODY))
    call = ToolCall("call_1", "get_weather", {"city": "Paris"})
    _openai(rec).chat(
        "gpt-4o",
        [
            Message.user([TextContent("look"), ImageContent.from_base64("AAAA", "image/png")]),
            Message.assistant(tool_calls=[call]),
            Message.tool("{\"temp\": 21}", "call_1"),
        ],
    )
    user, assistant, tool = rec.body()["messages"]
    assert user["content"][1] == {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}}
    assert assistant["content"] is None
    assert assistant["tool_calls"][0]["function"]["arguments"] == "{\"city\": \"Paris\"}"
    assert tool == {"role": "tool", "content": "{\"temp\": 21}", "tool_call_id": "call_1"}


def test_generate_text_uses_chat_endpoint():
    body = {
        "id": "x",
        "model": "gpt-4o",
        "choices": [{"message": {"role": "assistant", "content": "a haiku"}, "finish_reason": "stop"}],
        "usage": {"prompt_tokens": 3, "completion_tokens": 2, "total_tokens": 5},
    }
    rec = _Recorder(lambda r: httpx.Response(200, json=body))
    resp = _openai(rec).generate_text("gpt-4o", "write a haiku", system="you are a poet")
    assert rec.requests[0].url.path.endswith("/chat/completions")
    assert rec.body()["messages"][0] == {"role": "system", "content": "you are a poet"}
    assert rec.body()["messages"][1] == {"role": "user", "content": "write a haiku"}
    assert isinstance(resp, TextResponse)
    assert resp.text == "a haiku"
    assert resp.finish_reason is FinishReason.STOP


def test_embeddings():
    body = {
        "model": "text-embedding-3-small",
        "data": [
            {"index": 1, "embedding": [0.3, 0.4]},
            {"index": 0, "embedding": [0.1, 0.2]},
        ],
        "usage": {"prompt_tokens": 4, "total_tokens": 4},
    }
    rec = _Recorder(lambda r: httpx.Response(200, json=body))
    resp = _openai(rec).embed("text-embedding-3-small", ["a", "b"])
    assert rec.requests[0].url.path == "/v1/embeddings"
    assert rec.body()["input"] == ["a", "b"]
    assert isinstance(resp, EmbeddingResponse)
    assert resp.embeddings == [[0.1, 0.2], [0.3, 0.4]]
    assert resp.usage.prompt_tokens == 4 and resp.usage.completion_tokens == 0


def test_http_error_is_classified_with_vendor_message():
    rec = _Recorder(lambda r: httpx.Response(401, json={"error": {"message": "Incorrect API key"}}))
    with pytest.raises(ProviderError) as ei:
        _openai(rec).chat("gpt-4o", [Message.user("hi")])
    err = ei.value
    assert err.code is ErrorCode.AUTH
    assert err.status_code == 401
    assert err.message == "Incorrect API key"
    assert err.provider == "openai" and err.model == "gpt-4o"
    assert not err.retryable


def test_transient_errors_are_retried():
    statuses = iter([503, 502, 200])

    def respond(request):
        status = next(statuses)
        return httpx.Response(status, json=CHAT_BODY if status == 200 else {"error": "busy"})

    rec = _Recorder(respond)
    provider = _openai(rec, retry_max_attempts=3, retry_delay_base=0.0)
    resp = provider.chat("gpt-4o", [Message.user("hi")])
    assert len(rec.requests) == 3
    assert resp.usage.total_tokens == 18


def test_retry_exhaustion_raises_last_error():
    rec = _Recorder(lambda r: httpx.Response(429, json={"error": {"message": "slow down"}}))
    provider = _openai(rec, retry_max_attempts=2, retry_delay_base=0.0)
    with pytest.raises(ProviderError) as ei:
        provider.chat("gpt-4o", [Message.user("hi")])
    assert ei.value.code is ErrorCode.RATE_LIMIT
    assert ei.value.retryable
    assert len(rec.requests) == 2


def test_transport_failure_is_transient():
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError) as ei:
        _openai(_Recorder(fail)).chat("gpt-4o", [Message.user("hi")])
    assert ei.value.code is ErrorCode.TRANSIENT


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>gateway</html>"),
        httpx.Response(200, json={"object": "chat.completion"}),
        httpx.Response(200, json=[1, 2, 3]),
    ],
)
def test_malformed_bodies_are_bad_response(response):
    rec = _Recorder(lambda r: response)
    with pytest.raises(ProviderError) as ei:
        _openai(rec).chat("gpt-4o", [Message.user("hi")])
    assert ei.value.code is ErrorCode.BAD_RESPONSE


def test_validation_happens_before_any_network_call():
    rec = _Recorder(lambda r: httpx.Response(200, json=CHAT_BODY))
    provider = OpenAIProvider({"base_uri": "not-a-url"}, http_client=_client(rec))
    with pytest.raises(ValidationError) as ei:
        provider.chat("", [Message.user("hi")], temperature=5, top_p=-0.5)
    assert len(ei.value.errors) == 5
    assert rec.requests == []


def test_empty_messages_rejected():
    provider = _openai(_Recorder(lambda r: httpx.Response(200, json=CHAT_BODY)))
    with pytest.raises(ValidationError):
        provider.chat("gpt-4o", [])


def test_ollama_needs_no_key_and_sends_no_auth():
    rec = _Recorder(lambda r: httpx.Response(200, json=CHAT_BODY))
    OllamaProvider({"options": {"retry_max_attempts": 1}}, http_client=_client(rec)).chat(
        "llama3", [Message.user("hi")]
    )
    request = rec.requests[0]
    assert str(request.url) == "http://localhost:11434/v1/chat/completions"
    assert "Authorization" not in request.headers


def test_openrouter_attribution_headers_and_base_uri_override():
    rec = _Recorder(lambda r: httpx.Response(200, json=CHAT_BODY))
    config = {
        "api_key": "or-key",
        "headers": {"X-Custom": "1"},
        "options": {
            "http_referer": "https://app.example",
            "app_title": "Example",
            "base_uri": "https://proxy.example/api/v1/",
            "retry_max_attempts": 1,
        },
    }
    OpenRouterProvider(config, http_client=_client(rec)).chat("openrouter/auto", [Message.user("hi")])
    request = rec.requests[0]
    assert str(request.url) == "https://proxy.example/api/v1/chat/completions"
    assert request.headers["HTTP-Referer"] == "https://app.example"
    assert request.headers["X-Title"] == "Example"
    assert request.headers["X-Custom"] == "1"
    assert "http_referer" not in rec.body()
