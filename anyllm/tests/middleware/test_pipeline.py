"""Pipeline ordering, short-circuiting and context copy-on-write tests."""

from __future__ import annotations

from typing import List

import pytest

from anyllm.base.middleware import Middleware, MiddlewarePipeline, RequestContext, ResponseContext
from anyllm.base.models import ChatResponse


class _Recorder(Middleware):
    def __init__(self, name: str, log: List[str]):
        self.name = name
        self.log = log

    def handle(self, ctx, next_handler):
        self.log.append(f"{self.name}:before")
        result = next_handler(ctx)
        self.log.append(f"{self.name}:after")
        return result.with_metadata(self.name, True)


class _ShortCircuit(Middleware):
    def handle(self, ctx, next_handler):
        return ResponseContext(request=ctx, response=ChatResponse(model=ctx.model, content="short"))


def _ctx() -> RequestContext:
    return RequestContext(provider="fake", model="m", method="chat", params={"x": 1})


def _terminal(log: List[str]):
    def handler(ctx):
        log.append("terminal")
        return ResponseContext(request=ctx, response=ChatResponse(model=ctx.model, content="ok"))

    return handler


def test_first_added_is_outermost():
    log: List[str] = []
    pipeline = MiddlewarePipeline().add(_Recorder("a", log)).add(_Recorder("b", log))
    result = pipeline.execute(_ctx(), _terminal(log))
    assert log == ["a:before", "b:before", "terminal", "b:after", "a:after"]
    assert result.metadata == {"b": True, "a": True}
    assert result.response.content == "ok"


def test_short_circuit_skips_rest_of_chain():
    log: List[str] = []
    pipeline = MiddlewarePipeline([_Recorder("outer", log), _ShortCircuit(), _Recorder("inner", log)])
    result = pipeline.execute(_ctx(), _terminal(log))
    assert log == ["outer:before", "outer:after"]
    assert result.response.content == "short"


def test_empty_pipeline_calls_handler_directly():
    log: List[str] = []
    assert len(MiddlewarePipeline()) == 0
    MiddlewarePipeline().execute(_ctx(), _terminal(log))
    assert log == ["terminal"]


def test_middleware_tuple_is_a_copy_and_clear():
    pipeline = MiddlewarePipeline([_ShortCircuit()])
    snapshot = pipeline.middleware
    assert isinstance(snapshot, tuple) and len(snapshot) == 1
    pipeline.clear()
    assert len(pipeline) == 0
    assert len(snapshot) == 1


def test_exceptions_propagate_unchanged():
    log: List[str] = []

    def failing(ctx):
        raise KeyError("boom")

    pipeline = MiddlewarePipeline([_Recorder("a", log)])
    with pytest.raises(KeyError):
        pipeline.execute(_ctx(), failing)
    assert log == ["a:before"]


def test_response_context_with_metadata_is_copy_on_write():
    original = ResponseContext(request=_ctx(), response=ChatResponse(content="x"), metadata={"k": 1})
    updated = original.with_metadata("cached", True)
    assert original.metadata == {"k": 1}
    assert updated.metadata == {"k": 1, "cached": True}
    assert updated.is_successful() and not updated.is_failed()
    failed = ResponseContext(request=_ctx(), error="bad")
    assert failed.is_failed()
    assert failed.with_response(ChatResponse()).response is not None


def test_request_context_copies():
    ctx = _ctx()
    with_meta = ctx.with_metadata("user_id", "u1")
    assert "user_id" not in ctx.metadata
    assert with_meta.with_model("other").model == "other"
    assert ctx.with_params({"y": 2}).params == {"y": 2}
    assert ctx.params == {"x": 1}
    assert ctx.elapsed_ms() >= 0
    assert ctx.to_dict()["provider"] == "fake"
