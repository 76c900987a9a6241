"""Deterministic fake provider for offline testing.

Purpose
-------
Exercise the full request path (validation, pipeline, middleware) without any
network traffic. Queued responses or errors are replayed in order; when the
queue is empty a deterministic default is synthesized from the request.

Every request that reaches the provider is recorded in :attr:`FakeProvider.calls`
so tests can assert how often (and with what context) the network would have
been hit, e.g. that a cache hit skipped it.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Mapping, Optional, Union

from ..base.interfaces import WireRequest
from ..base.logging import LogContext, get_logger, log_event
from ..base.middleware import MiddlewarePipeline, RequestContext
from ..base.models import ChatResponse, EmbeddingResponse, FinishReason, Response, Usage
from ..base.provider import BaseProvider, chat_to_text_response, text_to_chat_params
from ..config import ProviderConfig

Reply = Union[Response, BaseException]


def _words(text: str) -> int:
    return len(text.split())


class FakeProvider(BaseProvider):
    """Adapter that replays canned replies instead of calling an API."""

    provider_name = "fake"
    default_base_uri = "http://fake.invalid"

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        responses: Optional[Iterable[Reply]] = None,
        pipeline: Optional[MiddlewarePipeline] = None,
        provider_name: Optional[str] = None,
    ) -> None:
        if provider_name:
            self.provider_name = provider_name
        super().__init__(config if config is not None else {"api_key": "fake-key"}, pipeline=pipeline)
        self._queue: Deque[Reply] = deque(responses or ())
        self._lock = threading.Lock()
        self.calls: List[RequestContext] = []
        self._logger = get_logger("anyllm.mock")

    def queue_response(self, response: Response) -> "FakeProvider":
        with self._lock:
            self._queue.append(response)
        return self

    def queue_error(self, error: BaseException) -> "FakeProvider":
        with self._lock:
            self._queue.append(error)
        return self

    @property
    def call_count(self) -> int:
        return len(self.calls)

    # ------------------------------------------------------------------
    # Adapter contract (no wire format: payload is the canonical params)
    # ------------------------------------------------------------------
    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        return WireRequest(f"/{method}", dict(params))

    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        return self._default_response(method, payload)

    def _dispatch(self, ctx: RequestContext) -> Response:
        with self._lock:
            self.calls.append(ctx)
            reply = self._queue.popleft() if self._queue else None
        log_event(
            self._logger,
            "fake.dispatch",
            LogContext.from_request(ctx, provider=self.provider_name),
            queued=reply is not None,
        )
        if isinstance(reply, BaseException):
            raise reply
        if reply is None:
            params = text_to_chat_params(ctx.params) if ctx.method == "generate_text" else dict(ctx.params)
            params["model"] = ctx.model
            reply = self._default_response("embed" if ctx.method == "embed" else "chat", params)
        if ctx.method == "generate_text" and isinstance(reply, ChatResponse):
            reply = chat_to_text_response(reply)
        return reply

    def _default_response(self, method: str, params: Mapping[str, Any]) -> Response:
        """Synthesize a reply whose content and usage derive from the request."""
        model = str(params.get("model") or "")
        n = len(self.calls)
        if method == "embed":
            inputs = list(params.get("input") or ())
            vectors = [[float(len(t)), float(sum(map(ord, t)) % 997), 1.0] for t in inputs]
            tokens = sum(_words(t) for t in inputs)
            return EmbeddingResponse(
                id=f"fake-{n}",
                model=model,
                usage=Usage(tokens, 0, tokens),
                embeddings=vectors,
            )
        messages = params.get("messages") or ()
        prompt = " ".join(m.text_or_joined() for m in messages)
        last = messages[-1].text_or_joined() if messages else ""
        content = f"echo: {last}"
        usage = Usage(_words(prompt), _words(content), _words(prompt) + _words(content))
        return ChatResponse(
            id=f"fake-{n}",
            model=model,
            usage=usage,
            content=content,
            finish_reason=FinishReason.STOP,
        )


__all__ = ["FakeProvider", "Reply"]
