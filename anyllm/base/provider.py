"""BaseProvider: shared request execution for every vendor adapter.

Purpose:
- Implement the public ``chat`` / ``generate_text`` / ``embed`` calls once so
  adapters only translate between the canonical model and their wire format.
- Validate configuration and sampling parameters before any network call.
- Wrap the outbound HTTP call in the middleware pipeline.

External dependencies:
- ``httpx`` for the HTTP call (pooled client unless one is injected).

Retry semantics:
- Transient failures (``RETRYABLE_CODES``) are retried inside the innermost
  handler, so middleware sees one call per request. The attempt count comes from
  the ``retry_max_attempts`` option (per call, then ``ProviderConfig.options``);
  ``1`` disables retries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

import httpx

from ..config import ProviderConfig, get_provider_config, validate_request
from .errors import ErrorCode, ProviderError, ValidationError, classify_exception
from .http import get_httpx_client
from .interfaces import WireRequest
from .logging import LogContext, get_logger, log_event
from .middleware import Middleware, MiddlewarePipeline, RequestContext, ResponseContext
from .models import ChatResponse, EmbeddingResponse, Message, Response, Role, TextResponse
from .resilience.retry import RetryConfig, call_with_retry
from ..config.defaults import DEFAULT_RETRY_DELAY_BASE, DEFAULT_RETRY_MAX_ATTEMPTS

MessageInput = Union[Message, Mapping[str, Any]]

# Option keys consumed by the adapter itself and never forwarded to the vendor.
RESERVED_OPTIONS = frozenset({"retry_max_attempts", "retry_delay_base", "base_uri"})

_PARSE_ERRORS = (KeyError, TypeError, ValueError, IndexError, AttributeError)


def normalize_messages(messages: Iterable[MessageInput]) -> List[Message]:
    """Accept ``Message`` objects or ``{role, content}`` mappings."""
    out: List[Message] = []
    for m in messages or ():
        if isinstance(m, Message):
            out.append(m)
        elif isinstance(m, Mapping):
            out.append(Message.from_dict(dict(m)))
        else:
            raise ValidationError(f"message must be a Message or mapping (got: {type(m).__name__})")
    if not out:
        raise ValidationError("At least one message is required")
    return out


def vendor_options(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Return the pass-through vendor options of a canonical request."""
    options = params.get("options") or {}
    return {k: v for k, v in options.items() if k not in RESERVED_OPTIONS}


def _error_message(response: httpx.Response) -> str:
    """Best-effort human message from a vendor error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or f"HTTP {response.status_code}"
    if isinstance(body, Mapping):
        err = body.get("error")
        if isinstance(err, Mapping) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
        if body.get("message"):
            return str(body["message"])
    return f"HTTP {response.status_code}"


class BaseProvider(ABC):
    """Common implementation behind every adapter.

    Subclasses set ``provider_name`` and ``default_base_uri`` and implement
    :meth:`translate_request` and :meth:`parse_response` (the ``LLMProvider``
    contract). ``generate_text`` is served by the chat translator: adapters only
    ever see the ``chat`` and ``embed`` methods.
    """

    provider_name: str = ""
    default_base_uri: Optional[str] = None
    supports_embeddings: bool = True

    def __init__(
        self,
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        pipeline: Optional[MiddlewarePipeline] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        if config is None:
            config = get_provider_config(self.provider_name)
        elif not isinstance(config, ProviderConfig):
            config = ProviderConfig.from_dict(config)
        self.config: ProviderConfig = config
        self.pipeline = pipeline if pipeline is not None else MiddlewarePipeline()
        self._http_client = http_client
        self._logger = get_logger(f"anyllm.{self.provider_name or 'provider'}")

    # ------------------------------------------------------------------
    # Adapter contract
    # ------------------------------------------------------------------
    @abstractmethod
    def translate_request(self, method: str, params: Dict[str, Any]) -> WireRequest:
        """Build the vendor HTTP request for ``method`` (``chat`` or ``embed``)."""

    @abstractmethod
    def parse_response(self, method: str, payload: Dict[str, Any]) -> Response:
        """Normalize a decoded vendor response body."""

    def auth_headers(self) -> Dict[str, str]:
        """Authentication headers; bearer token by default."""
        if not self.config.api_key:
            return {}
        return {"Authorization": f"Bearer {self.config.api_key}"}

    @property
    def base_uri(self) -> str:
        uri = self.config.option("base_uri") or self.config.base_uri or self.default_base_uri
        if not uri:
            raise ValidationError(f"No base URI configured for provider '{self.provider_name}'")
        return str(uri).rstrip("/")

    def add_middleware(self, middleware: Middleware) -> "BaseProvider":
        self.pipeline.add(middleware)
        return self

    # ------------------------------------------------------------------
    # Public calls
    # ------------------------------------------------------------------
    def chat(
        self,
        model: str,
        messages: Sequence[MessageInput],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        tools: Optional[Sequence[Mapping[str, Any]]] = None,
        tool_choice: Any = None,
        options: Optional[Mapping[str, Any]] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> ChatResponse:
        """Run a chat completion through the pipeline."""
        params = _compact(
            messages=normalize_messages(messages),
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
            tools=list(tools) if tools else None,
            tool_choice=tool_choice,
            options=dict(options) if options else None,
        )
        return self._call("chat", model, params, metadata)

    def generate_text(
        self,
        model: str,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        top_p: Optional[float] = None,
        system: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> TextResponse:
        """Complete a single prompt; sent as one user message via the chat endpoint."""
        if not isinstance(prompt, str) or not prompt:
            raise ValidationError("Prompt is required")
        params = _compact(
            prompt=prompt,
            system=system,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
            options=dict(options) if options else None,
        )
        return self._call("generate_text", model, params, metadata)

    def embed(
        self,
        model: str,
        inputs: Union[str, Sequence[str]],
        options: Optional[Mapping[str, Any]] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> EmbeddingResponse:
        """Embed one string or a batch of strings."""
        if not self.supports_embeddings:
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"{self.provider_name} does not support embeddings",
                provider=self.provider_name,
                model=model,
            )
        batch = [inputs] if isinstance(inputs, str) else list(inputs or ())
        if not batch:
            raise ValidationError("At least one input is required")
        params = _compact(input=batch, options=dict(options) if options else None)
        return self._call("embed", model, params, metadata)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def _call(self, method: str, model: str, params: Dict[str, Any], metadata: Optional[Mapping[str, Any]]) -> Any:
        validate_request(self.provider_name, self.config, model, params)
        ctx = RequestContext(
            provider=self.provider_name,
            model=model,
            method=method,
            params=params,
            metadata=dict(metadata or {}),
        )
        result = self.pipeline.execute(ctx, self._terminal)
        if result.response is None:
            raise ProviderError(
                code=ErrorCode.UNKNOWN,
                message=result.error or "pipeline returned no response",
                provider=self.provider_name,
                model=model,
            )
        return result.response

    def _terminal(self, ctx: RequestContext) -> ResponseContext:
        return ResponseContext(request=ctx, response=self._dispatch(ctx))

    def _dispatch(self, ctx: RequestContext) -> Response:
        """Translate, send (with retry) and parse one request."""
        log_ctx = LogContext.from_request(ctx, provider=self.provider_name)
        method = "chat" if ctx.method == "generate_text" else ctx.method
        params = text_to_chat_params(ctx.params) if ctx.method == "generate_text" else dict(ctx.params)
        params["model"] = ctx.model
        wire = self.translate_request(method, params)

        log_event(self._logger, "provider.request", log_ctx, level=logging.DEBUG, endpoint=wire.endpoint)
        try:
            payload = call_with_retry(
                lambda: self._send(wire, ctx.model),
                self._retry_config(ctx.params.get("options") or {}),
            )
        except ProviderError as exc:
            log_event(
                self._logger,
                "provider.error",
                log_ctx,
                level=logging.WARNING,
                code=exc.code.value,
                status_code=exc.status_code,
                error=exc.message,
            )
            raise

        try:
            response = self.parse_response(method, payload)
        except _PARSE_ERRORS as exc:
            log_event(self._logger, "provider.error", log_ctx, level=logging.WARNING, code=ErrorCode.BAD_RESPONSE.value)
            raise ProviderError(
                code=ErrorCode.BAD_RESPONSE,
                message=f"could not parse {method} response: {exc}",
                provider=self.provider_name,
                model=ctx.model,
                raw=exc,
            ) from exc

        if ctx.method == "generate_text" and isinstance(response, ChatResponse):
            response = chat_to_text_response(response)
        log_event(
            self._logger,
            "provider.response",
            log_ctx,
            level=logging.DEBUG,
            tokens=response.usage.total_tokens,
            duration_ms=round(ctx.elapsed_ms(), 3),
        )
        return response

    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self.base_uri, self.provider_name, self.config.timeout)

    def _send(self, wire: WireRequest, model: Optional[str]) -> Dict[str, Any]:
        """Perform one HTTP call and return the decoded JSON body."""
        url = self.base_uri + wire.endpoint
        headers = {**self.auth_headers(), **self.config.headers, **wire.headers}
        try:
            resp = self._client().request(
                wire.http_method,
                url,
                json=wire.payload,
                headers=headers,
                params=wire.query or None,
                timeout=self.config.timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            code = classify_exception(exc)
            raise ProviderError(
                code=code,
                message=_error_message(exc.response),
                provider=self.provider_name,
                model=model,
                retryable=code.is_retryable,
                status_code=exc.response.status_code,
                raw=exc,
            ) from exc
        except httpx.HTTPError as exc:
            code = classify_exception(exc)
            raise ProviderError(
                code=code,
                message=str(exc) or type(exc).__name__,
                provider=self.provider_name,
                model=model,
                retryable=code.is_retryable,
                raw=exc,
            ) from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise ProviderError(
                code=ErrorCode.BAD_RESPONSE,
                message="response body is not valid JSON",
                provider=self.provider_name,
                model=model,
                status_code=resp.status_code,
                raw=exc,
            ) from exc
        if not isinstance(body, dict):
            raise ProviderError(
                code=ErrorCode.BAD_RESPONSE,
                message=f"expected a JSON object (got: {type(body).__name__})",
                provider=self.provider_name,
                model=model,
                status_code=resp.status_code,
            )
        return body

    def _retry_config(self, options: Mapping[str, Any]) -> RetryConfig:
        attempts = options.get("retry_max_attempts", self.config.option("retry_max_attempts", DEFAULT_RETRY_MAX_ATTEMPTS))
        delay = options.get("retry_delay_base", self.config.option("retry_delay_base", DEFAULT_RETRY_DELAY_BASE))
        return RetryConfig(max_attempts=max(1, int(attempts)), delay_base=float(delay))


def _compact(**params: Any) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


def text_to_chat_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Rewrite ``generate_text`` params as a chat request."""
    out = {k: v for k, v in params.items() if k not in ("prompt", "system")}
    messages = []
    if params.get("system"):
        messages.append(Message(Role.SYSTEM, params["system"]))
    messages.append(Message(Role.USER, params["prompt"]))
    out["messages"] = messages
    return out


def chat_to_text_response(response: ChatResponse) -> TextResponse:
    return TextResponse(
        id=response.id,
        model=response.model,
        usage=response.usage,
        raw=response.raw,
        error=response.error,
        text=response.content,
        finish_reason=response.finish_reason,
    )


__all__ = [
    "BaseProvider",
    "MessageInput",
    "RESERVED_OPTIONS",
    "normalize_messages",
    "vendor_options",
    "text_to_chat_params",
    "chat_to_text_response",
]
