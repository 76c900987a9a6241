"""Provider Factory utilities.

Purpose
-------
Resolve a :class:`Provider` identifier to an adapter instance exactly once, at
construction time. Adapters are imported lazily using ``importlib`` so creating
one vendor's adapter never imports the others.

Failure modes
-------------
- Unknown identifiers raise :class:`UnsupportedProviderError` (a
  ``ValidationError``), before any configuration is read.
- Configuration errors raised by the adapter constructor propagate unchanged.
"""

from __future__ import annotations

from enum import Enum
from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

import httpx

from ..config import ProviderConfig
from .errors import UnsupportedProviderError
from .middleware import MiddlewarePipeline
from .provider import BaseProvider


class Provider(str, Enum):
    """Closed set of supported vendors."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    OPENROUTER = "openrouter"
    XAI = "xai"
    MISTRAL = "mistral"
    OLLAMA = "ollama"

    @classmethod
    def parse(cls, value: Union["Provider", str]) -> "Provider":
        if isinstance(value, cls):
            return value
        name = str(value or "").lower().strip()
        try:
            return cls(name)
        except ValueError as exc:
            supported = ", ".join(p.value for p in cls)
            raise UnsupportedProviderError(
                f"Unsupported provider '{value}' (supported: {supported})", [f"unknown provider: {value}"]
            ) from exc


def create_provider(provider: Union[Provider, str], config: Any = None, **kwargs: Any) -> BaseProvider:
    """Compatibility helper that delegates to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, config, **kwargs)


class ProviderFactory:
    """Create provider adapters from a :class:`Provider` value or its string."""

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[Provider, Tuple[str, str]] = {
        Provider.OPENAI: ("anyllm.openai.client", "OpenAIProvider"),
        Provider.ANTHROPIC: ("anyllm.anthropic.client", "AnthropicProvider"),
        Provider.GOOGLE: ("anyllm.google.client", "GoogleProvider"),
        Provider.OPENROUTER: ("anyllm.openrouter.client", "OpenRouterProvider"),
        Provider.XAI: ("anyllm.xai.client", "XAIProvider"),
        Provider.MISTRAL: ("anyllm.mistral.client", "MistralProvider"),
        Provider.OLLAMA: ("anyllm.ollama.client", "OllamaProvider"),
    }

    @classmethod
    def adapter_class(cls, provider: Union[Provider, str]) -> Type[BaseProvider]:
        module_path, class_name = cls._PROVIDERS[Provider.parse(provider)]
        return getattr(import_module(module_path), class_name)

    @classmethod
    def create(
        cls,
        provider: Union[Provider, str],
        config: Union[ProviderConfig, Mapping[str, Any], None] = None,
        *,
        pipeline: Optional[MiddlewarePipeline] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> BaseProvider:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            ``Provider`` member or its canonical string (case-insensitive).
        config:
            ``ProviderConfig`` or mapping; ``None`` resolves it through
            :func:`anyllm.config.get_provider_config`.
        pipeline:
            Middleware pipeline shared with the adapter (a fresh one otherwise).
        http_client:
            Injected ``httpx.Client`` (tests, custom transports).

        Raises
        ------
        UnsupportedProviderError
            If the provider is not a member of :class:`Provider`.
        """
        klass = cls.adapter_class(provider)
        return klass(config, pipeline=pipeline, http_client=http_client)

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical provider names in declaration order."""
        return tuple(p.value for p in Provider)


__all__ = ["Provider", "ProviderFactory", "create_provider"]
