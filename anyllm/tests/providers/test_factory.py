from __future__ import annotations

import pytest

from anyllm import create_provider
from anyllm.anthropic import AnthropicProvider
from anyllm.base.errors import UnsupportedProviderError, ValidationError
from anyllm.base.factory import Provider, ProviderFactory
from anyllm.base.middleware import MiddlewarePipeline
from anyllm.base.models import Message
from anyllm.config import ProviderConfig
from anyllm.google import GoogleProvider
from anyllm.mistral import MistralProvider
from anyllm.ollama import OllamaProvider
from anyllm.openai import OpenAIProvider
from anyllm.openrouter import OpenRouterProvider
from anyllm.xai import XAIProvider


@pytest.mark.parametrize(
    "name, klass",
    [
        ("openai", OpenAIProvider),
        ("anthropic", AnthropicProvider),
        ("google", GoogleProvider),
        ("openrouter", OpenRouterProvider),
        ("xai", XAIProvider),
        ("mistral", MistralProvider),
        ("ollama", OllamaProvider),
    ],
)
def test_every_supported_provider_resolves(name, klass):
    provider = ProviderFactory.create(name, {"api_key": "k"})
    assert isinstance(provider, klass)
    assert provider.provider_name == name


def test_enum_and_case_insensitive_strings():
    assert isinstance(create_provider(Provider.XAI, {"api_key": "k"}), XAIProvider)
    assert isinstance(create_provider("  OpenAI ", {"api_key": "k"}), OpenAIProvider)
    assert ProviderFactory.supported() == (
        "openai",
        "anthropic",
        "google",
        "openrouter",
        "xai",
        "mistral",
        "ollama",
    )


def test_unknown_provider_is_rejected():
    with pytest.raises(UnsupportedProviderError) as ei:
        create_provider("cohere")
    assert isinstance(ei.value, ValidationError)
    assert "cohere" in str(ei.value)
    assert "openai" in str(ei.value)


def test_config_resolution_from_environment(monkeypatch):
    monkeypatch.setenv("MISTRAL_API_KEY", "env-key")
    monkeypatch.setenv("MISTRAL_TIMEOUT", "12.5")
    provider = create_provider("mistral")
    assert provider.config.api_key == "env-key"
    assert provider.config.timeout == 12.5
    assert provider.base_uri == "https://api.mistral.ai/v1"


def test_explicit_config_and_shared_pipeline():
    pipeline = MiddlewarePipeline()
    config = ProviderConfig(api_key="k", base_uri="https://gw.example/v1/")
    provider = ProviderFactory.create("openai", config, pipeline=pipeline)
    assert provider.config is config
    assert provider.pipeline is pipeline
    assert provider.base_uri == "https://gw.example/v1"


def test_missing_key_surfaces_on_first_call():
    provider = create_provider("openai")
    with pytest.raises(ValidationError) as ei:
        provider.chat("gpt-4o-mini", [Message.user("hi")])
    assert ei.value.errors == ["API key is required for provider 'openai'"]


def test_local_provider_needs_no_key():
    provider = create_provider("ollama")
    assert provider.config.api_key is None
    assert provider.auth_headers() == {}
