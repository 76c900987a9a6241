"""Provider configuration merging and request validation tests."""

from __future__ import annotations

import json

import pytest

from anyllm.base.errors import ValidationError
from anyllm.config import (
    CONFIG_FILE_ENV,
    ProviderConfig,
    clear_config_cache,
    collect_errors,
    get_provider_config,
    validate_request,
)
from anyllm.config.defaults import ANTHROPIC_DEFAULT_TIMEOUT_SECONDS, OPENAI_DEFAULT_BASE_URL


def test_defaults_apply_without_env_or_file():
    cfg = get_provider_config("openai")
    assert cfg.base_uri == OPENAI_DEFAULT_BASE_URL
    assert cfg.api_key is None
    assert get_provider_config("anthropic").timeout == ANTHROPIC_DEFAULT_TIMEOUT_SECONDS


def test_merge_order_file_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "openai:\n  apiKey: from-file\n  organization: org-file\n  baseUrl: https://file.example/v1\n",
        encoding="utf-8",
    )
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("OPENAI_TIMEOUT", "15")
    clear_config_cache()

    cfg = get_provider_config("openai", {"project": "proj-override"})
    assert cfg.api_key == "from-env"
    assert cfg.organization == "org-file"
    assert cfg.base_uri == "https://file.example/v1"
    assert cfg.timeout == 15.0
    assert cfg.project == "proj-override"


def test_json_config_file_is_supported(tmp_path, monkeypatch):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"mistral": {"api_key": "m-key", "options": {"retry_max_attempts": 1}}}))
    monkeypatch.setenv(CONFIG_FILE_ENV, str(path))
    clear_config_cache()
    cfg = get_provider_config("mistral")
    assert cfg.api_key == "m-key"
    assert cfg.option("retry_max_attempts") == 1


def test_missing_config_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_FILE_ENV, str(tmp_path / "nope.yaml"))
    clear_config_cache()
    assert get_provider_config("xai").api_key is None


def test_provider_config_aliases_and_immutability():
    cfg = ProviderConfig.from_dict({"apiKey": "k", "baseUri": "https://x.example", "timeout": None})
    assert cfg.api_key == "k"
    assert cfg.base_uri == "https://x.example"
    assert cfg.timeout == 60.0
    with pytest.raises(Exception):
        cfg.api_key = "other"
    updated = cfg.with_updates(timeout=5)
    assert updated.timeout == 5.0 and cfg.timeout == 60.0
    assert cfg.to_dict()["api_key"] == "***"
    assert cfg.to_dict(redact=False)["api_key"] == "k"


def test_collect_errors_reports_every_violation():
    cfg = ProviderConfig(base_uri="ftp://nope", options={"base_uri": "not a url"})
    errors = collect_errors(
        "openai",
        cfg,
        model="",
        params={"temperature": 3.5, "max_tokens": 0, "top_p": 1.5},
    )
    assert len(errors) == 7
    assert any("API key" in e for e in errors)
    assert any("Model" in e for e in errors)
    assert any("Temperature" in e for e in errors)
    assert any("Max tokens" in e for e in errors)
    assert any("Top P" in e for e in errors)


def test_local_provider_needs_no_api_key():
    assert collect_errors("ollama", ProviderConfig(), model="llama3") == []


def test_max_tokens_must_be_integer():
    errors = collect_errors("openai", ProviderConfig(api_key="k"), model="m", params={"max_tokens": 10.5})
    assert errors == ["Max tokens must be an integer (got: 10.5)"]


def test_validate_request_raises_single_error():
    with pytest.raises(ValidationError) as ei:
        validate_request("anthropic", ProviderConfig(), model="claude", params={"temperature": -1})
    assert len(ei.value.errors) == 2
