"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URLs, timeouts, middleware settings).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by ANYLLM_CONFIG_FILE
    3. Environment variables (e.g. OPENAI_API_KEY, OLLAMA_BASE_URL)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_API_KEY, <PROVIDER>_BASE_URL, <PROVIDER>_ORGANIZATION,
<PROVIDER>_PROJECT, <PROVIDER>_TIMEOUT; e.g. OPENAI_API_KEY, XAI_BASE_URL.

External Config File (Optional)
-------------------------------
If ANYLLM_CONFIG_FILE is set to a path, JSON is tried first, then YAML.
Structure example:

```
openai:
  api_key: sk-...
  timeout: 30
ollama:
  base_uri: http://gpu-box:11434/v1
  options:
    retry_max_attempts: 1
```

Public API
----------
* get_provider_config(provider, overrides=None) -> ProviderConfig
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from ..base.logging import get_logger
from .defaults import (
    ANTHROPIC_DEFAULT_BASE_URL,
    ANTHROPIC_DEFAULT_TIMEOUT_SECONDS,
    GOOGLE_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_BASE_URL,
    OLLAMA_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_BASE_URL,
    OPENROUTER_DEFAULT_BASE_URL,
    XAI_DEFAULT_BASE_URL,
)
from .provider_config import ProviderConfig
from .validation import collect_errors, is_http_url, is_local_provider, validate_request

CONFIG_FILE_ENV = "ANYLLM_CONFIG_FILE"

_logger = get_logger("anyllm.config")

# -------------------- Defaults --------------------

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "openai": {"base_uri": OPENAI_DEFAULT_BASE_URL},
    "openrouter": {"base_uri": OPENROUTER_DEFAULT_BASE_URL},
    "xai": {"base_uri": XAI_DEFAULT_BASE_URL},
    "mistral": {"base_uri": MISTRAL_DEFAULT_BASE_URL},
    "ollama": {"base_uri": OLLAMA_DEFAULT_BASE_URL},
    "anthropic": {"base_uri": ANTHROPIC_DEFAULT_BASE_URL, "timeout": ANTHROPIC_DEFAULT_TIMEOUT_SECONDS},
    "google": {"base_uri": GOOGLE_DEFAULT_BASE_URL},
}

ENV_FIELD_MAP = {
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "base_uri": "BASE_URL",
    "organization": "ORGANIZATION",
    "project": "PROJECT",
    "timeout": "TIMEOUT",
}

_FILE_CACHE: Optional[Tuple[str, Dict[str, Any]]] = None


def _parse_config_text(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def _load_external_config() -> Dict[str, Any]:
    """Load (and memoize per path) the optional provider config file."""
    global _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if _FILE_CACHE is not None and _FILE_CACHE[0] == path:
        return _FILE_CACHE[1]
    p = Path(path)
    data: Any = {}
    if p.exists():
        try:
            data = _parse_config_text(p.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            _logger.warning("ignoring unreadable config file %s: %s", path, exc)
            data = {}
    if not isinstance(data, dict):
        data = {}
    _FILE_CACHE = (path, data)
    return data


def clear_config_cache() -> None:
    """Forget the memoized config file (tests and long-lived processes)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val is not None and val != "":
            out[field] = val
    return out


def _normalize(section: Mapping[str, Any]) -> Dict[str, Any]:
    """Fold camelCase and ``base_url`` spellings onto canonical field names."""
    return ProviderConfig.from_dict(section).model_dump(exclude_unset=True)


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> ProviderConfig:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    Unknown providers simply get no defaults.
    """
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}

    # 1. Defaults
    cfg |= DEFAULTS.get(name, {})

    # 2. External config file section
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= _normalize(file_cfg)

    # 3. Env overrides
    cfg |= _env_overrides(name)

    # 4. Explicit overrides arg
    if overrides:
        cfg |= _normalize(overrides)

    return ProviderConfig(**cfg)


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "ProviderConfig",
    "get_provider_config",
    "clear_config_cache",
    "collect_errors",
    "validate_request",
    "is_local_provider",
    "is_http_url",
]
