"""
Shared request/config validation rules.

Every rule is evaluated and all violations are reported together in one
:class:`~anyllm.base.errors.ValidationError`, raised before any network call.

Rules
-----
- API key required unless the provider runs locally (``ollama``, ``local``).
- Model must be a non-empty string.
- ``temperature`` in [0, 2], ``max_tokens`` in [1, 1_000_000], ``top_p`` in [0, 1].
- ``base_uri`` (config field or ``options["base_uri"]``) must be an http(s) URL.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional
from urllib.parse import urlparse

from ..base.errors import ValidationError
from .defaults import LOCAL_PROVIDERS, MAX_TOKENS_RANGE, TEMPERATURE_RANGE, TOP_P_RANGE
from .provider_config import ProviderConfig


def is_local_provider(provider: str) -> bool:
    return provider.lower() in LOCAL_PROVIDERS


def is_http_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _check_range(errors: List[str], label: str, value: Any, bounds: tuple, integer: bool = False) -> None:
    if value is None:
        return
    low, high = bounds
    if not _is_number(value) or (integer and not isinstance(value, int)):
        kind = "an integer" if integer else "a number"
        errors.append(f"{label} must be {kind} (got: {value!r})")
        return
    if value < low or value > high:
        errors.append(f"{label} must be between {low} and {high} (got: {value})")


def collect_errors(
    provider: str,
    config: ProviderConfig,
    model: Optional[str] = None,
    params: Optional[Mapping[str, Any]] = None,
    *,
    require_model: bool = True,
) -> List[str]:
    """Return every violated rule as a message (empty list when valid)."""
    errors: List[str] = []
    params = params or {}

    if not config.api_key and not is_local_provider(provider):
        errors.append(f"API key is required for provider '{provider}'")
    if require_model and (not isinstance(model, str) or not model.strip()):
        errors.append(f"Model is required for provider '{provider}'")

    _check_range(errors, "Temperature", params.get("temperature"), TEMPERATURE_RANGE)
    _check_range(errors, "Max tokens", params.get("max_tokens"), MAX_TOKENS_RANGE, integer=True)
    _check_range(errors, "Top P", params.get("top_p"), TOP_P_RANGE)

    for label, uri in (("base URI", config.base_uri), ("options base URI", config.options.get("base_uri"))):
        if uri is not None and not is_http_url(uri):
            errors.append(f"Invalid {label}: {uri}")
    return errors


def validate_request(
    provider: str,
    config: ProviderConfig,
    model: Optional[str] = None,
    params: Optional[Mapping[str, Any]] = None,
    *,
    require_model: bool = True,
) -> None:
    """Raise :class:`ValidationError` listing all violations, if any."""
    errors = collect_errors(provider, config, model, params, require_model=require_model)
    if errors:
        raise ValidationError.from_errors("Configuration validation failed", errors)


__all__ = ["collect_errors", "validate_request", "is_local_provider", "is_http_url"]
