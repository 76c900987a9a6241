"""
Immutable per-provider connection settings.

``ProviderConfig`` is a frozen pydantic model: once an adapter is constructed
its credentials, endpoint and timeout cannot change underneath it. Use
:meth:`ProviderConfig.with_updates` to derive a modified copy.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .defaults import DEFAULT_TIMEOUT_SECONDS

# Accepted spellings for each field (first match wins).
_KEY_ALIASES: Dict[str, tuple] = {
    "api_key": ("api_key", "apiKey"),
    "base_uri": ("base_uri", "baseUri", "base_url", "baseUrl"),
    "organization": ("organization",),
    "project": ("project",),
    "timeout": ("timeout",),
    "headers": ("headers",),
    "options": ("options",),
}


class ProviderConfig(BaseModel):
    """Connection settings for one provider adapter.

    Attributes
    ----------
    api_key: Optional[str]
        Secret used for authentication; optional for local providers.
    base_uri: Optional[str]
        Endpoint override; adapters fall back to their vendor default.
    organization, project: Optional[str]
        Vendor account scoping headers (OpenAI style).
    timeout: float
        Per-request HTTP timeout in seconds.
    headers: Dict[str, str]
        Extra HTTP headers sent with every request.
    options: Dict[str, Any]
        Adapter-specific knobs (e.g. ``retry_max_attempts``).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_key: Optional[str] = None
    base_uri: Optional[str] = None
    organization: Optional[str] = None
    project: Optional[str] = None
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    headers: Dict[str, str] = Field(default_factory=dict)
    options: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ProviderConfig":
        """Build a config from a snake_case or camelCase mapping.

        ``None`` values are ignored so they never override a default.
        """
        data = data or {}
        values: Dict[str, Any] = {}
        for field_name, aliases in _KEY_ALIASES.items():
            for alias in aliases:
                if data.get(alias) is not None:
                    values[field_name] = data[alias]
                    break
        return cls(**values)

    def with_updates(self, **changes: Any) -> "ProviderConfig":
        """Return a validated copy with ``changes`` applied."""
        merged = self.model_dump()
        merged.update(changes)
        return type(self)(**merged)

    def option(self, name: str, default: Any = None) -> Any:
        return self.options.get(name, default)

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        """Return a plain dict; the API key is masked unless ``redact`` is False."""
        data = self.model_dump()
        if redact and data.get("api_key"):
            data["api_key"] = "***"
        return data


__all__ = ["ProviderConfig"]
