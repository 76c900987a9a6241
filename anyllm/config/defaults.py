"""anyllm.config.defaults
======================

Central place for small, stable default values used across the anyllm
package. These defaults can be overridden via environment variables, the
optional config file or explicit arguments, but provide sensible fallbacks for
local development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# ---- Provider endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENROUTER_DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
XAI_DEFAULT_BASE_URL = "https://api.x.ai/v1"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434/v1"
ANTHROPIC_DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
GOOGLE_DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

ANTHROPIC_API_VERSION = "2023-06-01"
# Anthropic requires max_tokens on every request.
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

# Providers that run without an API key.
LOCAL_PROVIDERS = frozenset({"ollama", "local"})

# ---- HTTP ----
DEFAULT_TIMEOUT_SECONDS = 60.0
# Anthropic completions on large models regularly exceed a minute.
ANTHROPIC_DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_RETRY_MAX_ATTEMPTS = 3
DEFAULT_RETRY_DELAY_BASE = 0.5
DEFAULT_RETRY_MAX_DELAY = 8.0

# ---- Request parameter bounds ----
TEMPERATURE_RANGE = (0.0, 2.0)
MAX_TOKENS_RANGE = (1, 1_000_000)
TOP_P_RANGE = (0.0, 1.0)

# ---- Middleware ----
CACHE_DEFAULT_TTL_SECONDS = 3600
CACHE_KEY_PREFIX = "llm:"
RATE_LIMIT_DEFAULT_MAX_ATTEMPTS = 10
RATE_LIMIT_DEFAULT_DECAY_SECONDS = 60
RATE_LIMIT_DEFAULT_KEY_PREFIX = "ratelimit"

# ---- Redis ----
REDIS_RATE_LIMIT_PREFIX = "anyllm:ratelimit:"
REDIS_CACHE_PREFIX = "anyllm:cache:"

# ---- SQLite config (infrastructure) ----
# Standard busy timeout to mitigate lock contention (milliseconds).
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"
SQLITE_RATE_LIMIT_TABLE = "llm_rate_limits"
SQLITE_CACHE_TABLE = "llm_cache"
SQLITE_LOG_TABLE = "llm_logs"


__all__ = [
    # Provider endpoints
    "OPENAI_DEFAULT_BASE_URL",
    "OPENROUTER_DEFAULT_BASE_URL",
    "XAI_DEFAULT_BASE_URL",
    "MISTRAL_DEFAULT_BASE_URL",
    "OLLAMA_DEFAULT_BASE_URL",
    "ANTHROPIC_DEFAULT_BASE_URL",
    "GOOGLE_DEFAULT_BASE_URL",
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MAX_TOKENS",
    "LOCAL_PROVIDERS",
    # HTTP
    "DEFAULT_TIMEOUT_SECONDS",
    "ANTHROPIC_DEFAULT_TIMEOUT_SECONDS",
    "DEFAULT_RETRY_MAX_ATTEMPTS",
    "DEFAULT_RETRY_DELAY_BASE",
    "DEFAULT_RETRY_MAX_DELAY",
    # Bounds
    "TEMPERATURE_RANGE",
    "MAX_TOKENS_RANGE",
    "TOP_P_RANGE",
    # Middleware
    "CACHE_DEFAULT_TTL_SECONDS",
    "CACHE_KEY_PREFIX",
    "RATE_LIMIT_DEFAULT_MAX_ATTEMPTS",
    "RATE_LIMIT_DEFAULT_DECAY_SECONDS",
    "RATE_LIMIT_DEFAULT_KEY_PREFIX",
    # Redis
    "REDIS_RATE_LIMIT_PREFIX",
    "REDIS_CACHE_PREFIX",
    # SQLite
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
    "SQLITE_RATE_LIMIT_TABLE",
    "SQLITE_CACHE_TABLE",
    "SQLITE_LOG_TABLE",
]
