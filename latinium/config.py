"""
Environment-driven configuration for the Latinium analysis service.
Values come from the process environment, optionally seeded from a .env file.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Gemini defaults: low temperature, nucleus sampling
DEFAULT_MODEL_NAME = "gemini-2.0-flash-lite"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_TOP_P = 0.8
DEFAULT_TOP_K = 40
DEFAULT_MAX_OUTPUT_TOKENS = 4096

# Server-side abuse guard
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 10
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 60
DEFAULT_RATE_LIMIT_STORAGE_URI = "memory://"

# Deployment metadata reported by the diagnosis endpoint only
DEPLOYMENT_ENV_VARS = ("APP_ENV", "DEPLOY_CONTEXT", "DEPLOY_URL", "COMMIT_REF", "BRANCH")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    model_name: str = DEFAULT_MODEL_NAME
    temperature: float = DEFAULT_TEMPERATURE
    top_p: float = DEFAULT_TOP_P
    top_k: int = DEFAULT_TOP_K
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    timeout_ms: Optional[int] = None
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS
    rate_limit_window_seconds: float = DEFAULT_RATE_LIMIT_WINDOW_SECONDS
    rate_limit_storage_uri: str = DEFAULT_RATE_LIMIT_STORAGE_URI
    cache_max_entries: Optional[int] = None
    cache_ttl_seconds: Optional[int] = None
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the current environment."""
    cors_allow_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        model_name=os.getenv("GEMINI_MODEL", DEFAULT_MODEL_NAME),
        temperature=_env_float("GEMINI_TEMPERATURE", DEFAULT_TEMPERATURE),
        top_p=_env_float("GEMINI_TOP_P", DEFAULT_TOP_P),
        top_k=_env_int("GEMINI_TOP_K", DEFAULT_TOP_K),
        max_output_tokens=_env_int("GEMINI_MAX_OUTPUT_TOKENS", DEFAULT_MAX_OUTPUT_TOKENS),
        timeout_ms=_env_int("GEMINI_TIMEOUT_MS", None),
        rate_limit_max_requests=_env_int("RATE_LIMIT_MAX_REQUESTS", DEFAULT_RATE_LIMIT_MAX_REQUESTS),
        rate_limit_window_seconds=_env_float("RATE_LIMIT_WINDOW_SECONDS", DEFAULT_RATE_LIMIT_WINDOW_SECONDS),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", DEFAULT_RATE_LIMIT_STORAGE_URI),
        cache_max_entries=_env_int("CACHE_MAX_ENTRIES", None),
        cache_ttl_seconds=_env_int("CACHE_TTL_SECONDS", None),
        cors_allow_origins=cors_allow_origins or ["*"],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
