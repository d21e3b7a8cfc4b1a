"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for the external service credentials and knobs."""

    xai_api_key: Optional[str] = None
    llm_model: str = "grok-4-fast-reasoning"
    google_maps_api_key: Optional[str] = None
    unsplash_access_key: Optional[str] = None
    sentry_dsn: Optional[str] = None
    http_timeout_s: float = 10.0
    enrichment_concurrency: int = 4
    currency_symbol: str = "£"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from the process environment."""

        return cls(
            xai_api_key=os.getenv("XAI_API_KEY"),
            llm_model=os.getenv("LLM_MODEL", "grok-4-fast-reasoning"),
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY"),
            unsplash_access_key=os.getenv("UNSPLASH_ACCESS_KEY"),
            sentry_dsn=os.getenv("SENTRY_DSN"),
            http_timeout_s=_float_env("HTTP_TIMEOUT_S", 10.0),
            enrichment_concurrency=max(1, _int_env("ENRICHMENT_CONCURRENCY", 4)),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "£"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value
