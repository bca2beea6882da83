"""
app/config.py — Central configuration loaded from environment variables.
All modules import settings from here; never read os.environ directly elsewhere.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_configured(value: Optional[str]) -> bool:
    """
    True if a credential looks usable.

    None, blank strings and ``.env.example`` placeholders such as
    ``your_openai_api_key_here`` all count as "not configured".
    """
    if value is None:
        return False
    cleaned = value.strip()
    if not cleaned:
        return False
    lowered = cleaned.lower()
    return not (lowered.startswith("your_") and lowered.endswith("_here"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Intent oracle ─────────────────────────────────────────────────────────
    ai_provider: Literal["openai", "openrouter"] = Field(
        default="openai",
        description="Preferred oracle provider; the other one is used if this one is not configured",
    )
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_model: str = Field(default="gpt-4o-mini", description="OpenAI model identifier")
    openrouter_api_key: Optional[str] = Field(default=None, description="OpenRouter API key")
    openrouter_model: str = Field(
        default="openai/gpt-4o-mini",
        description="OpenRouter model identifier",
    )
    oracle_temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for intent classification",
    )
    oracle_max_tokens: int = Field(
        default=150,
        gt=0,
        description="Upper bound on the oracle's reply length",
    )

    # ── Scoring ───────────────────────────────────────────────────────────────
    scoring_max_concurrency: int = Field(
        default=5,
        gt=0,
        description="Max in-flight oracle calls per scoring batch",
    )

    # ── Uploads ───────────────────────────────────────────────────────────────
    max_upload_bytes: int = Field(
        default=5 * 1024 * 1024,
        gt=0,
        description="Largest accepted leads CSV upload, in bytes",
    )

    # ── Database ──────────────────────────────────────────────────────────────
    database_url: str = Field(
        default="sqlite:///./lead_scoring.db",
        description="SQLAlchemy connection URI",
    )

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("ai_provider", mode="before")
    @classmethod
    def _normalize_provider(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


# Singleton — import this everywhere
settings = Settings()
