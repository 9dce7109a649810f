"""
Application configuration.

Loads settings from environment variables (and `.env`) with sensible defaults.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FailurePolicy(str, Enum):
    """What a multi-language update does when one language fails."""

    ABORT = "abort"        # Stop at the first failing language
    CONTINUE = "continue"  # Log the failure and carry on with the rest


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Translation backend
    # ==========================================================================

    # "deepl" or "llm"
    translation_backend: str = "deepl"

    # ==========================================================================
    # DeepL
    # ==========================================================================

    deepl_api_key: str = ""
    # Empty means: pick the free or pro endpoint from the key
    deepl_endpoint: str = ""
    deepl_timeout: float = 30.0

    # ==========================================================================
    # AI / LLM
    # ==========================================================================

    # Primary: Gemini (accepts either GOOGLE_API_KEY or GEMINI_API_KEY)
    google_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    openai_api_key: str = ""
    openai_model: str = "gpt-4-turbo"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-3-opus-20240229"

    llm_provider: str = "gemini"

    # ==========================================================================
    # Runtime
    # ==========================================================================

    log_level: str = "INFO"
    failure_policy: FailurePolicy = FailurePolicy.ABORT

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def gemini_key(self) -> str:
        return self.google_api_key or self.gemini_api_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
