"""
LLM client configuration using DSPy.

Supports Gemini (primary), OpenAI, and Anthropic.
"""

from __future__ import annotations

from functools import lru_cache

import dspy

from arbsync.config import get_settings


@lru_cache
def get_lm(provider: str | None = None, model: str | None = None) -> dspy.LM:
    """
    Get configured language model.

    Args:
        provider: 'gemini', 'openai', or 'anthropic'. Defaults to LLM_PROVIDER.
        model: Model name. Defaults to the provider's model setting.

    Returns:
        Configured DSPy LM instance.
    """
    settings = get_settings()
    provider = provider or settings.llm_provider

    if provider == "gemini":
        model = model or settings.gemini_model
        if not settings.gemini_key:
            raise ValueError("GOOGLE_API_KEY or GEMINI_API_KEY not set")
        # Use gemini/ prefix for litellm
        return dspy.LM(model=f"gemini/{model}", api_key=settings.gemini_key)

    elif provider == "openai":
        model = model or settings.openai_model
        if not settings.openai_api_key:
            raise ValueError("OPENAI_API_KEY not set")
        return dspy.LM(model=f"openai/{model}", api_key=settings.openai_api_key)

    elif provider == "anthropic":
        model = model or settings.anthropic_model
        if not settings.anthropic_api_key:
            raise ValueError("ANTHROPIC_API_KEY not set")
        return dspy.LM(model=f"anthropic/{model}", api_key=settings.anthropic_api_key)

    else:
        raise ValueError(f"Unknown provider: {provider}")


def configure_lm(provider: str | None = None, model: str | None = None) -> None:
    """Configure DSPy with the specified LM as default."""
    lm = get_lm(provider, model)
    dspy.configure(lm=lm)
