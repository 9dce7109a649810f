"""
Translation backends.

    from arbsync.backends import create_backend

    backend = create_backend()          # from TRANSLATION_BACKEND
    backend = create_backend("llm")
"""

from __future__ import annotations

from arbsync.backends.base import TranslationBackend
from arbsync.backends.deepl import DeeplApi, DeeplError, Language, LanguageType, Usage
from arbsync.config import get_settings


def create_backend(name: str | None = None, api_key: str | None = None) -> TranslationBackend:
    """Build the configured translation backend."""
    name = name or get_settings().translation_backend

    if name == "deepl":
        return DeeplApi(api_key)
    elif name == "llm":
        # Imported lazily so DeepL-only use does not load DSPy
        from arbsync.backends.llm import LlmBackend
        return LlmBackend()
    else:
        raise ValueError(f"Unknown translation backend: {name}")


__all__ = [
    "TranslationBackend",
    "DeeplApi",
    "DeeplError",
    "Language",
    "LanguageType",
    "Usage",
    "create_backend",
]
