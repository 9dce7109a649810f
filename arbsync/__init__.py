"""
arbsync - keep Flutter application resource bundles translated.

A template bundle is the source of truth. Every other language bundle is
brought up to date by translating only the keys that were added, changed,
or explicitly invalidated, while human overrides take precedence.
"""

from arbsync.core import (
    ArbError,
    Bundle,
    Entry,
    FileDiff,
    Placeholders,
)
from arbsync.config_loader import Intl
from arbsync.i18n import (
    Invalidation,
    Lang,
    TranslateResult,
    TranslationOptions,
    translate,
)
from arbsync.storage import ArbCache

__version__ = "0.1.0"

__all__ = [
    "ArbCache",
    "ArbError",
    "Bundle",
    "Entry",
    "FileDiff",
    "Intl",
    "Invalidation",
    "Lang",
    "Placeholders",
    "TranslateResult",
    "TranslationOptions",
    "translate",
]
