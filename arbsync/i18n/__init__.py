"""
Internationalization - keep translated bundles in sync with a template.

Design:
1. Diff the template with each language and the cached source text
2. Translate only what was created, changed, or invalidated
3. Batch every string for a language into one backend call
4. Human overrides always win

Usage:
    from arbsync import Intl, Lang, TranslationOptions

    intl = Intl("l10n.yaml")
    result = await intl.translate(backend, TranslationOptions(Lang.FR))

    # Or in one go
    result = await translate(backend, "l10n.yaml", Lang.FR)
"""

from arbsync.i18n.languages import (
    Lang,
    LANGUAGE_NAMES,
    get_language_name,
    parse_language,
)
from arbsync.i18n.translator import (
    Invalidation,
    InvalidationMode,
    StagedEntry,
    StagedKind,
    SyncReport,
    TranslateResult,
    TranslationOptions,
    apply_overrides,
    sync_languages,
    translate,
    translate_language,
    write_translation,
)
from arbsync.i18n.compare import (
    CompareRow,
    compare_bundles,
    write_csv,
)

__all__ = [
    # Languages
    "Lang",
    "LANGUAGE_NAMES",
    "get_language_name",
    "parse_language",
    # Translation
    "Invalidation",
    "InvalidationMode",
    "StagedEntry",
    "StagedKind",
    "SyncReport",
    "TranslateResult",
    "TranslationOptions",
    "apply_overrides",
    "sync_languages",
    "translate",
    "translate_language",
    "write_translation",
    # Review
    "CompareRow",
    "compare_bundles",
    "write_csv",
]
