"""
Bundle synchronization.

Brings a target language bundle up to date with the template:

1. Diff the template against the target and the cached source text
2. Protect placeholders in every string that needs (re-)translating
3. Send all of them to the backend in one batch
4. Restore placeholders and merge translations, keeping template order
5. Apply human overrides last
6. Record what was sent so later template edits can be detected

Usage:
    from arbsync import Intl, Lang, TranslationOptions

    intl = Intl("l10n.yaml")
    result = await intl.translate(backend, TranslationOptions(Lang.FR))
    print(f"{result.length} strings translated")
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from arbsync.config import FailurePolicy
from arbsync.core.bundle import Bundle, Entry
from arbsync.core.errors import TranslationLengthError
from arbsync.core.placeholders import PLACEHOLDER_TAG, protect, restore
from arbsync.i18n.languages import Lang

if TYPE_CHECKING:
    from arbsync.backends.base import TranslationBackend
    from arbsync.config_loader import Intl

logger = logging.getLogger(__name__)


# =============================================================================
# Options and results
# =============================================================================


class InvalidationMode(str, Enum):
    ALL = "all"    # Re-translate every key
    KEYS = "keys"  # Re-translate the listed keys


@dataclass(frozen=True)
class Invalidation:
    """Forces re-translation regardless of the diff."""

    mode: InvalidationMode
    keys: frozenset[str] = frozenset()

    @classmethod
    def all(cls) -> Invalidation:
        return cls(InvalidationMode.ALL)

    @classmethod
    def for_keys(cls, keys: Iterable[str]) -> Invalidation:
        return cls(InvalidationMode.KEYS, frozenset(keys))

    def covers(self, key: str) -> bool:
        return self.mode is InvalidationMode.ALL or key in self.keys


@dataclass
class TranslationOptions:
    """Options for translating one language."""

    target_lang: Lang
    # Compute everything but never call the backend or touch the cache
    dry_run: bool = False
    invalidation: Invalidation | None = None
    # Human-provided translations, highest priority
    overrides: dict[Lang, Bundle] | None = None
    # Leave the cache untouched; used by tests that need determinism
    disable_cache: bool = False


@dataclass
class TranslateResult:
    template: Bundle
    translated: Bundle
    # Number of strings sent to the backend
    length: int


class StagedKind(str, Enum):
    PASS_THROUGH = "pass_through"
    TRANSLATE = "translate"


@dataclass(frozen=True)
class StagedEntry:
    """
    A template entry waiting to be merged into the output.

    PASS_THROUGH entries are copied as-is. TRANSLATE entries take the next
    backend result, with `names` restored and, for new keys, inserted at
    `index` (the key's position in the template).
    """

    kind: StagedKind
    entry: Entry
    names: tuple[str, ...] = ()
    index: int | None = None

    @classmethod
    def pass_through(cls, entry: Entry) -> StagedEntry:
        return cls(StagedKind.PASS_THROUGH, entry)

    @classmethod
    def translate(cls, entry: Entry, names: tuple[str, ...], index: int | None) -> StagedEntry:
        return cls(StagedKind.TRANSLATE, entry, names, index)


# =============================================================================
# Translation
# =============================================================================


def apply_overrides(output: Bundle, overrides: Bundle | None) -> None:
    """Overwrite output entries with human translations."""
    if overrides is None:
        return
    for key, value in overrides.entries():
        logger.info(f"Override: {key}")
        output.insert_entry(Entry(key, value))


async def translate_language(
    intl: Intl,
    backend: TranslationBackend,
    options: TranslationOptions,
) -> TranslateResult:
    """
    Translate the template of an index into one target language.

    Placeholders are converted to XML tags the backend is told to ignore,
    so their names survive translation.

    Raises:
        PlaceholderNotDefinedError: before any backend call
        TranslationLengthError: if the backend result count is wrong
    """
    lang = options.target_lang
    logger.info(f"Translate: {lang}")

    template = intl.template_content()
    output = intl.load_or_default(lang)
    diff = template.diff(output, intl.cache.get(lang))

    overrides = options.overrides.get(lang) if options.overrides else None

    staged: list[StagedEntry] = []
    queued: list[str] = []
    sent: list[tuple[str, Any]] = []

    for index, (key, value) in enumerate(template.entries()):
        invalidated = options.invalidation is not None and options.invalidation.covers(key)

        if not invalidated and key not in diff.create and key not in diff.update:
            continue

        # Would be overwritten by a manual translation anyway
        if overrides is not None and key in overrides:
            continue

        entry = Entry(key, value)
        if not entry.is_translatable():
            staged.append(StagedEntry.pass_through(entry))
            continue

        names: tuple[str, ...] = ()
        placeholders = template.placeholders(key)
        if placeholders is not None:
            placeholders.verify(value)
            names = placeholders.names
            logger.info(f"Prepare: {key} placeholders={list(names)}")
        else:
            logger.info(f"Prepare: {key}")

        if options.dry_run:
            staged.append(StagedEntry.pass_through(entry))
            continue

        queued.append(protect(value, names))
        sent.append((key, value))
        key_index = index if key in diff.create else None
        staged.append(StagedEntry.translate(entry, names, key_index))

    for key in sorted(diff.delete):
        logger.info(f"Delete: {key}")
        output.remove(key)

    length = len(queued)
    logger.info(f"Translate: {lang} length={length}")

    translations: list[str] = []
    if queued:
        translations = await backend.translate_text(
            queued, lang, ignore_tags=[PLACEHOLDER_TAG]
        )
        if len(translations) != length:
            raise TranslationLengthError(length, len(translations))

    results = iter(translations)
    for item in staged:
        if item.kind is StagedKind.PASS_THROUGH:
            output.insert_entry(item.entry)
            continue

        text = restore(next(results), item.names)
        if item.index is not None and item.index < len(output):
            output.insert_translation_at(item.index, item.entry.key, text)
        else:
            output.insert_translation(item.entry.key, text)

    apply_overrides(output, overrides)

    # Only a completed run changes the cache
    if not options.disable_cache and not options.dry_run:
        for key, source in sent:
            intl.cache.record(lang, key, source)
        for key in diff.delete:
            intl.cache.forget(lang, key)
        intl.write_cache()

    return TranslateResult(template=template, translated=output, length=length)


async def translate(
    backend: TranslationBackend,
    index_path: Path | str,
    target_lang: Lang,
    name_prefix: str | None = None,
    **options: Any,
) -> TranslateResult:
    """Translate one language of an index file (convenience function)."""
    from arbsync.config_loader import Intl

    intl = Intl(index_path, name_prefix)
    return await intl.translate(backend, TranslationOptions(target_lang, **options))


# =============================================================================
# Multiple languages
# =============================================================================


@dataclass
class SyncReport:
    """Outcome of synchronizing several languages."""

    results: dict[Lang, TranslateResult] = field(default_factory=dict)
    failures: dict[Lang, Exception] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total_translated(self) -> int:
        return sum(result.length for result in self.results.values())


def write_translation(intl: Intl, lang: Lang, bundle: Bundle) -> Path:
    """Write a translated bundle to its conventional path."""
    path = intl.file_path(lang)
    logger.info(f"Write file: {path}")
    bundle.dump(path)
    return path


async def sync_languages(
    intl: Intl,
    backend: TranslationBackend,
    languages: Iterable[Lang],
    dry_run: bool = True,
    invalidation: Invalidation | None = None,
    overrides: dict[Lang, Bundle] | None = None,
    policy: FailurePolicy = FailurePolicy.ABORT,
) -> SyncReport:
    """
    Translate several languages one after another, writing each bundle
    unless this is a dry run.

    With FailurePolicy.ABORT the first failure is re-raised and later
    languages are not attempted; with FailurePolicy.CONTINUE failures are
    collected in the report.
    """
    report = SyncReport()

    for lang in languages:
        options = TranslationOptions(
            target_lang=lang,
            dry_run=dry_run,
            invalidation=invalidation,
            overrides=overrides,
        )
        try:
            result = await intl.translate(backend, options)
        except Exception as e:
            logger.error(f"Failed to translate {lang}: {e}")
            if policy is FailurePolicy.ABORT:
                raise
            report.failures[lang] = e
            continue

        if not dry_run:
            write_translation(intl, lang, result.translated)
        report.results[lang] = result
        logger.info(f"Translated {result.length} strings for {lang}")

    return report
