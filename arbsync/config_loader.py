"""
Index file loader.

An index file is a small YAML document that tells arbsync where the
bundles live:

    arb-dir: lib/l10n
    template-arb-file: app_en.arb
    name-prefix: app            # optional, defaults to "app"
    overrides-dir: overrides    # optional

Bundles are found by convention inside `arb-dir`: the name prefix, an
underscore, then the lowercase language identifier with underscores instead
of hyphens. The file for `EN-US` is `app_en_us.arb`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import BaseModel

from arbsync.core.bundle import Bundle
from arbsync.core.errors import (
    ArbDirNotDefinedError,
    IndexParseError,
    NoFileError,
    NoParentPathError,
    NotDirectoryError,
    NotFileError,
    NoYamlDocumentsError,
    TemplateArbFileNotDefinedError,
)
from arbsync.i18n.languages import Lang, parse_language
from arbsync.storage.cache import CACHE_FILE, ArbCache

if TYPE_CHECKING:
    from arbsync.backends.base import TranslationBackend
    from arbsync.i18n.translator import TranslateResult, TranslationOptions

logger = logging.getLogger(__name__)

ARB_DIR = "arb-dir"
TEMPLATE_ARB_FILE = "template-arb-file"
NAME_PREFIX = "name-prefix"
OVERRIDES_DIR = "overrides-dir"

DEFAULT_NAME_PREFIX = "app"
ARB_SUFFIX = ".arb"


class IndexDocument(BaseModel):
    """Settings declared in an index file."""

    arb_dir: str
    template_arb_file: str
    name_prefix: str | None = None
    overrides_dir: str | None = None

    @classmethod
    def from_dict(cls, data: Any, path: Path) -> IndexDocument:
        if not isinstance(data, dict):
            data = {}

        arb_dir = data.get(ARB_DIR)
        if not isinstance(arb_dir, str):
            raise ArbDirNotDefinedError(path)

        template_arb_file = data.get(TEMPLATE_ARB_FILE)
        if not isinstance(template_arb_file, str):
            raise TemplateArbFileNotDefinedError(path)

        name_prefix = data.get(NAME_PREFIX)
        overrides_dir = data.get(OVERRIDES_DIR)

        return cls(
            arb_dir=arb_dir,
            template_arb_file=template_arb_file,
            name_prefix=name_prefix if isinstance(name_prefix, str) else None,
            overrides_dir=overrides_dir if isinstance(overrides_dir, str) else None,
        )

    @classmethod
    def load(cls, path: Path) -> IndexDocument:
        """Parse the first YAML document of an index file."""
        with open(path, encoding="utf-8") as f:
            try:
                docs = list(yaml.safe_load_all(f))
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise IndexParseError(path, str(e)) from e

        if not docs:
            raise NoYamlDocumentsError(path)

        return cls.from_dict(docs[0], path)


class Intl:
    """
    Synchronization context for one index file.

    Owns the translation cache for the bundle directory: it is read when
    the context is created and written back at the end of each translate()
    run.

    Usage:
        intl = Intl("l10n.yaml")
        result = await intl.translate(backend, TranslationOptions(Lang.FR))
        result.translated.dump(intl.file_path(Lang.FR))
    """

    def __init__(self, path: Path | str, name_prefix: str | None = None):
        path = Path(path)
        if not path.exists():
            raise NoFileError(path)
        if not path.is_file():
            raise NotFileError(path)

        self.index_path = path
        self.index = IndexDocument.load(path)

        # A prefix in the index document wins over the caller's default
        self.name_prefix = self.index.name_prefix or name_prefix or DEFAULT_NAME_PREFIX

        stem = self.index.template_arb_file.removesuffix(ARB_SUFFIX)
        self.template_language = Lang.parse(stem.removeprefix(f"{self.name_prefix}_"))

        self.cache = self.read_cache()

    # =========================================================================
    # Index settings
    # =========================================================================

    @property
    def arb_dir(self) -> str:
        return self.index.arb_dir

    @property
    def template_arb_file(self) -> str:
        return self.index.template_arb_file

    @property
    def overrides_dir(self) -> str | None:
        return self.index.overrides_dir

    # =========================================================================
    # Paths
    # =========================================================================

    def parent_path(self) -> Path:
        """Directory containing the index file."""
        parent = self.index_path.parent
        if parent == self.index_path:
            raise NoParentPathError(self.index_path)
        return parent

    def resolve(self, directory: str | Path) -> Path:
        """Resolve a directory relative to the index file."""
        directory = Path(directory)
        if directory.is_absolute():
            return directory
        return self.parent_path() / directory

    def arb_directory(self) -> Path:
        """Bundle directory; it must exist."""
        directory = self.resolve(self.arb_dir)
        if not directory.is_dir():
            raise NotDirectoryError(directory)
        return directory

    def overrides_directory(self) -> Path | None:
        if self.overrides_dir is None:
            return None
        return self.resolve(self.overrides_dir)

    def cache_path(self) -> Path:
        return self.arb_directory() / CACHE_FILE

    def format_file_name(self, lang: Lang) -> str:
        return f"{self.name_prefix}_{lang.file_code()}{ARB_SUFFIX}"

    def parse_file_name(self, path: Path | str) -> Lang | None:
        """Language of a bundle file name, or None if it is not one of ours."""
        path = Path(path)
        if path.suffix != ARB_SUFFIX:
            return None
        pattern = f"{self.name_prefix}_"
        if not path.stem.startswith(pattern):
            return None
        return parse_language(path.stem[len(pattern):])

    def file_path(self, lang: Lang) -> Path:
        return self.arb_directory() / self.format_file_name(lang)

    # =========================================================================
    # Bundles
    # =========================================================================

    def template_content(self) -> Bundle:
        """Load the template bundle; it must exist."""
        path = self.arb_directory() / self.template_arb_file
        if not path.exists():
            raise NoFileError(path)
        return Bundle.load(path)

    def load(self, lang: Lang) -> Bundle:
        path = self.file_path(lang)
        if not path.exists():
            raise NoFileError(path)
        return Bundle.load(path)

    def load_or_default(self, lang: Lang) -> Bundle:
        """Load a language bundle, or an empty one if it does not exist yet."""
        try:
            return self.load(lang)
        except NoFileError:
            logger.debug(f"No bundle for {lang}, starting from an empty one")
            return Bundle()

    def list_translated(self) -> dict[Lang, Path]:
        """Bundles present in the bundle directory (template included)."""
        return self.list_directory(self.arb_directory())

    def list_directory(self, directory: Path | str) -> dict[Lang, Path]:
        directory = Path(directory)
        if not directory.is_dir():
            raise NotDirectoryError(directory)

        found: dict[Lang, Path] = {}
        for path in directory.iterdir():
            lang = self.parse_file_name(path)
            if path.is_file() and lang is not None:
                found[lang] = path
        return dict(sorted(found.items(), key=lambda item: item[0].value))

    def load_overrides(
        self,
        directory: Path | str,
        languages: list[Lang] | None = None,
    ) -> dict[Lang, Bundle]:
        """
        Load human-translated override bundles.

        Args:
            directory: Directory of override bundles (same naming convention)
            languages: Only load these languages
        """
        overrides: dict[Lang, Bundle] = {}
        for lang, path in self.list_directory(directory).items():
            if languages is not None and lang not in languages:
                continue
            overrides[lang] = Bundle.load(path)
            logger.debug(f"Loaded {len(overrides[lang])} overrides for {lang}")
        return overrides

    # =========================================================================
    # Cache
    # =========================================================================

    def read_cache(self) -> ArbCache:
        return ArbCache.load(self.cache_path())

    def write_cache(self) -> None:
        self.cache.save(self.cache_path())

    # =========================================================================
    # Translation
    # =========================================================================

    async def translate(
        self,
        backend: TranslationBackend,
        options: TranslationOptions,
    ) -> TranslateResult:
        """Translate the template into options.target_lang."""
        from arbsync.i18n.translator import translate_language
        return await translate_language(self, backend, options)
