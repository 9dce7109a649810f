"""
Cache of source strings submitted for translation.

For every language the cache holds the exact template text of each key the
last time it was sent to a backend. It is not a translation memory: it only
exists so a later run can tell that a template string was edited and needs
translating again.

On disk the cache is one JSON document per bundle directory:

    {
      "FR": {"helloWorld": "Hello world"},
      "DE": {"helloWorld": "Hello world"}
    }
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from arbsync.core.bundle import Bundle
from arbsync.core.errors import BundleParseError, InvalidLanguageError
from arbsync.i18n.languages import Lang

logger = logging.getLogger(__name__)

CACHE_FILE = ".cache.json"


class ArbCache:
    """Per-language snapshot of the source text last sent for translation."""

    def __init__(self, files: dict[Lang, Bundle] | None = None):
        self._files: dict[Lang, Bundle] = dict(files) if files else {}

    def __len__(self) -> int:
        return len(self._files)

    def languages(self) -> list[Lang]:
        return sorted(self._files, key=lambda lang: lang.value)

    def get(self, lang: Lang) -> Bundle | None:
        """Cached source bundle for a language."""
        return self._files.get(lang)

    def record(self, lang: Lang, key: str, source: Any) -> None:
        """Record the source text sent for a key."""
        self._files.setdefault(lang, Bundle()).insert(key, source)

    def forget(self, lang: Lang, key: str) -> Any | None:
        """Remove a key, returning the previously cached text."""
        file = self._files.get(lang)
        if file is None:
            return None
        return file.remove(key)

    # =========================================================================
    # Persistence
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        return {lang.value: self._files[lang].to_dict() for lang in self.languages()}

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<cache>") -> ArbCache:
        files: dict[Lang, Bundle] = {}
        for code, contents in data.items():
            try:
                lang = Lang.parse(code)
            except InvalidLanguageError as e:
                raise BundleParseError(source, str(e)) from e
            if not isinstance(contents, dict):
                raise BundleParseError(source, f"cache entry for '{code}' is not an object")
            files[lang] = Bundle(contents)
        return cls(files)

    @classmethod
    def load(cls, path: Path | str) -> ArbCache:
        """Read a cache file; a missing file is an empty cache."""
        path = Path(path)
        if not path.exists():
            logger.debug(f"No cache file at {path}")
            return cls()

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise BundleParseError(str(path), str(e)) from e

        if not isinstance(data, dict):
            raise BundleParseError(str(path), "top-level value must be an object")
        return cls.from_dict(data, source=str(path))

    def save(self, path: Path | str) -> None:
        """Write the cache atomically (temp file + rename)."""
        path = Path(path)
        content = json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=".cache-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(temp_path, path)
        except BaseException:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

        logger.debug(f"Wrote cache for {len(self)} languages to {path}")
