"""
Application resource bundles.

A bundle is an ordered JSON object mapping keys to values. Keys prefixed
with `@` hold metadata about their sibling key (`@greeting` describes
`greeting`), everything else is a translatable entry when its value is a
string. Key order reflects authoring order and survives every operation
here, including positional inserts used to slot new keys in at their
template position.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_serializer

from arbsync.core.errors import AlreadyPrefixedError, BundleParseError
from arbsync.core.placeholders import Placeholders

logger = logging.getLogger(__name__)

META_PREFIX = "@"
PLACEHOLDERS = "placeholders"


# =============================================================================
# Diff
# =============================================================================


class FileDiff(BaseModel):
    """Keys to create, delete and update in a target bundle."""

    # In the template but not in the target
    create: set[str] = Field(default_factory=set)
    # In the target but not in the template
    delete: set[str] = Field(default_factory=set)
    # Template text changed since it was last sent for translation
    update: set[str] = Field(default_factory=set)

    @field_serializer("create", "delete", "update")
    def serialize_keys(self, keys: set[str]) -> list[str]:
        return sorted(keys)


def diff_bundles(
    template: Bundle,
    target: Bundle,
    cache: Bundle | None = None,
) -> FileDiff:
    """
    Classify keys between a template, a target and the cached source text.

    Pure function: neither bundle is modified.
    """
    lhs = set(template.keys())
    rhs = set(target.keys())

    update: set[str] = set()
    if cache is not None:
        for key, cached in cache.entries():
            if key in template and template.get(key) != cached:
                update.add(key)

    return FileDiff(create=lhs - rhs, delete=rhs - lhs, update=update)


# =============================================================================
# Entries
# =============================================================================


def is_prefixed(key: str) -> bool:
    """Whether a key is a metadata key (`@` prefixed)."""
    return key.startswith(META_PREFIX)


@dataclass(frozen=True)
class Entry:
    """
    A key and value copied out of a bundle.

    Entries are owned snapshots; mutating a bundle afterwards does not
    change an entry already looked up.
    """

    key: str
    value: Any

    def is_prefixed(self) -> bool:
        return is_prefixed(self.key)

    def is_translatable(self) -> bool:
        """Only non-metadata keys with string values are translated."""
        return not self.is_prefixed() and isinstance(self.value, str)

    def as_str(self) -> str | None:
        return self.value if isinstance(self.value, str) else None


# =============================================================================
# Bundle
# =============================================================================


class Bundle:
    """
    Ordered key/value content of one `.arb` file.

    Usage:
        bundle = Bundle.load("l10n/app_en.arb")
        bundle.lookup("helloWorld").value    # -> "Hello world"
        bundle.insert_translation_at(0, "title", "Titre")
        bundle.dump("l10n/app_fr.arb")
    """

    def __init__(self, contents: Mapping[str, Any] | None = None):
        self._contents: dict[str, Any] = dict(contents) if contents else {}

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._contents)

    def __contains__(self, key: object) -> bool:
        return key in self._contents

    def __iter__(self) -> Iterator[str]:
        return iter(self._contents)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Bundle):
            return NotImplemented
        return list(self._contents.items()) == list(other._contents.items())

    def __repr__(self) -> str:
        return f"Bundle({self._contents!r})"

    def is_empty(self) -> bool:
        return not self._contents

    def keys(self) -> list[str]:
        return list(self._contents)

    def entries(self) -> list[tuple[str, Any]]:
        """All (key, value) pairs in order."""
        return list(self._contents.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self._contents.get(key, default)

    def index_of(self, key: str) -> int | None:
        """Position of a key, or None when absent."""
        for index, existing in enumerate(self._contents):
            if existing == key:
                return index
        return None

    def lookup(self, key: str) -> Entry | None:
        """Copy of the entry for a key, or None when absent."""
        if key not in self._contents:
            return None
        return Entry(key, copy.deepcopy(self._contents[key]))

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def insert(self, key: str, value: Any) -> None:
        """Insert at the end, or overwrite in place when the key exists."""
        self._contents[key] = value

    def insert_entry(self, entry: Entry) -> None:
        self.insert(entry.key, copy.deepcopy(entry.value))

    def insert_translation(self, key: str, text: str) -> None:
        self.insert(key, text)

    def insert_translation_at(self, index: int, key: str, text: str) -> None:
        """
        Insert a translated value at a position, shifting later entries.

        An existing entry for the key is moved to the position.
        """
        items = [(k, v) for k, v in self._contents.items() if k != key]
        items.insert(index, (key, text))
        self._contents = dict(items)

    def remove(self, key: str) -> Any | None:
        """Remove a key, returning its previous value if there was one."""
        return self._contents.pop(key, None)

    # -------------------------------------------------------------------------
    # Placeholders and diff
    # -------------------------------------------------------------------------

    def placeholders(self, key: str) -> Placeholders | None:
        """
        Placeholder names declared for a key in its `@` metadata entry.

        Returns None when there is no metadata entry or it declares no
        placeholders.

        Raises:
            AlreadyPrefixedError: if the key is itself a metadata key
        """
        if is_prefixed(key):
            raise AlreadyPrefixedError(key)

        meta_key = f"{META_PREFIX}{key}"
        if meta_key not in self._contents:
            return None

        meta = self._contents[meta_key]
        if not isinstance(meta, dict):
            logger.warning(f"Metadata '{meta_key}' is not an object, ignoring placeholders")
            return None

        declared = meta.get(PLACEHOLDERS)
        if declared is None:
            return None
        if not isinstance(declared, dict):
            logger.warning(f"'{PLACEHOLDERS}' in '{meta_key}' is not an object, ignoring")
            return None

        return Placeholders(tuple(declared.keys()))

    def diff(self, other: Bundle, cache: Bundle | None = None) -> FileDiff:
        """Diff this (template) bundle against a target bundle."""
        return diff_bundles(self, other, cache)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._contents)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Bundle:
        return cls(copy.deepcopy(dict(data)))

    @classmethod
    def loads(cls, text: str, source: str = "<string>") -> Bundle:
        """Parse a bundle from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise BundleParseError(source, str(e)) from e

        if not isinstance(data, dict):
            raise BundleParseError(source, "top-level value must be an object")
        return cls(data)

    def dumps(self) -> str:
        return json.dumps(self._contents, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: Path | str) -> Bundle:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise BundleParseError(str(path), str(e)) from e
        return cls.loads(text, source=str(path))

    def dump(self, path: Path | str) -> None:
        Path(path).write_text(self.dumps() + "\n", encoding="utf-8")
