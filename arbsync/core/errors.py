"""
Error types for arbsync.

Every failure the synchronization engine can raise derives from ArbError,
so callers can catch one type per language run. Backend transport errors
are not wrapped: they propagate as whatever the backend raised.
"""

from __future__ import annotations

from pathlib import Path


class ArbError(Exception):
    """Base class for all arbsync errors."""
    pass


# =============================================================================
# Configuration
# =============================================================================


class ArbDirNotDefinedError(ArbError):
    """The index document does not declare `arb-dir`."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"arb-dir is not defined in '{path}'")


class TemplateArbFileNotDefinedError(ArbError):
    """The index document does not declare `template-arb-file`."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"template-arb-file is not defined in '{path}'")


# =============================================================================
# Paths
# =============================================================================


class NoFileError(ArbError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"file '{path}' does not exist")


class NotFileError(ArbError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"path '{path}' is not a file")


class NotDirectoryError(ArbError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"path '{path}' is not a directory")


class NoParentPathError(ArbError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"no parent for path '{path}'")


# =============================================================================
# Parsing
# =============================================================================


class NoYamlDocumentsError(ArbError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"no YAML documents in index file '{path}'")


class IndexParseError(ArbError):
    """The index file is not valid YAML."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"invalid index file '{path}': {reason}")


class BundleParseError(ArbError):
    """A bundle or cache file is not a valid JSON object."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"invalid bundle '{source}': {reason}")


class InvalidLanguageError(ArbError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"invalid language identifier '{code}'")


# =============================================================================
# Domain
# =============================================================================


class AlreadyPrefixedError(ArbError):
    """A metadata key was used where a base key was expected."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key '{key}' is already prefixed with an @ symbol")


class PlaceholderNotDefinedError(ArbError):
    """A declared placeholder does not appear in its source text."""

    def __init__(self, name: str, source: str):
        self.name = name
        self.source = source
        super().__init__(
            f"placeholder '{name}' is declared but does not exist in source '{source}'"
        )


class TranslationLengthError(ArbError):
    """The backend returned a different number of strings than were sent."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {expected} translations but the backend returned {actual}"
        )
