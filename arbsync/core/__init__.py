"""Core data model: bundles, diffs, placeholders and errors."""

from arbsync.core.bundle import (
    Bundle,
    Entry,
    FileDiff,
    diff_bundles,
    is_prefixed,
)
from arbsync.core.placeholders import (
    PLACEHOLDER_TAG,
    Placeholders,
    protect,
    restore,
)
from arbsync.core.errors import (
    ArbError,
    AlreadyPrefixedError,
    ArbDirNotDefinedError,
    BundleParseError,
    IndexParseError,
    InvalidLanguageError,
    NoFileError,
    NoParentPathError,
    NotDirectoryError,
    NotFileError,
    NoYamlDocumentsError,
    PlaceholderNotDefinedError,
    TemplateArbFileNotDefinedError,
    TranslationLengthError,
)

__all__ = [
    # Bundles
    "Bundle",
    "Entry",
    "FileDiff",
    "diff_bundles",
    "is_prefixed",
    # Placeholders
    "PLACEHOLDER_TAG",
    "Placeholders",
    "protect",
    "restore",
    # Errors
    "ArbError",
    "AlreadyPrefixedError",
    "ArbDirNotDefinedError",
    "BundleParseError",
    "IndexParseError",
    "InvalidLanguageError",
    "NoFileError",
    "NoParentPathError",
    "NotDirectoryError",
    "NotFileError",
    "NoYamlDocumentsError",
    "PlaceholderNotDefinedError",
    "TemplateArbFileNotDefinedError",
    "TranslationLengthError",
]
