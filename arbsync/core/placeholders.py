"""
Placeholder protection.

A translatable string may embed substitution tokens like `{name}` that are
declared in its `@` metadata entry. Machine translation happily translates
or reorders bare braces, so before a string is sent to a backend each
declared token is wrapped in an inert XML tag the backend is told to ignore,
and afterwards the tag is turned back into the original token.

    "Hello {name}"  ->  "Hello <ph>name</ph>"  ->  "Bonjour <ph>name</ph>"
                                               ->  "Bonjour {name}"
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from arbsync.core.errors import PlaceholderNotDefinedError

# Name of the XML tag the backend must leave untranslated
PLACEHOLDER_TAG = "ph"


def token(name: str) -> str:
    """Source form of a placeholder: `{name}`."""
    return f"{{{name}}}"


def marker(name: str) -> str:
    """Protected form of a placeholder: `<ph>name</ph>`."""
    return f"<{PLACEHOLDER_TAG}>{name}</{PLACEHOLDER_TAG}>"


@dataclass(frozen=True)
class Placeholders:
    """Ordered collection of placeholder names declared for one key."""

    names: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self):
        return iter(self.names)

    def to_list(self) -> list[str]:
        return list(self.names)

    def verify(self, source: str) -> None:
        """
        Check that every declared name occurs as `{name}` in the source.

        Raises:
            PlaceholderNotDefinedError: for the first name that is missing
        """
        for name in self.names:
            if token(name) not in source:
                raise PlaceholderNotDefinedError(name, source)


def protect(text: str, names: Sequence[str]) -> str:
    """Replace the first `{name}` of each name with its XML marker."""
    for name in names:
        text = text.replace(token(name), marker(name), 1)
    return text


def restore(text: str, names: Sequence[str]) -> str:
    """Inverse of protect(): turn each marker back into `{name}`."""
    for name in names:
        text = text.replace(marker(name), token(name), 1)
    return text
