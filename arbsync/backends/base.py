"""
Translation backend interface.

All machine translation goes through this interface so the synchronization
engine never depends on a particular provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from arbsync.i18n.languages import Lang


class TranslationBackend(ABC):
    """
    Batch text translation.

    Implementations return exactly one translated string per input, in
    request order. Transport, authorization and rate-limit failures are
    raised as-is; retrying, if any, happens inside the backend.
    """

    @abstractmethod
    async def translate_text(
        self,
        texts: Sequence[str],
        target_lang: Lang,
        ignore_tags: Sequence[str] | None = None,
    ) -> list[str]:
        """
        Translate a batch of strings.

        Args:
            texts: Strings to translate
            target_lang: Target language
            ignore_tags: XML tag names whose content must be left untouched
        """
        pass
