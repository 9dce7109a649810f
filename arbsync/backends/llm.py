"""
LLM-powered translation backend.

Uses the DSPy infrastructure configured in arbsync.services.ai.client.
The model is asked to leave placeholder tags alone; the synchronization
engine still checks that one string came back per string sent.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import dspy

from arbsync.backends.base import TranslationBackend
from arbsync.i18n.languages import Lang, get_language_name

logger = logging.getLogger(__name__)


class TranslateBatch(dspy.Signature):
    """Translate user interface strings of an application.

    Keep every XML tag listed in `ignore_tags` and its content exactly as
    written, including its position in the sentence. Return one translation
    per input string, in the same order.
    """

    texts: list[str] = dspy.InputField(desc="List of texts to translate")
    target_language: str = dspy.InputField(desc="Target language name")
    ignore_tags: list[str] = dspy.InputField(desc="XML tags to copy verbatim")

    translated_texts: list[str] = dspy.OutputField(desc="List of translated texts in same order")


def _trim(text: str, source: str) -> str:
    """Strip model padding, unless the source string has edge whitespace of its own."""
    if source != source.strip():
        return text
    return text.strip()


class LlmBackend(TranslationBackend):
    """
    Translation backend driven by a language model.

    Usage:
        backend = LlmBackend()
        texts = await backend.translate_text(["Hello <ph>name</ph>"], Lang.FR, ["ph"])
    """

    def __init__(self, provider: str | None = None, model: str | None = None):
        self.provider = provider
        self.model = model
        self._batch_module: dspy.Predict | None = None

    @property
    def batch_module(self) -> dspy.Predict:
        if self._batch_module is None:
            self._batch_module = dspy.Predict(TranslateBatch)
        return self._batch_module

    async def translate_text(
        self,
        texts: Sequence[str],
        target_lang: Lang,
        ignore_tags: Sequence[str] | None = None,
    ) -> list[str]:
        from arbsync.services.ai.client import configure_lm
        configure_lm(self.provider, self.model)

        logger.debug(f"LLM translate: {len(texts)} texts to {target_lang}")

        def predict():
            return self.batch_module(
                texts=list(texts),
                target_language=get_language_name(target_lang),
                ignore_tags=list(ignore_tags or []),
            )

        # DSPy is synchronous, keep the event loop free
        result = await asyncio.get_running_loop().run_in_executor(None, predict)
        return [
            _trim(text, texts[i] if i < len(texts) else "")
            for i, text in enumerate(result.translated_texts)
        ]
