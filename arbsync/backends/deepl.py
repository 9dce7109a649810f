# =============================================================================
# DeepL API Integration
# =============================================================================
#
# Setup:
#   1. Create an account at https://www.deepl.com/pro-api
#   2. Copy the authentication key to .env: DEEPL_API_KEY=...
#      (free plan keys end in ":fx" and use the free endpoint)
#
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

import httpx
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from arbsync.backends.base import TranslationBackend
from arbsync.config import get_settings
from arbsync.i18n.languages import Lang

logger = logging.getLogger(__name__)

ENDPOINT_FREE = "https://api-free.deepl.com"
ENDPOINT_PRO = "https://api.deepl.com"

# Rate limited or server side trouble
RETRYABLE_STATUS = {429, 500, 502, 503, 504, 529}


# =============================================================================
# Models
# =============================================================================


class TextTranslation(BaseModel):
    """Single text translation."""
    text: str
    detected_source_language: str | None = None


class TranslateTextResponse(BaseModel):
    translations: list[TextTranslation]


class Usage(BaseModel):
    """Account usage for the current billing period."""
    character_count: int
    character_limit: int


class LanguageType(str, Enum):
    SOURCE = "source"
    TARGET = "target"


class Language(BaseModel):
    """Language supported by the API."""
    language: str
    name: str
    supports_formality: bool | None = None


class DeeplError(Exception):
    """DeepL request failed."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


def _is_retryable(error: BaseException) -> bool:
    if isinstance(error, httpx.TransportError):
        return True
    return isinstance(error, DeeplError) and error.status_code in RETRYABLE_STATUS


def endpoint_for_key(api_key: str) -> str:
    """Free plan keys carry a `:fx` suffix."""
    return ENDPOINT_FREE if api_key.endswith(":fx") else ENDPOINT_PRO


# =============================================================================
# Client
# =============================================================================


class DeeplApi(TranslationBackend):
    """
    Interface to the DeepL REST API.

    Usage:
        api = DeeplApi(api_key)
        texts = await api.translate_text(["Hello"], Lang.FR)
        usage = await api.usage()
    """

    def __init__(
        self,
        api_key: str | None = None,
        endpoint: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        max_attempts: int = 3,
        retry_wait: wait_base | None = None,
    ):
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.deepl_api_key
        self.endpoint = (
            endpoint or settings.deepl_endpoint or endpoint_for_key(self.api_key)
        ).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.deepl_timeout
        self.max_attempts = max_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=1, min=4, max=10)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def translate_text(
        self,
        texts: Sequence[str],
        target_lang: Lang,
        ignore_tags: Sequence[str] | None = None,
    ) -> list[str]:
        """Translate a batch of strings with XML tag handling."""
        payload: dict = {
            "text": list(texts),
            "target_lang": target_lang.value,
        }
        if ignore_tags:
            payload["tag_handling"] = "xml"
            payload["ignore_tags"] = list(ignore_tags)

        logger.debug(f"DeepL translate: {len(texts)} texts to {target_lang}")
        response = await self._request("POST", "/v2/translate", json=payload)
        result = TranslateTextResponse.model_validate(response.json())
        return [t.text for t in result.translations]

    async def usage(self) -> Usage:
        """Character usage for the account."""
        response = await self._request("GET", "/v2/usage")
        return Usage.model_validate(response.json())

    async def languages(self, language_type: LanguageType = LanguageType.SOURCE) -> list[Language]:
        """Languages available as source or target."""
        response = await self._request(
            "GET", "/v2/languages", params={"type": language_type.value}
        )
        return [Language.model_validate(item) for item in response.json()]

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._send(self._client, method, path, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._send(client, method, path, **kwargs)

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        if not self.is_configured:
            raise DeeplError("DeepL API key not configured")

        url = f"{self.endpoint}{path}"
        headers = {"Authorization": f"DeepL-Auth-Key {self.api_key}"}

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception(_is_retryable),
            reraise=True,
        ):
            with attempt:
                response = await client.request(method, url, headers=headers, **kwargs)
                if response.status_code != 200:
                    logger.error(f"DeepL {method} {path} failed: {response.text}")
                    raise DeeplError(
                        f"DeepL request failed: {response.status_code}",
                        status_code=response.status_code,
                    )
                return response

        # AsyncRetrying with reraise=True either returns or raises above
        raise DeeplError(f"DeepL request failed: {method} {path}")
