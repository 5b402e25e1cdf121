"""
Remote translation client.

The only component in the package that performs network I/O. Talks to the
Google Cloud Translation v2 REST API. The fetch_* methods raise
TranslationServiceError so the dispatchers can keep failures out of the UI
cache; translate_one, translate_batch and detect_language never raise and
degrade to returning the input unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Sequence

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from medihub.config import Settings, get_settings
from medihub.i18n.cache import BoundedTranslationCache, TranslationKey
from medihub.i18n.languages import default_languages

logger = logging.getLogger(__name__)


GOOGLE_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"

# Google rejects more than 128 q segments per request
MAX_SEGMENTS_PER_REQUEST = 128


class TranslationServiceError(Exception):
    """Raised when the translation API answers with an error or garbage."""
    
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


# Errors from the HTTP layer or a response that doesn't have the expected shape
_REQUEST_ERRORS = (
    httpx.HTTPError,
    KeyError,
    IndexError,
    TypeError,
    ValueError,
)

# Everything that means "the service did not give us a usable answer"
_SOFT_ERRORS = (TranslationServiceError, *_REQUEST_ERRORS)


# =============================================================================
# Provider contract
# =============================================================================


class TranslationProvider(ABC):
    """
    What the dispatchers need from a translation backend.
    
    ``fetch_translation`` and ``fetch_translations`` raise
    ``TranslationServiceError`` when the service fails, so callers that
    cache results can tell a failure from a translation. ``translate_one``
    and ``translate_batch`` are the fail-soft wrappers: they return the
    input text(s) on error. Batch results keep input order.
    """
    
    @abstractmethod
    async def fetch_translation(
        self,
        text: str,
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> str:
        """Translate one text; raises TranslationServiceError on failure."""
        pass
    
    @abstractmethod
    async def fetch_translations(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> list[str]:
        """Translate texts, same length and order; raises TranslationServiceError on failure."""
        pass
    
    @abstractmethod
    async def detect_language(self, text: str) -> str | None:
        """Detect the language of text, None when unknown."""
        pass
    
    async def translate_one(
        self,
        text: str,
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> str:
        """Translate one text, or return it unchanged on any failure."""
        try:
            return await self.fetch_translation(
                text, target_language, source_language, use_cache=use_cache,
            )
        except TranslationServiceError as e:
            logger.error(f"Translation error ({source_language}->{target_language}): {e}")
            return text
    
    async def translate_batch(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> list[str]:
        """Translate texts, or return the original list on any failure."""
        try:
            return await self.fetch_translations(
                texts, target_language, source_language, use_cache=use_cache,
            )
        except TranslationServiceError as e:
            logger.error(f"Batch translation error ({source_language}->{target_language}): {e}")
            return list(texts)
    
    async def get_supported_languages(self) -> list[dict[str, str]]:
        return default_languages()
    
    def get_cache_stats(self) -> dict[str, int]:
        return {"size": 0, "max_size": 0}
    
    def clear_cache(self) -> None:
        pass
    
    async def aclose(self) -> None:
        pass


# =============================================================================
# Google Cloud Translation client
# =============================================================================


class RemoteTranslationClient(TranslationProvider):
    """
    Google Cloud Translation v2 client with a bounded result cache.
    
    Usage:
        client = RemoteTranslationClient(api_key="...")
        
        es = await client.translate_one("Save", "es", "en")
        hi = await client.translate_batch(["Save", "Cancel"], "hi", "en")
        lang = await client.detect_language("Bonjour")  # -> "fr"
        
        await client.aclose()
    
    Without an API key every operation passes its input straight through.
    """
    
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = GOOGLE_TRANSLATE_URL,
        timeout: float = 10.0,
        max_cache_size: int = 1000,
        retry_attempts: int = 3,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = (api_key or "").strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = max(1, retry_attempts)
        self.cache = BoundedTranslationCache(max_cache_size)
        
        self._http = http_client
        self._owns_http = http_client is None
        
        if not self.is_configured:
            logger.warning(
                "Google Translate API key not set - remote translation disabled, "
                "text will be returned untranslated"
            )
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> RemoteTranslationClient:
        settings = settings or get_settings()
        return cls(
            api_key=settings.google_translate_api_key,
            base_url=settings.google_translate_base_url,
            timeout=settings.translate_timeout,
            max_cache_size=settings.translation_cache_max_size,
            retry_attempts=settings.translate_retry_attempts,
            http_client=http_client,
        )
    
    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)
    
    @property
    def http(self) -> httpx.AsyncClient:
        """Lazy-load the HTTP client."""
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
        return self._http
    
    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
    
    # =========================================================================
    # HTTP
    # =========================================================================
    
    async def _request(
        self,
        method: str,
        url: str,
        params: list[tuple[str, str]],
    ) -> dict[str, Any]:
        """Send a request, retrying transient transport errors."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=2),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                response = await self.http.request(
                    method,
                    url,
                    params=params,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
        
        if not response.is_success:
            raise TranslationServiceError(
                f"Translation API error: {response.status_code}",
                status_code=response.status_code,
            )
        
        return response.json()
    
    def _translate_params(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: str,
    ) -> list[tuple[str, str]]:
        params = [("key", self.api_key)]
        params.extend(("q", text) for text in texts)
        params.extend([("target", target_language), ("format", "text")])
        if source_language != "auto":
            params.append(("source", source_language))
        return params
    
    # =========================================================================
    # Translation
    # =========================================================================
    
    async def fetch_translation(
        self,
        text: str,
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> str:
        """
        Translate text to target language.
        
        Args:
            text: Text to translate
            target_language: Target language code
            source_language: Source language code, "auto" to let the service detect
            use_cache: Whether to read the cache (results are always written)
        
        Returns:
            Translated text. Without an API key the text comes back unchanged.
        
        Raises:
            TranslationServiceError: the request failed or the answer was unusable
        """
        if not text or not text.strip():
            return text
        if not self.is_configured:
            return text
        
        key = TranslationKey(source_language, target_language, text)
        
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                return cached
        
        try:
            data = await self._request(
                "POST",
                self.base_url,
                self._translate_params([text], target_language, source_language),
            )
            translated = data["data"]["translations"][0]["translatedText"]
        except _REQUEST_ERRORS as e:
            raise TranslationServiceError(f"Translation request failed: {e!r}") from e
        
        self.cache.set(key, translated)
        return translated
    
    async def fetch_translations(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> list[str]:
        """
        Translate multiple texts in as few requests as possible.
        
        Empty entries pass through and are never sent. Cache hits are not
        re-requested. Nothing is cached unless every chunk succeeds.
        
        Raises:
            TranslationServiceError: any chunk failed or the counts don't match
        """
        if not texts:
            return []
        
        originals = list(texts)
        if not self.is_configured:
            return originals
        
        results = list(originals)
        # text -> positions in the input, first-seen order
        wanted: dict[str, list[int]] = {}
        
        for i, text in enumerate(originals):
            if not text or not text.strip():
                continue
            if use_cache:
                cached = self.cache.get(TranslationKey(source_language, target_language, text))
                if cached is not None:
                    results[i] = cached
                    continue
            wanted.setdefault(text, []).append(i)
        
        if not wanted:
            return results
        
        uncached = list(wanted)
        translations: list[str] = []
        
        try:
            for start in range(0, len(uncached), MAX_SEGMENTS_PER_REQUEST):
                chunk = uncached[start:start + MAX_SEGMENTS_PER_REQUEST]
                data = await self._request(
                    "POST",
                    self.base_url,
                    self._translate_params(chunk, target_language, source_language),
                )
                translations.extend(t["translatedText"] for t in data["data"]["translations"])
        except _REQUEST_ERRORS as e:
            raise TranslationServiceError(f"Batch translation request failed: {e!r}") from e
        
        if len(translations) != len(uncached):
            raise TranslationServiceError(
                f"Batch translation returned {len(translations)} results "
                f"for {len(uncached)} texts"
            )
        
        for text, translated in zip(uncached, translations):
            self.cache.set(TranslationKey(source_language, target_language, text), translated)
            for i in wanted[text]:
                results[i] = translated
        
        return results
    
    async def detect_language(self, text: str) -> str | None:
        """Detect the language of text. Returns None when it cannot tell."""
        if not text or not text.strip():
            return None
        if not self.is_configured:
            return None
        
        try:
            data = await self._request(
                "POST",
                f"{self.base_url}/detect",
                [("key", self.api_key), ("q", text)],
            )
            return data["data"]["detections"][0][0]["language"]
        except _SOFT_ERRORS as e:
            logger.error(f"Language detection error: {e}")
            return None
    
    async def get_supported_languages(self) -> list[dict[str, str]]:
        """Languages the service offers, or the built-in list on failure."""
        if not self.is_configured:
            return default_languages()
        
        try:
            data = await self._request(
                "GET",
                f"{self.base_url}/languages",
                [("key", self.api_key), ("target", "en")],
            )
            return list(data["data"]["languages"])
        except _SOFT_ERRORS as e:
            logger.error(f"Get languages error: {e}")
            return default_languages()
    
    # =========================================================================
    # Cache
    # =========================================================================
    
    def clear_cache(self) -> None:
        self.cache.clear()
    
    def get_cache_stats(self) -> dict[str, int]:
        return self.cache.stats()
