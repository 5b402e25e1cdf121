"""
Shared fixtures for the translation layer tests.

The fake provider stands in for the remote client: it tags every text with
the target language so tests can tell translated from untranslated output.
FakeGoogle answers for the Translation v2 endpoints so tests can drive the
real client through httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
from typing import Sequence

import httpx
import pytest

from medihub.i18n.client import RemoteTranslationClient, TranslationProvider, TranslationServiceError
from medihub.i18n.translator import Translator
from medihub.storage.local import InMemoryPreferenceStorage


def fake_translation(text: str, target: str) -> str:
    return f"[{target}] {text}"


class FakeProvider(TranslationProvider):
    """Records every remote call; optionally slow or broken.
    
    Broken means every fetch raises, so the inherited translate_one and
    translate_batch fail soft the way the real client does.
    """
    
    def __init__(self, delay: float = 0.0, fail: bool = False, detected: str | None = "fr"):
        self.delay = delay
        self.fail = fail
        self.detected = detected
        self.calls: list[tuple[str, str, str]] = []
        self.batch_calls: list[tuple[list[str], str, str]] = []
        self.use_cache_flags: list[bool] = []
    
    async def fetch_translation(
        self,
        text: str,
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> str:
        self.calls.append((text, target_language, source_language))
        self.use_cache_flags.append(use_cache)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise TranslationServiceError("translation service down", status_code=503)
        return fake_translation(text, target_language)
    
    async def fetch_translations(
        self,
        texts: Sequence[str],
        target_language: str,
        source_language: str = "auto",
        *,
        use_cache: bool = True,
    ) -> list[str]:
        self.batch_calls.append((list(texts), target_language, source_language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise TranslationServiceError("translation service down", status_code=503)
        return [fake_translation(t, target_language) if t.strip() else t for t in texts]
    
    async def detect_language(self, text: str) -> str | None:
        if self.fail:
            raise RuntimeError("translation service down")
        return self.detected


class FakeGoogle:
    """Minimal stand-in for the Translation v2 endpoints.
    
    ``outages`` answers that many leading requests with 503 before the
    service recovers.
    """
    
    def __init__(self, status_code: int = 200, transport_failures: int = 0, outages: int = 0):
        self.status_code = status_code
        self.transport_failures = transport_failures
        self.outages = outages
        self.requests: list[httpx.Request] = []
    
    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        
        if self.transport_failures:
            self.transport_failures -= 1
            raise httpx.ConnectError("connection refused", request=request)
        
        if self.outages:
            self.outages -= 1
            return httpx.Response(503, json={"error": {"message": "backend unavailable"}})
        
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "quota"}})
        
        params = request.url.params
        path = request.url.path
        
        if path.endswith("/detect"):
            return httpx.Response(200, json={
                "data": {"detections": [[{"language": "fr", "confidence": 0.98}]]}
            })
        
        if path.endswith("/languages"):
            return httpx.Response(200, json={
                "data": {"languages": [{"language": "es", "name": "Spanish"}]}
            })
        
        target = params["target"]
        return httpx.Response(200, json={
            "data": {
                "translations": [
                    {"translatedText": f"{target}:{q}"} for q in params.get_list("q")
                ]
            }
        })


def make_client(google: FakeGoogle, **kwargs) -> tuple[RemoteTranslationClient, httpx.AsyncClient]:
    http = httpx.AsyncClient(transport=httpx.MockTransport(google))
    kwargs.setdefault("api_key", "test-key")
    return RemoteTranslationClient(http_client=http, **kwargs), http


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def provider():
    """Fast, working fake provider."""
    return FakeProvider()


@pytest.fixture
def storage():
    """Empty in-memory preferences."""
    return InMemoryPreferenceStorage()


@pytest.fixture
def translator(provider, storage):
    """Translator with a short debounce so tests stay quick."""
    return Translator(provider, storage=storage, debounce_ms=10, pending_timeout=1.0)
