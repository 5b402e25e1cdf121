"""
Tests for the HTTP API.

The app's translator is swapped for one backed by the fake provider.
"""

import pytest
from fastapi.testclient import TestClient

from medihub.api.app import app, get_translator
from medihub.i18n.translator import Translator


@pytest.fixture
def api_translator(provider, storage):
    return Translator(provider, storage=storage, debounce_ms=0)


@pytest.fixture
def client(api_translator):
    app.dependency_overrides[get_translator] = lambda: api_translator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealthAndLanguages:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_list_languages(self, client):
        languages = client.get("/languages").json()["languages"]
        assert {"language": "ar", "name": "Arabic"} in languages

    def test_current_language(self, client):
        data = client.get("/language").json()
        
        assert data["language"]["code"] == "en"
        assert data["auto_detect"] is False
        assert data["direction"] == "ltr"


class TestChangeLanguage:
    def test_change_language(self, client, storage):
        response = client.put("/language", json={"language": "es"})
        
        assert response.status_code == 200
        assert response.json()["language"]["name"] == "Spanish"
        assert storage.get("medihub-language") == "es"

    def test_arabic_is_rtl(self, client):
        data = client.put("/language", json={"language": "ar"}).json()
        
        assert data["direction"] == "rtl"
        assert data["language"]["rtl"] is True

    def test_unsupported_language(self, client):
        response = client.put("/language", json={"language": "xx"})
        
        assert response.status_code == 400
        assert client.get("/language").json()["language"]["code"] == "en"

    def test_toggle_auto_detect(self, client):
        assert client.post("/language/auto-detect").json() == {"auto_detect": True}
        assert client.post("/language/auto-detect").json() == {"auto_detect": False}


class TestTranslate:
    def test_translate(self, client, provider):
        client.put("/language", json={"language": "es"})
        
        data = client.post("/translate", json={"text": "Save"}).json()
        
        assert data == {"text": "Save", "translated": "[es] Save", "target_language": "es"}
        
        client.post("/translate", json={"text": "Save"})
        assert len(provider.calls) == 1

    def test_translate_into_other_language(self, client, api_translator):
        client.put("/language", json={"language": "es"})
        
        data = client.post("/translate", json={"text": "Save", "target_language": "fr"}).json()
        
        assert data == {"text": "Save", "translated": "[fr] Save", "target_language": "fr"}
        assert len(api_translator.cache) == 0

    def test_translate_batch(self, client):
        client.put("/language", json={"language": "hi"})
        
        data = client.post("/translate/batch", json={"texts": ["Name", "", "Age"]}).json()
        
        assert data["translations"] == ["[hi] Name", "", "[hi] Age"]
        assert data["target_language"] == "hi"

    def test_translate_options(self, client):
        client.put("/language", json={"language": "hi"})
        
        data = client.post("/translate/options", json={
            "options": ["Male", {"value": "f", "label": "Female"}],
        }).json()
        
        assert data["options"] == ["[hi] Male", {"value": "f", "label": "[hi] Female"}]

    def test_translate_options_without_label(self, client):
        response = client.post("/translate/options", json={"options": [{"value": "f"}]})
        assert response.status_code == 400

    def test_detect(self, client):
        assert client.post("/detect", json={"text": "Bonjour"}).json() == {"language": "fr"}


class TestCacheEndpoints:
    def test_status(self, client):
        client.put("/language", json={"language": "es"})
        client.post("/translate", json={"text": "Save"})
        
        data = client.get("/translate/status", params={"text": "Save"}).json()
        
        assert data["loading"] is False
        assert data["cached"] == "[es] Save"

    def test_stats_and_clear(self, client):
        client.put("/language", json={"language": "es"})
        client.post("/translate", json={"text": "Save"})
        
        assert client.get("/translate/cache").json()["cached_translations"] == 1
        
        data = client.delete("/translate/cache").json()
        
        assert data["cleared"] is True
        assert data["cached_translations"] == 0
