"""
Tests for the event bus and settings.
"""

import pytest

from medihub.config import Settings
from medihub.core.events import (
    Event,
    EventBus,
    LANGUAGE_CHANGED,
    TRANSLATION_CACHED,
    language_changed,
    translation_cached,
)


class TestEventBus:
    @pytest.mark.asyncio
    async def test_wildcard_subscription(self):
        bus = EventBus()
        seen = []
        
        async def handler(event):
            seen.append(event.event_type)
        
        bus.subscribe("translation.*", handler)
        
        await bus.publish(translation_cached("en", "es", "Save", "Guardar"))
        await bus.publish(language_changed("en", "es", False))
        
        assert seen == [TRANSLATION_CACHED]

    @pytest.mark.asyncio
    async def test_payload_filter(self):
        bus = EventBus()
        seen = []
        
        async def handler(event):
            seen.append(event.payload["text"])
        
        bus.subscribe(TRANSLATION_CACHED, handler, filter={"text": "Save"})
        
        await bus.publish(translation_cached("en", "es", "Cancel", "Cancelar"))
        await bus.publish(translation_cached("en", "es", "Save", "Guardar"))
        
        assert seen == ["Save"]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        seen = []
        
        async def broken(event):
            raise RuntimeError("boom")
        
        async def working(event):
            seen.append(event.id)
        
        bus.subscribe(LANGUAGE_CHANGED, broken)
        bus.subscribe(LANGUAGE_CHANGED, working)
        
        await bus.publish(language_changed("en", "ar", True))
        
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe_and_history(self):
        bus = EventBus(max_history=2)
        
        async def handler(event):
            pass
        
        subscription = bus.subscribe("*", handler)
        bus.unsubscribe(subscription)
        assert bus.subscription_count == 0
        
        for code in ("es", "fr", "hi"):
            await bus.publish(language_changed("en", code, False))
        
        history = bus.get_history(LANGUAGE_CHANGED)
        assert [e.payload["current"] for e in history] == ["fr", "hi"]
        
        bus.clear_history()
        assert bus.get_history() == []

    def test_event_round_trip(self):
        event = language_changed("en", "ar", True)
        restored = Event.from_dict(event.to_dict())
        
        assert restored.id == event.id
        assert restored.payload == {"previous": "en", "current": "ar", "direction": "rtl"}
        assert restored.timestamp == event.timestamp


class TestSettings:
    def test_cors_origins_list(self):
        settings = Settings(cors_origins="http://a.test, http://b.test,")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_translate_credentials(self):
        assert not Settings(google_translate_api_key="  ").has_translate_credentials
        assert Settings(google_translate_api_key="k").has_translate_credentials

    def test_is_production(self):
        assert Settings(environment="production").is_production
        assert not Settings(environment="development").is_production
