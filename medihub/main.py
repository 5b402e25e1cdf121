"""
MediHub translation layer - main entry point.

Walks through a language switch the way a portal session would and can be
run to verify the installation. Without GOOGLE_TRANSLATE_API_KEY every text
comes back untranslated, which is the expected fail-soft behavior.
"""

from __future__ import annotations

import asyncio

from dotenv import load_dotenv

from medihub.config import configure_logging, get_settings
from medihub.core.events import LANGUAGE_CHANGED, TRANSLATION_CACHED, Event
from medihub.i18n import create_translator, translate_record
from medihub.i18n.warmup import COMMON_STRINGS

load_dotenv()


async def demo():
    """
    Run a demonstration of the translation layer.
    
    Switches to Spanish, translates single texts and a group, shows the
    Arabic layout flip and dumps the cache counters.
    """
    print("=" * 60)
    print("MEDIHUB TRANSLATION DEMO")
    print("=" * 60)
    print()
    
    settings = get_settings()
    configure_logging(settings)
    translator = create_translator(settings)
    
    async def on_language_changed(event: Event) -> None:
        print(f"  ↪ language {event.payload['previous']} → {event.payload['current']} ({event.payload['direction']})")
    
    async def on_translation_cached(event: Event) -> None:
        print(f"  ↪ cached {event.payload['text']!r} → {event.payload['translated']!r}")
    
    translator.events.subscribe(LANGUAGE_CHANGED, on_language_changed)
    translator.events.subscribe(TRANSLATION_CACHED, on_translation_cached)
    
    try:
        info = translator.get_current_language_info()
        print(f"Current language: {info.flag} {info.name} ({info.code})")
        print(f"Remote translation configured: {settings.has_translate_credentials}")
        print()
        
        print("Switching to Spanish...")
        await translator.change_language("es")
        print()
        
        # Three call sites asking for the same label in the same render
        print("Translating 'Patient Records' from three call sites...")
        labels = await asyncio.gather(*(translator.t("Patient Records") for _ in range(3)))
        print(f"  ✓ {labels[0]}  (remote calls: {translator.single.remote_calls})")
        print()
        
        print("Translating a group of navigation labels in one batch...")
        nav = await translator.t_batch(COMMON_STRINGS[:5])
        for original, translated in zip(COMMON_STRINGS[:5], nav):
            print(f"  • {original} → {translated}")
        print()
        
        print("Translating a lab record...")
        record = {"test_name": "Blood Test", "status": "Pending", "notes": "Fasting required"}
        translated_record = await translate_record(translator, record, ["test_name", "status", "notes"])
        for key, value in translated_record.items():
            print(f"  • {key}: {value}")
        print()
        
        print("Switching to Arabic...")
        await translator.change_language("ar")
        print(f"  ✓ layout direction: {translator.layout_direction.value}")
        print(f"  ✓ formatted: {translator.format_text('Blood   Group')!r}")
        print()
        
        stats = translator.get_cache_stats()
        print("Cache stats:")
        for key, value in stats.items():
            print(f"  • {key}: {value}")
        print()
    finally:
        await translator.aclose()
    
    print("=" * 60)
    print("Demo complete!")
    print()
    print("Try the API: uvicorn medihub.api.app:app --reload")
    print("=" * 60)


def main():
    """Main entry point."""
    asyncio.run(demo())


if __name__ == "__main__":
    main()
