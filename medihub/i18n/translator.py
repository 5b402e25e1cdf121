"""
Translator - the consumer-facing translation object.

Bundles the language state store, the UI cache, both dispatchers, the
remote client and the event bus behind one explicitly constructed object.
Whoever owns the UI tree (the API app, a test, a CLI) builds one and hands
it down; nothing here is a process-wide singleton.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from medihub.config import Settings, get_settings
from medihub.core.events import EventBus, cache_cleared
from medihub.i18n.batch import BatchDispatcher, Option
from medihub.i18n.cache import TranslationCache
from medihub.i18n.client import RemoteTranslationClient, TranslationProvider
from medihub.i18n.dispatch import SingleTextDispatcher
from medihub.i18n.languages import (
    DEFAULT_LANGUAGE,
    LanguageDescriptor,
    get_language_info,
    normalize_language_code,
)
from medihub.i18n.state import LanguageStateStore, LayoutDirection
from medihub.storage.base import PreferenceStorage
from medihub.storage.local import InMemoryPreferenceStorage, create_preference_storage

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class Translator:
    """
    Main translation service.
    
    Usage:
        translator = create_translator()
        
        # Single text, debounced and cached
        label = await translator.t("Save")
        
        # Several texts that render together
        labels = await translator.t_batch(["Name", "Age", "Blood Group"])
        
        # Switch language (clears the UI cache, flips RTL for Arabic)
        await translator.change_language("ar")
        translator.layout_direction  # -> LayoutDirection.RTL
    """
    
    def __init__(
        self,
        provider: TranslationProvider,
        storage: PreferenceStorage | None = None,
        events: EventBus | None = None,
        default_language: str = DEFAULT_LANGUAGE,
        debounce_ms: int = 300,
        pending_timeout: float = 15.0,
    ):
        self.provider = provider
        self.events = events or EventBus()
        self.cache = TranslationCache()
        self.state = LanguageStateStore(
            storage or InMemoryPreferenceStorage(),
            self.cache,
            self.events,
            default_language=default_language,
        )
        self.single = SingleTextDispatcher(
            provider,
            self.cache,
            self.state,
            self.events,
            debounce_ms=debounce_ms,
            pending_timeout=pending_timeout,
        )
        self.batch = BatchDispatcher(
            provider,
            self.cache,
            self.state,
            self.events,
            request_timeout=pending_timeout,
        )
    
    # =========================================================================
    # Language state
    # =========================================================================
    
    @property
    def current_language(self) -> str:
        return self.state.current_language
    
    def get_current_language(self) -> str:
        return self.state.get_current_language()
    
    @property
    def auto_detect(self) -> bool:
        return self.state.auto_detect
    
    @property
    def layout_direction(self) -> LayoutDirection:
        return self.state.layout_direction
    
    async def change_language(self, code: str) -> None:
        await self.state.change_language(code)
    
    async def toggle_auto_detect(self) -> bool:
        return await self.state.toggle_auto_detect()
    
    def get_language_info(self, code: str | None = None) -> LanguageDescriptor:
        return get_language_info(code or self.current_language)
    
    def get_current_language_info(self) -> LanguageDescriptor:
        return self.state.get_current_language_info()
    
    def is_rtl(self) -> bool:
        return self.state.is_rtl()
    
    def resolve_source(self, source_language: str | None = None) -> str:
        """Source language a call would use: explicit, else "auto" or English."""
        if source_language:
            return source_language
        return "auto" if self.state.auto_detect else DEFAULT_LANGUAGE
    
    # =========================================================================
    # Translation
    # =========================================================================
    
    async def t(
        self,
        text: str,
        *,
        debounce_ms: int | None = None,
        source_language: str | None = None,
        target_language: str | None = None,
        force: bool = False,
    ) -> str:
        """
        Translate one text into the current language.
        
        ``target_language`` translates into another language without
        touching the UI cache or the debounce queue; only the remote
        client's cache is used.
        """
        source = self.resolve_source(source_language)
        
        if target_language:
            target = normalize_language_code(target_language)
            if target != self.current_language:
                if not text or not text.strip() or (source == target and not force):
                    return text
                return await self.provider.translate_one(
                    text, target, source, use_cache=not force,
                )
        
        return await self.single.t(
            text,
            debounce_ms=debounce_ms,
            source_language=source,
            force=force,
        )
    
    async def t_batch(
        self,
        texts: Sequence[str],
        *,
        source_language: str | None = None,
        force: bool = False,
    ) -> list[str]:
        """Translate texts together, preserving order."""
        return await self.batch.t_batch(
            texts,
            source_language=self.resolve_source(source_language),
            force=force,
        )
    
    async def t_options(
        self,
        items: Sequence[Any],
        *,
        source_language: str | None = None,
        force: bool = False,
    ) -> list[Option]:
        """Translate option labels (plain strings or value/label pairs)."""
        return await self.batch.t_options(
            items,
            source_language=self.resolve_source(source_language),
            force=force,
        )
    
    def is_loading(self, text: str, source_language: str | None = None) -> bool:
        return self.single.is_loading(text, self.resolve_source(source_language))
    
    def get_cached(self, text: str, source_language: str | None = None) -> str:
        return self.single.get_cached(text, self.resolve_source(source_language))
    
    async def detect_language(self, text: str) -> str | None:
        """Detect the language of text; None means unknown."""
        if not text or not text.strip():
            return None
        try:
            return await self.provider.detect_language(text)
        except Exception:
            logger.exception("Language detection failed")
            return None
    
    async def get_supported_languages(self) -> list[dict[str, str]]:
        return await self.provider.get_supported_languages()
    
    def format_text(
        self,
        text: str,
        preserve_spacing: bool = True,
        trim_whitespace: bool = False,
    ) -> str:
        """Format text for the current layout direction."""
        if not text:
            return text
        
        formatted = text.strip() if trim_whitespace else text
        
        if self.is_rtl() and preserve_spacing:
            formatted = _WHITESPACE.sub(" ", formatted)
        
        return formatted
    
    # =========================================================================
    # Cache
    # =========================================================================
    
    async def clear_cache(self) -> None:
        """Drop the UI cache and cancel armed translations."""
        cancelled = self.single.cancel_pending()
        self.cache.clear()
        logger.info(f"Translation cache cleared ({cancelled} pending cancelled)")
        await self.events.publish(cache_cleared("manual"))
    
    def get_cache_stats(self) -> dict[str, Any]:
        return {
            **self.single.get_stats(),
            "batch_calls": self.batch.remote_calls,
            "remote_cache": self.provider.get_cache_stats(),
        }
    
    async def aclose(self) -> None:
        self.single.cancel_pending()
        await self.provider.aclose()


def create_translator(
    settings: Settings | None = None,
    storage: PreferenceStorage | None = None,
    provider: TranslationProvider | None = None,
    events: EventBus | None = None,
) -> Translator:
    """Build a Translator wired from settings."""
    settings = settings or get_settings()
    
    if storage is None:
        storage = create_preference_storage(settings.preferences_path or None)
    if provider is None:
        provider = RemoteTranslationClient.from_settings(settings)
    
    return Translator(
        provider,
        storage=storage,
        events=events,
        default_language=settings.default_language,
        debounce_ms=settings.translation_debounce_ms,
        pending_timeout=settings.translation_pending_timeout,
    )
