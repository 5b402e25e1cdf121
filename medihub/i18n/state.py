"""
Language state store.

Root of truth for the current language. Persists the user's choice, keeps
the layout direction in step with it, and clears the UI translation cache
on every switch so nothing translated for the old language is ever served.
"""

from __future__ import annotations

import logging
from enum import Enum

from medihub.core.events import EventBus, auto_detect_toggled, language_changed
from medihub.i18n.cache import TranslationCache
from medihub.i18n.languages import (
    DEFAULT_LANGUAGE,
    LanguageDescriptor,
    get_language_info,
    is_supported,
    normalize_language_code,
)
from medihub.storage.base import PreferenceKeys, PreferenceStorage

logger = logging.getLogger(__name__)


class UnsupportedLanguageError(ValueError):
    """Raised when switching to a language the registry does not know."""
    
    def __init__(self, code: str):
        super().__init__(f"Unsupported language: {code}")
        self.code = code


class LayoutDirection(str, Enum):
    """Text layout direction of the rendered document."""
    
    LTR = "ltr"
    RTL = "rtl"


class LanguageStateStore:
    """
    Holds the current language and the auto-detect flag.
    
    Both are read from storage once on construction and written back on
    every change. The store owns the layout-direction side effect; callers
    read ``layout_direction`` and ``document_language`` when rendering.
    """
    
    def __init__(
        self,
        storage: PreferenceStorage,
        cache: TranslationCache,
        events: EventBus | None = None,
        default_language: str = DEFAULT_LANGUAGE,
    ):
        self._storage = storage
        self._cache = cache
        self._events = events
        
        default = normalize_language_code(default_language)
        if not is_supported(default):
            default = DEFAULT_LANGUAGE
        
        saved = storage.get(PreferenceKeys.LANGUAGE)
        if saved and is_supported(saved):
            self._current = normalize_language_code(saved)
        else:
            if saved:
                logger.warning(f"Ignoring unsupported saved language '{saved}'")
            self._current = default
        
        self._auto_detect = storage.get(PreferenceKeys.AUTO_DETECT) == "true"
        
        self.layout_direction = LayoutDirection.LTR
        self.document_language = self._current
        self._update_document_direction(self._current)
    
    # =========================================================================
    # Reads
    # =========================================================================
    
    @property
    def current_language(self) -> str:
        return self._current
    
    def get_current_language(self) -> str:
        return self._current
    
    @property
    def auto_detect(self) -> bool:
        return self._auto_detect
    
    def get_current_language_info(self) -> LanguageDescriptor:
        return get_language_info(self._current)
    
    def is_rtl(self) -> bool:
        return self.layout_direction is LayoutDirection.RTL
    
    # =========================================================================
    # Mutations
    # =========================================================================
    
    def _update_document_direction(self, code: str) -> None:
        rtl = get_language_info(code).rtl
        self.layout_direction = LayoutDirection.RTL if rtl else LayoutDirection.LTR
        self.document_language = code
    
    async def change_language(self, code: str) -> None:
        """
        Switch the current language.
        
        No-op when the code is already current. Otherwise persists it,
        updates layout direction and clears the UI translation cache. The
        remote client's cache is left alone.
        
        Raises:
            UnsupportedLanguageError: code is not in the registry
        """
        code = normalize_language_code(code)
        if code == self._current:
            return
        if not is_supported(code):
            raise UnsupportedLanguageError(code)
        
        previous = self._current
        self._current = code
        self._storage.set(PreferenceKeys.LANGUAGE, code)
        self._update_document_direction(code)
        self._cache.clear()
        
        logger.info(f"Language changed {previous} -> {code} ({self.layout_direction.value})")
        
        if self._events:
            await self._events.publish(language_changed(previous, code, self.is_rtl()))
    
    async def toggle_auto_detect(self) -> bool:
        """Flip and persist the auto-detect flag. Returns the new value."""
        self._auto_detect = not self._auto_detect
        self._storage.set(PreferenceKeys.AUTO_DETECT, "true" if self._auto_detect else "false")
        
        if self._events:
            await self._events.publish(auto_detect_toggled(self._auto_detect))
        
        return self._auto_detect
