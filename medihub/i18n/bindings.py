"""
Presentational bindings.

Thin consumers of the Translator for whatever renders text: a bound text
that re-renders when its translation lands, a bound group translated in
one batch, and helpers for component label maps and form field configs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Sequence

from medihub.core.events import (
    LANGUAGE_CHANGED,
    TRANSLATION_CACHED,
    TRANSLATIONS_CACHED,
    Event,
    Subscription,
)
from medihub.i18n.translator import Translator

logger = logging.getLogger(__name__)


FORM_TEXT_FIELDS = ("label", "placeholder", "helper_text", "error_message")


class TranslatedText:
    """
    A piece of text bound to the translator.
    
    ``render()`` never waits: it shows whatever is cached (or the original).
    ``await refresh()`` asks for the translation. Cache and language events
    keep the displayed value current until ``close()``.
    """
    
    def __init__(
        self,
        translator: Translator,
        text: str,
        source_language: str | None = None,
        force: bool = False,
        fallback: str | None = None,
    ):
        self.translator = translator
        self.text = text
        self.source_language = source_language
        self.force = force
        self.fallback = fallback
        self.translated = text
        self.renders = 0
        self._refresh_task: asyncio.Task | None = None
        
        events = translator.events
        self._subscriptions: list[Subscription] = [
            events.subscribe(TRANSLATION_CACHED, self._on_cached, filter={"text": text}),
            events.subscribe(TRANSLATIONS_CACHED, self._on_batch_cached),
            events.subscribe(LANGUAGE_CHANGED, self._on_language_changed),
        ]
    
    @property
    def display(self) -> str:
        return self.translator.format_text(self.translated)
    
    @property
    def loading(self) -> bool:
        return self.translator.is_loading(self.text, self.source_language)
    
    def render(self) -> str:
        """Current display value from the cache, without triggering work."""
        self.translated = self.translator.get_cached(self.text, self.source_language)
        return self.display
    
    async def refresh(self) -> str:
        """Translate now and return the display value."""
        try:
            result = await self.translator.t(
                self.text,
                source_language=self.source_language,
                force=self.force,
            )
        except Exception:
            logger.exception(f"Translation error for {self.text[:40]!r}")
            result = self.fallback or self.text
        
        self.translated = result
        self.renders += 1
        return self.display
    
    def _is_ours(self, event: Event) -> bool:
        payload = event.payload
        return (
            payload.get("target") == self.translator.current_language
            and payload.get("source") == self.translator.resolve_source(self.source_language)
        )
    
    async def _on_cached(self, event: Event) -> None:
        if not self._is_ours(event):
            return
        self.translated = event.payload["translated"]
        self.renders += 1
    
    async def _on_batch_cached(self, event: Event) -> None:
        if not self._is_ours(event):
            return
        if self.text in event.payload.get("texts", []):
            self.render()
            self.renders += 1
    
    async def _on_language_changed(self, event: Event) -> None:
        # Show the original until the new language's translation arrives
        self.translated = self.text
        self.renders += 1
        self._refresh_task = asyncio.get_running_loop().create_task(self.refresh())
    
    async def wait(self) -> str:
        """Wait for a refresh started by a language change, if any."""
        if self._refresh_task is not None:
            await self._refresh_task
        return self.display
    
    def close(self) -> None:
        for subscription in self._subscriptions:
            self.translator.events.unsubscribe(subscription)
        self._subscriptions.clear()
        if self._refresh_task is not None and not self._refresh_task.done():
            self._refresh_task.cancel()


class TranslatedGroup:
    """Several texts that render together and translate in one batch."""
    
    def __init__(
        self,
        translator: Translator,
        texts: Sequence[str],
        source_language: str | None = None,
        force: bool = False,
        separator: str = " ",
    ):
        self.translator = translator
        self.texts = list(texts)
        self.source_language = source_language
        self.force = force
        self.separator = separator
        self.translated = list(self.texts)
        self.loading = False
    
    def render(self) -> str:
        return self.separator.join(self.translator.format_text(t) for t in self.translated)
    
    async def refresh(self) -> list[str]:
        if not self.texts:
            self.translated = []
            return []
        
        self.loading = True
        try:
            self.translated = await self.translator.t_batch(
                self.texts,
                source_language=self.source_language,
                force=self.force,
            )
        except Exception:
            logger.exception("Batch translation error")
            self.translated = list(self.texts)
        finally:
            self.loading = False
        
        return [self.translator.format_text(t) for t in self.translated]


async def translate_component_texts(
    translator: Translator,
    texts: Mapping[str, str],
) -> dict[str, str]:
    """
    Translate a component's named texts concurrently.
    
    Returns a dict with the same keys; falls back to the originals on error.
    """
    if not texts:
        return {}
    
    keys = list(texts)
    try:
        translated = await asyncio.gather(*(translator.t(texts[k]) for k in keys))
    except Exception:
        logger.exception("Component translation error")
        return dict(texts)
    
    return dict(zip(keys, translated))


async def translate_form_fields(
    translator: Translator,
    config: Mapping[str, Mapping[str, Any]],
) -> dict[str, dict[str, Any]]:
    """
    Translate the user-facing texts of a form configuration.
    
    Each field may carry ``label``, ``placeholder``, ``helper_text`` and
    ``error_message``; everything else is copied through untouched.
    """
    result = {name: dict(cfg) for name, cfg in config.items()}
    
    jobs: list[tuple[str, str, str]] = []
    for field_name, field_config in config.items():
        for attr in FORM_TEXT_FIELDS:
            value = field_config.get(attr)
            if value:
                jobs.append((field_name, attr, value))
    
    if not jobs:
        return result
    
    try:
        translated = await asyncio.gather(*(translator.t(value) for _, _, value in jobs))
    except Exception:
        logger.exception("Form translation error")
        return result
    
    for (field_name, attr, _), value in zip(jobs, translated):
        result[field_name][attr] = value
    
    return result
