"""
Batch dispatcher.

For groups of strings that render together (select options, table
headers, a list of vaccine names) one remote call beats N debounced ones.
Cached entries are reused and only the misses go over the wire.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from medihub.core.events import EventBus, translations_cached
from medihub.i18n.cache import TranslationCache, TranslationKey
from medihub.i18n.client import TranslationProvider, TranslationServiceError
from medihub.i18n.state import LanguageStateStore

logger = logging.getLogger(__name__)


# =============================================================================
# Option variants
# =============================================================================


@dataclass(frozen=True)
class PlainOption:
    """An option that is just its own text."""
    
    text: str
    
    @property
    def label(self) -> str:
        return self.text
    
    def with_label(self, label: str) -> PlainOption:
        return PlainOption(label)


@dataclass(frozen=True)
class LabeledOption:
    """An option with a stable value and a display label."""
    
    value: Any
    label: str
    
    def with_label(self, label: str) -> LabeledOption:
        return LabeledOption(self.value, label)


Option = Union[PlainOption, LabeledOption]


def normalize_option(item: Any) -> Option:
    """
    Turn a raw option into its tagged variant.
    
    Accepts plain strings, ``{"value": ..., "label": ...}`` mappings and
    options that are already normalized.
    """
    if isinstance(item, (PlainOption, LabeledOption)):
        return item
    if isinstance(item, str):
        return PlainOption(item)
    if isinstance(item, Mapping):
        if "label" not in item:
            raise ValueError(f"Option mapping has no label: {item!r}")
        return LabeledOption(item.get("value", item["label"]), str(item["label"]))
    raise TypeError(f"Unsupported option type: {type(item).__name__}")


# =============================================================================
# Dispatcher
# =============================================================================


class BatchDispatcher:
    """
    Translates a list of texts with one remote call per invocation.
    
    Usage:
        batch = BatchDispatcher(provider, cache, state)
        labels = await batch.t_batch(["Male", "Female", "Other"])
        options = await batch.t_options(["A+", {"value": "o_neg", "label": "O Negative"}])
    """
    
    def __init__(
        self,
        provider: TranslationProvider,
        cache: TranslationCache,
        state: LanguageStateStore,
        events: EventBus | None = None,
        request_timeout: float = 15.0,
    ):
        self._provider = provider
        self._cache = cache
        self._state = state
        self._events = events
        self.request_timeout = request_timeout
        self.remote_calls = 0
    
    async def t_batch(
        self,
        texts: Sequence[str],
        *,
        source_language: str = "en",
        force: bool = False,
    ) -> list[str]:
        """
        Translate texts into the current language, preserving order.
        
        Returns:
            One entry per input. Entries that could not be translated come
            back unchanged; this never raises for service errors.
        """
        texts = list(texts)
        if not texts:
            return texts
        
        target = self._state.current_language
        if source_language == target and not force:
            return texts
        
        results = list(texts)
        # text -> positions still needing a translation
        missing: dict[str, list[int]] = {}
        
        for i, text in enumerate(texts):
            if not text or not text.strip():
                continue
            if not force:
                cached = self._cache.get(TranslationKey(source_language, target, text))
                if cached is not None:
                    results[i] = cached
                    continue
            missing.setdefault(text, []).append(i)
        
        if not missing:
            return results
        
        uncached = list(missing)
        self.remote_calls += 1
        
        try:
            translations = await asyncio.wait_for(
                self._provider.fetch_translations(
                    uncached,
                    target,
                    source_language,
                    use_cache=not force,
                ),
                timeout=self.request_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Batch translation of {len(uncached)} texts timed out "
                f"after {self.request_timeout}s"
            )
            return results
        except TranslationServiceError as e:
            logger.warning(f"Batch translation of {len(uncached)} texts failed: {e}")
            return results
        except Exception:
            logger.exception(f"Batch translation of {len(uncached)} texts failed")
            return results
        
        if len(translations) != len(uncached):
            logger.error(
                f"Batch translation returned {len(translations)} results "
                f"for {len(uncached)} texts"
            )
            return results
        
        for text, translated in zip(uncached, translations):
            self._cache.set(TranslationKey(source_language, target, text), translated)
            for i in missing[text]:
                results[i] = translated
        
        if self._events:
            await self._events.publish(translations_cached(source_language, target, uncached))
        
        return results
    
    async def t_options(
        self,
        items: Sequence[Any],
        *,
        source_language: str = "en",
        force: bool = False,
    ) -> list[Option]:
        """Translate option labels in one batch, keeping values and order."""
        options = [normalize_option(item) for item in items]
        if not options:
            return options
        
        labels = await self.t_batch(
            [option.label for option in options],
            source_language=source_language,
            force=force,
        )
        return [option.with_label(label) for option, label in zip(options, labels)]
