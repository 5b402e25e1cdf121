"""
Debounced single-text dispatcher.

Call sites ask for one string at a time, often many times per render.
The dispatcher answers from the UI cache when it can, collapses bursts of
requests for the same key into one remote call, and hands the eventual
translation to every caller that asked while the request was pending.

Lifecycle of a key:

    (absent) --t()--> armed --timer fires--> in flight --settled--> (absent)
                        ^  |
                        +--+ t() again: timer re-armed

Callers that arrive while the key is armed or in flight share one future,
so N concurrent callers cost exactly one remote call and all of them see
the translated text.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from medihub.core.events import EventBus, translation_cached
from medihub.i18n.cache import TranslationCache, TranslationKey
from medihub.i18n.client import TranslationProvider, TranslationServiceError
from medihub.i18n.state import LanguageStateStore

logger = logging.getLogger(__name__)


@dataclass
class PendingTranslation:
    """A key that is waiting on its debounce timer or on the remote call."""
    
    key: TranslationKey
    future: asyncio.Future = field(repr=False)
    force: bool = False
    timer: asyncio.TimerHandle | None = field(default=None, repr=False)
    task: asyncio.Task | None = field(default=None, repr=False)
    calls: int = 0
    
    @property
    def in_flight(self) -> bool:
        return self.task is not None


class SingleTextDispatcher:
    """
    Translates one text at a time with per-key debounce and deduplication.
    
    Usage:
        dispatcher = SingleTextDispatcher(provider, cache, state)
        
        label = await dispatcher.t("Save")                 # waits for translation
        label = await dispatcher.t("Save", debounce_ms=0)  # no quiet period
        
        dispatcher.is_loading("Save")   # armed or in flight?
        dispatcher.get_cached("Save")   # cached value or "Save"
    """
    
    def __init__(
        self,
        provider: TranslationProvider,
        cache: TranslationCache,
        state: LanguageStateStore,
        events: EventBus | None = None,
        debounce_ms: int = 300,
        pending_timeout: float = 15.0,
    ):
        self._provider = provider
        self._cache = cache
        self._state = state
        self._events = events
        self.debounce_ms = debounce_ms
        self.pending_timeout = pending_timeout
        
        self._pending: dict[TranslationKey, PendingTranslation] = {}
        self.remote_calls = 0
    
    def _key(self, text: str, source_language: str) -> TranslationKey:
        return TranslationKey(source_language, self._state.current_language, text)
    
    # =========================================================================
    # Translate
    # =========================================================================
    
    async def t(
        self,
        text: str,
        *,
        debounce_ms: int | None = None,
        source_language: str = "en",
        force: bool = False,
    ) -> str:
        """
        Translate text into the current language.
        
        Args:
            text: Text to translate
            debounce_ms: Quiet period before the remote call (default: dispatcher's)
            source_language: Language the text is written in
            force: Skip the cache and the source == target shortcut
        
        Returns:
            The translated text once known; the original text when the
            translation failed or timed out. Never raises for service errors.
        """
        if not text or not text.strip():
            return text
        
        key = self._key(text, source_language)
        
        if not force:
            if key.source == key.target:
                return text
            cached = self._cache.get(key)
            if cached is not None:
                return cached
        
        pending = self._pending.get(key)
        
        # Request already on the wire: join it, never send a second one
        if pending is not None and pending.in_flight:
            return await asyncio.shield(pending.future)
        
        loop = asyncio.get_running_loop()
        
        if pending is None:
            pending = PendingTranslation(key=key, future=loop.create_future())
            self._pending[key] = pending
        elif pending.timer is not None:
            pending.timer.cancel()
        
        pending.force = pending.force or force
        pending.calls += 1
        
        delay = self.debounce_ms if debounce_ms is None else debounce_ms
        pending.timer = loop.call_later(max(delay, 0) / 1000, self._fire, pending)
        
        return await asyncio.shield(pending.future)
    
    def _fire(self, pending: PendingTranslation) -> None:
        """Debounce timer expired: put the request on the wire."""
        pending.timer = None
        if self._pending.get(pending.key) is not pending:
            return
        pending.task = asyncio.get_running_loop().create_task(self._run(pending))
    
    async def _run(self, pending: PendingTranslation) -> None:
        key = pending.key
        translated = key.text
        ok = False
        self.remote_calls += 1
        
        try:
            translated = await asyncio.wait_for(
                self._provider.fetch_translation(
                    key.text,
                    key.target,
                    key.source,
                    use_cache=not pending.force,
                ),
                timeout=self.pending_timeout,
            )
            ok = True
        except asyncio.TimeoutError:
            logger.warning(
                f"Translation {key.source}->{key.target} timed out after "
                f"{self.pending_timeout}s: {key.text[:60]!r}"
            )
        except TranslationServiceError as e:
            logger.warning(f"Translation {key.source}->{key.target} failed: {e}")
        except Exception:
            logger.exception(f"Translation {key.source}->{key.target} failed: {key.text[:60]!r}")
        finally:
            if ok:
                self._cache.set(key, translated)
            self._settle(pending, translated if ok else key.text)
        
        if ok and self._events:
            await self._events.publish(
                translation_cached(key.source, key.target, key.text, translated)
            )
    
    def _settle(self, pending: PendingTranslation, value: str) -> None:
        if self._pending.get(pending.key) is pending:
            del self._pending[pending.key]
        if not pending.future.done():
            pending.future.set_result(value)
    
    # =========================================================================
    # Queries
    # =========================================================================
    
    def is_loading(self, text: str, source_language: str = "en") -> bool:
        """Whether a translation for text is armed or in flight."""
        return self._key(text, source_language) in self._pending
    
    def get_cached(self, text: str, source_language: str = "en") -> str:
        """Cached translation without triggering one; the text itself if none."""
        cached = self._cache.get(self._key(text, source_language))
        return cached if cached is not None else text
    
    @property
    def pending_count(self) -> int:
        return len(self._pending)
    
    def cancel_pending(self) -> int:
        """
        Cancel every armed timer.
        
        Callers waiting on a cancelled key get the original text. Requests
        already in flight are left to finish. Returns the number cancelled.
        """
        cancelled = 0
        for key, pending in list(self._pending.items()):
            if pending.in_flight:
                continue
            if pending.timer is not None:
                pending.timer.cancel()
                pending.timer = None
            self._settle(pending, key.text)
            cancelled += 1
        return cancelled
    
    def get_stats(self) -> dict[str, int]:
        in_flight = sum(1 for p in self._pending.values() if p.in_flight)
        return {
            "cached_translations": len(self._cache),
            "loading_translations": in_flight,
            "pending_timeouts": len(self._pending) - in_flight,
            "remote_calls": self.remote_calls,
        }
