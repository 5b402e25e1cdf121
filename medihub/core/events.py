"""
Event system for translation state changes.

Bindings that render translated text subscribe here so they can re-render
when a translation lands in the cache or the user switches language. The
bus is explicitly constructed and handed to whoever owns the UI tree.
"""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable

from medihub.core.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

# Type for event handlers
EventHandler = Callable[["Event"], Awaitable[None]]


# Event types emitted by the i18n layer
LANGUAGE_CHANGED = "language.changed"
AUTO_DETECT_TOGGLED = "language.auto_detect_toggled"
TRANSLATION_CACHED = "translation.cached"
TRANSLATIONS_CACHED = "translation.batch_cached"
CACHE_CLEARED = "translation.cache_cleared"


@dataclass
class Event:
    """
    An event in the system.
    
    Events are immutable records of something that happened. They carry
    all the context needed for handlers to process them.
    """
    
    event_type: str  # e.g., "language.changed", "translation.cached"
    payload: dict[str, Any] = field(default_factory=dict)
    
    id: str = field(default_factory=lambda: generate_id("evt"))
    timestamp: datetime = field(default_factory=utc_now)
    
    def to_dict(self) -> dict[str, Any]:
        """Serialize event to dictionary."""
        return {
            "id": self.id,
            "event_type": self.event_type,
            "payload": self.payload,
            "timestamp": self.timestamp.isoformat(),
        }
    
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event:
        """Deserialize event from dictionary."""
        return cls(
            id=data["id"],
            event_type=data["event_type"],
            payload=data.get("payload", {}),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


@dataclass
class Subscription:
    """A subscription to events matching a pattern."""
    
    pattern: str  # e.g., "translation.*" or "language.changed"
    handler: EventHandler
    filter: dict[str, Any] = field(default_factory=dict)  # Payload filters
    
    def matches(self, event: Event) -> bool:
        """Check if this subscription matches the given event."""
        if not fnmatch.fnmatch(event.event_type, self.pattern):
            return False
        
        for key, value in self.filter.items():
            if event.payload.get(key) != value:
                return False
        
        return True


class EventBus:
    """
    In-memory event bus.
    
    All publishing happens on the event loop that owns the translator, so
    handlers run one after another in subscription order.
    """
    
    def __init__(self, max_history: int = 1000):
        self._subscriptions: list[Subscription] = []
        self._event_history: list[Event] = []
        self._max_history = max_history
    
    def subscribe(
        self,
        pattern: str,
        handler: EventHandler,
        filter: dict[str, Any] | None = None,
    ) -> Subscription:
        """
        Subscribe to events matching a pattern.
        
        Args:
            pattern: Event type pattern (supports wildcards like "translation.*")
            handler: Async function to handle matching events
            filter: Payload filters (e.g., {"text": "Save"})
        
        Returns:
            The subscription object (can be used to unsubscribe)
        """
        subscription = Subscription(
            pattern=pattern,
            handler=handler,
            filter=filter or {},
        )
        self._subscriptions.append(subscription)
        return subscription
    
    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription."""
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
    
    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)
    
    async def publish(self, event: Event) -> None:
        """Publish an event to every matching subscription."""
        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history = self._event_history[-self._max_history:]
        
        # Snapshot: handlers may unsubscribe while we iterate
        matching = [s for s in self._subscriptions if s.matches(event)]
        
        for subscription in matching:
            try:
                await subscription.handler(event)
            except Exception:
                # Log error but don't stop other handlers
                logger.exception(f"Error in event handler for {event.event_type}")
    
    def get_history(
        self,
        event_type: str | None = None,
        limit: int = 100,
    ) -> list[Event]:
        """Query event history with optional type pattern."""
        results = self._event_history
        
        if event_type:
            results = [e for e in results if fnmatch.fnmatch(e.event_type, event_type)]
        
        return results[-limit:]
    
    def clear_history(self) -> None:
        self._event_history.clear()


# Convenience functions for common event types
def language_changed(previous: str, current: str, rtl: bool) -> Event:
    """Create a language.changed event."""
    return Event(
        event_type=LANGUAGE_CHANGED,
        payload={
            "previous": previous,
            "current": current,
            "direction": "rtl" if rtl else "ltr",
        },
    )


def auto_detect_toggled(enabled: bool) -> Event:
    """Create a language.auto_detect_toggled event."""
    return Event(event_type=AUTO_DETECT_TOGGLED, payload={"enabled": enabled})


def translation_cached(source: str, target: str, text: str, translated: str) -> Event:
    """Create a translation.cached event."""
    return Event(
        event_type=TRANSLATION_CACHED,
        payload={
            "source": source,
            "target": target,
            "text": text,
            "translated": translated,
        },
    )


def translations_cached(source: str, target: str, texts: list[str]) -> Event:
    """Create a translation.batch_cached event."""
    return Event(
        event_type=TRANSLATIONS_CACHED,
        payload={
            "source": source,
            "target": target,
            "texts": texts,
            "count": len(texts),
        },
    )


def cache_cleared(reason: str) -> Event:
    """Create a translation.cache_cleared event."""
    return Event(event_type=CACHE_CLEARED, payload={"reason": reason})
