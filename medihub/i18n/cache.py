"""
Translation caches.

Two layers share one key type:

- TranslationCache: the UI-level cache. Unbounded, cleared wholesale every
  time the user switches language, so it can never serve a value
  translated for the previous target.
- BoundedTranslationCache: owned by the remote client. Survives language
  switches and is capped by dropping the oldest half of its entries.
"""

from __future__ import annotations

import logging
from typing import Iterator, NamedTuple

logger = logging.getLogger(__name__)


class TranslationKey(NamedTuple):
    """
    Identity of a unit of translatable content.
    
    Two keys are equal iff source, target and text are all equal. Text is
    matched exactly; no trimming or case folding.
    """
    
    source: str
    target: str
    text: str
    
    def __str__(self) -> str:
        return f"{self.source}-{self.target}-{self.text}"


# =============================================================================
# UI Translation Cache
# =============================================================================


class TranslationCache:
    """
    Session-lifetime translation cache read by the dispatchers.
    
    No eviction; the language state store clears it on every switch.
    """
    
    def __init__(self):
        self._cache: dict[TranslationKey, str] = {}
    
    def get(self, key: TranslationKey) -> str | None:
        """Get cached translation."""
        return self._cache.get(key)
    
    def set(self, key: TranslationKey, value: str) -> None:
        """Cache a translation."""
        self._cache[key] = value
    
    def clear(self) -> None:
        """Drop every entry."""
        self._cache.clear()
    
    def __len__(self) -> int:
        return len(self._cache)
    
    def __contains__(self, key: object) -> bool:
        return key in self._cache
    
    def __iter__(self) -> Iterator[TranslationKey]:
        return iter(self._cache)


# =============================================================================
# Bounded Remote Cache
# =============================================================================


class BoundedTranslationCache(TranslationCache):
    """
    Insertion-ordered cache with coarse batch eviction.
    
    When an insert pushes the size past ``max_size``, the oldest entries are
    dropped until at most ``max_size // 2`` remain. Overwriting an existing
    key keeps its original position.
    """
    
    def __init__(self, max_size: int = 1000):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        super().__init__()
        self.max_size = max_size
        self.evictions = 0
    
    def set(self, key: TranslationKey, value: str) -> None:
        super().set(key, value)
        if len(self._cache) > self.max_size:
            self._evict()
    
    def _evict(self) -> None:
        keep = self.max_size // 2
        drop = len(self._cache) - keep
        for key in list(self._cache)[:drop]:
            del self._cache[key]
        self.evictions += 1
        logger.debug(f"Evicted {drop} translations (kept {keep}, max {self.max_size})")
    
    def stats(self) -> dict[str, int]:
        return {"size": len(self._cache), "max_size": self.max_size}
