"""
Storage abstraction layer.

Language preferences go through this interface so the state store does not
care whether they live in memory, a JSON file on disk, or a browser-side
key-value store bridged in by the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# =============================================================================
# Storage Interfaces
# =============================================================================


class PreferenceStorage(ABC):
    """
    Small string key-value store for user preferences.
    
    Values are always strings, mirroring browser local storage. Reads
    happen once at startup; writes happen on every change.
    
    Local Implementation: in-memory dict or JSON file
    """
    
    @abstractmethod
    def get(self, key: str) -> str | None:
        """Get a stored value, or None if absent."""
        pass
    
    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value."""
        pass
    
    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key. Returns True if it existed."""
        pass


# =============================================================================
# Preference Keys
# =============================================================================


class PreferenceKeys:
    """Standard preference key names."""
    
    LANGUAGE = "medihub-language"
    AUTO_DETECT = "medihub-auto-detect"
