"""
Local preference storage implementations.

In-memory for tests and single-process use, JSON file for anything that
should survive a restart.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from medihub.storage.base import PreferenceStorage

logger = logging.getLogger(__name__)


# =============================================================================
# In-Memory Preference Storage
# =============================================================================


class InMemoryPreferenceStorage(PreferenceStorage):
    """In-memory preferences for development and tests."""
    
    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
    
    def get(self, key: str) -> str | None:
        return self._data.get(key)
    
    def set(self, key: str, value: str) -> None:
        self._data[key] = value
    
    def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            return True
        return False


# =============================================================================
# JSON File Preference Storage
# =============================================================================


class JsonFilePreferenceStorage(PreferenceStorage):
    """
    Preferences persisted as a flat JSON object on disk.
    
    The file is read once on construction and rewritten on every change.
    An unreadable file is treated as empty rather than fatal.
    """
    
    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, str] = self._load()
    
    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed preferences file {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}
    
    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data, indent=2, sort_keys=True), encoding="utf-8")
    
    def get(self, key: str) -> str | None:
        return self._data.get(key)
    
    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()
    
    def delete(self, key: str) -> bool:
        if key in self._data:
            del self._data[key]
            self._flush()
            return True
        return False


# =============================================================================
# Factory
# =============================================================================


def create_preference_storage(path: str | Path | None = None) -> PreferenceStorage:
    """Create file-backed storage when a path is given, in-memory otherwise."""
    if path:
        return JsonFilePreferenceStorage(path)
    return InMemoryPreferenceStorage()
