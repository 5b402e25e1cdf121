"""
Storage abstractions for persisted language preferences.
"""

from medihub.storage.base import (
    PreferenceStorage,
    PreferenceKeys,
)
from medihub.storage.local import (
    InMemoryPreferenceStorage,
    JsonFilePreferenceStorage,
    create_preference_storage,
)

__all__ = [
    "PreferenceStorage",
    "PreferenceKeys",
    "InMemoryPreferenceStorage",
    "JsonFilePreferenceStorage",
    "create_preference_storage",
]
