"""
Core module - shared infrastructure.

This module contains:
- events: Event bus used to notify bindings of cache and language changes
- utils: Shared utility functions
"""

from medihub.core.events import (
    Event,
    EventBus,
    Subscription,
)

from medihub.core.utils import (
    generate_id,
    utc_now,
)

__all__ = [
    # Events
    "Event",
    "EventBus",
    "Subscription",
    # Utils
    "generate_id",
    "utc_now",
]
