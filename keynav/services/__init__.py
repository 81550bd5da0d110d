"""Navigation services: registry, movement, focus memory and the store."""

from .focus_memory import FocusMemory
from .navigation_algorithm import compute_intra_zone_index, find_adjacent_zone
from .navigation_registry import NavigationRegistry
from .navigation_store import NavigationStore
from .router import PathRouter, create_keyboard_navigation
from .scheduler import AsyncioScheduler, ManualScheduler, Scheduler
from .sound import SoundPlayer

__all__ = [
    "AsyncioScheduler",
    "FocusMemory",
    "ManualScheduler",
    "NavigationRegistry",
    "NavigationStore",
    "PathRouter",
    "Scheduler",
    "SoundPlayer",
    "compute_intra_zone_index",
    "create_keyboard_navigation",
    "find_adjacent_zone",
]
