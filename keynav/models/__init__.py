"""Data models for keynav."""

from .geometry import Bounds, calculate_overlap, get_distance, is_on_side
from .navigation import (
    HistoryEntry,
    NavigationError,
    NavigationMemoryState,
    NavigationState,
    PendingRestore,
    Region,
    RegionConfig,
    Zone,
    ZoneConfig,
)
from .types import ActivationSource, Direction, SoundType, ZoneType

__all__ = [
    "ActivationSource",
    "Bounds",
    "Direction",
    "HistoryEntry",
    "NavigationError",
    "NavigationMemoryState",
    "NavigationState",
    "PendingRestore",
    "Region",
    "RegionConfig",
    "SoundType",
    "Zone",
    "ZoneConfig",
    "ZoneType",
    "calculate_overlap",
    "get_distance",
    "is_on_side",
]
