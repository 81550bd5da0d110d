"""
Navigation data model.

Regions own zones; zones own an ordered list of focusable items and the
geometry last measured for them. Callbacks are optional hooks supplied by
the hosting UI and are invoked by the store, never by these records.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .geometry import Bounds
from .types import ActivationSource, ZoneType

Hook = Callable[[], None]
IndexHook = Callable[[int], None]


@dataclass
class RegionConfig:
    """Registration parameters for a region.

    Attributes:
        id: Unique region id
        priority: Lower values win when a region must be picked automatically
        persistent: Region survives its UI scope unmounting
        default_zone: Zone focused when the region becomes active (may not exist yet)
        on_enter: Called before the region becomes active
        on_leave: Called before the region stops being active
    """

    id: str
    priority: int = 0
    persistent: bool = False
    default_zone: Optional[str] = None
    on_enter: Optional[Hook] = None
    on_leave: Optional[Hook] = None


@dataclass
class ZoneConfig:
    """Registration parameters for a zone.

    Attributes:
        id: Unique zone id
        type: horizontal, vertical or grid
        region_id: Owning region, must already be registered
        columns: Column count, grid zones only
        memory: Opt in to focus-memory save/restore
        group: Free-form label for grouping zones
        items: Initial focusable items (only their count and order matter)
        bounds: Initial measured geometry
    """

    id: str
    type: ZoneType
    region_id: str
    columns: Optional[int] = None
    memory: bool = False
    group: Optional[str] = None
    items: Sequence[Any] = ()
    bounds: Optional[Bounds] = None
    on_select: Optional[IndexHook] = None
    on_focus: Optional[IndexHook] = None
    on_blur: Optional[IndexHook] = None

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = ZoneType(self.type)


@dataclass
class Zone:
    """A registered, navigable collection of items."""

    id: str
    type: ZoneType
    region_id: str
    items: List[Any] = field(default_factory=list)
    bounds: Optional[Bounds] = None
    columns: Optional[int] = None
    memory: bool = False
    group: Optional[str] = None
    on_select: Optional[IndexHook] = None
    on_focus: Optional[IndexHook] = None
    on_blur: Optional[IndexHook] = None
    last_activation_source: ActivationSource = ActivationSource.KEYBOARD

    @classmethod
    def from_config(cls, config: ZoneConfig) -> "Zone":
        return cls(
            id=config.id,
            type=config.type,
            region_id=config.region_id,
            items=list(config.items),
            bounds=config.bounds,
            columns=config.columns,
            memory=bool(config.memory),
            group=config.group,
            on_select=config.on_select,
            on_focus=config.on_focus,
            on_blur=config.on_blur,
        )

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def column_count(self) -> int:
        """Columns used for grid math; a missing or zero value means one column."""
        return self.columns or 1


@dataclass
class Region:
    """A registered, independently focus-managed surface."""

    id: str
    priority: int = 0
    persistent: bool = False
    default_zone: Optional[str] = None
    zones: Dict[str, Zone] = field(default_factory=dict)
    on_enter: Optional[Hook] = None
    on_leave: Optional[Hook] = None

    @classmethod
    def from_config(cls, config: RegionConfig) -> "Region":
        return cls(
            id=config.id,
            priority=config.priority,
            persistent=config.persistent,
            default_zone=config.default_zone,
            on_enter=config.on_enter,
            on_leave=config.on_leave,
        )

    @property
    def zone_ids(self) -> List[str]:
        return list(self.zones)


@dataclass
class NavigationError:
    """A dead-end navigation attempt; expires shortly after being recorded."""

    zone: str
    index: int
    timestamp: float


@dataclass
class NavigationState:
    """What is focused right now."""

    active_region: Optional[str] = None
    active_zone: Optional[str] = None
    active_index: int = 0
    last_error: Optional[NavigationError] = None

    def clear_focus(self) -> None:
        self.active_region = None
        self.active_zone = None
        self.active_index = 0


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot appended on every successful active region/zone change."""

    region: str
    zone: str
    index: int
    timestamp: float


@dataclass(frozen=True)
class NavigationMemoryState:
    """Remembered focus location for one path."""

    region_id: str
    zone_id: str
    index: int
    path: str


@dataclass
class PendingRestore:
    """Retry bookkeeping while waiting for a remembered zone to mount."""

    path: str
    attempts: int = 0
    max_attempts: int = 10
    handle: Optional[Any] = None
