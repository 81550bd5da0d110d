"""
ZoneHandle: the lifecycle of one zone owned by a UI scope.

The handle registers its zone into whichever region is active when it
mounts, pushes measured geometry into the store, scrolls the focused item
into view and turns pointer hover into focus changes.

Pointer hover and keyboard movement fight over the same focus, so after
any keyboard-driven move in the zone hover is ignored for a short
cooldown, and focus set by hover never scrolls the zone.
"""

import logging
import time
from typing import Any, Callable, List, Optional, Sequence

from keynav.models.geometry import Bounds
from keynav.models.navigation import IndexHook, Zone, ZoneConfig
from keynav.models.types import ActivationSource, ZoneType
from keynav.services.navigation_store import NavigationStore

from .region import generate_id

logger = logging.getLogger(__name__)

PathSource = Callable[[], Optional[str]]
Scroller = Callable[[str, int], None]


class ZoneHandle:
    """Registers and feeds a single zone.

    Args:
        store: The navigation store
        zone_type: Shape of the zone
        zone_id: Explicit id; a zone-xxxxxxxxx id is generated otherwise
        path_source: Returns the current path, used to restore focus memory
        scroller: Called with ("x" | "y", index) to bring an item into view
        clock: Monotonic clock used for the hover cooldown
    """

    def __init__(
        self,
        store: NavigationStore,
        zone_type: ZoneType,
        zone_id: Optional[str] = None,
        columns: Optional[int] = None,
        memory: bool = False,
        group: Optional[str] = None,
        hoverable: bool = False,
        on_select: Optional[IndexHook] = None,
        on_focus: Optional[IndexHook] = None,
        on_blur: Optional[IndexHook] = None,
        path_source: Optional[PathSource] = None,
        scroller: Optional[Scroller] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.zone_id = zone_id or generate_id("zone")
        self.zone_type = ZoneType(zone_type)
        self.columns = columns
        self.memory = memory
        self.group = group
        self.hoverable = hoverable
        self.on_select = on_select
        self.on_focus = on_focus
        self.on_blur = on_blur
        self.path_source = path_source
        self.scroller = scroller
        self.clock = clock

        self.items: List[Any] = []
        self.bounds: Optional[Bounds] = None
        self.initialized = False
        self._cooldown_until = 0.0
        self._last_seen_index = -1
        self._unsubscribe: Optional[Callable[[], None]] = None

    # State

    @property
    def zone(self) -> Optional[Zone]:
        return self.store.zones.get(self.zone_id)

    @property
    def is_active(self) -> bool:
        zone = self.store.active_zone
        return zone is not None and zone.id == self.zone_id

    @property
    def active_index(self) -> int:
        return self.store.active_index if self.is_active else -1

    @property
    def last_activation_source(self) -> ActivationSource:
        zone = self.zone
        return zone.last_activation_source if zone else ActivationSource.KEYBOARD

    @property
    def in_keyboard_cooldown(self) -> bool:
        return self.clock() < self._cooldown_until

    # Lifecycle

    def mount(
        self, bounds: Optional[Bounds] = None, items: Optional[Sequence[Any]] = None
    ) -> bool:
        """
        Register the zone into the active region.

        Returns:
            False if there is no active region yet; call mount() again later
        """
        if self.initialized:
            return True

        region = self.store.active_region
        if region is None:
            logger.warning(f"[Navigation] Waiting for active region for zone {self.zone_id}")
            return False

        self.store.register_zone(
            ZoneConfig(
                id=self.zone_id,
                type=self.zone_type,
                region_id=region.id,
                columns=self.columns,
                memory=self.memory,
                group=self.group,
                on_select=self.on_select,
                on_focus=self.on_focus,
                on_blur=self.on_blur,
            )
        )
        self.initialized = True
        self._unsubscribe = self.store.subscribe(self._on_store_change)
        self.update_bounds(bounds, items)
        return True

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.initialized:
            self.store.unregister_zone(self.zone_id)
            self.initialized = False

    # Geometry

    def update_bounds(
        self, bounds: Optional[Bounds] = None, items: Optional[Sequence[Any]] = None
    ) -> None:
        """Record new geometry locally and in the store."""
        if bounds is not None:
            self.bounds = bounds
        if items is not None:
            self.items = list(items)
        if self.initialized:
            self.store.update_zone(self.zone_id, bounds=self.bounds, items=self.items)

    def update_zone_state(
        self, bounds: Optional[Bounds] = None, items: Optional[Sequence[Any]] = None
    ) -> None:
        """Refresh geometry and, for memory zones, restore focus for the current path."""
        if self.store.debug:
            self.store.trace(
                f"Updating zone state {self.zone_id} (memory={self.memory}, "
                f"items={len(items) if items is not None else len(self.items)})"
            )

        self.update_bounds(bounds, items)

        if self.memory and self.path_source is not None:
            path = self.path_source()
            if path:
                self.store.restore_state(path)

    # Focus

    def set_active_element(
        self, index: int, source: ActivationSource = ActivationSource.KEYBOARD
    ) -> bool:
        if not self.initialized:
            return False
        return self.store.set_active_element(self.zone_id, index, source=source)

    def hover(self, index: int) -> bool:
        """
        Focus an item under the pointer.

        Ignored unless the zone is hoverable, and during the keyboard
        cooldown.
        """
        if not self.hoverable or not self.initialized or self.in_keyboard_cooldown:
            return False
        if index < 0 or index >= len(self.items):
            return False
        return self.set_active_element(index, source=ActivationSource.POINTER)

    def scroll_into_view(self, index: int) -> bool:
        """Ask the scroller to reveal an item, unless focus came from the pointer."""
        if self.scroller is None or index < 0 or index >= len(self.items):
            return False
        if self.last_activation_source is ActivationSource.POINTER:
            return False

        axis = "x" if self.zone_type is ZoneType.HORIZONTAL else "y"
        self.scroller(axis, index)
        return True

    def _on_store_change(self, store: NavigationStore) -> None:
        index = self.active_index
        if index == self._last_seen_index:
            return
        self._last_seen_index = index
        if index < 0:
            return

        self.scroll_into_view(index)
        if self.last_activation_source is ActivationSource.KEYBOARD:
            self._cooldown_until = self.clock() + store.settings.hover_cooldown
