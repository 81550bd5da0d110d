"""
Navigation store: the single owner of what is focused.

The store wraps a NavigationRegistry, applies directional movement, calls
the hosting UI's enter/leave/focus/blur/select hooks on transitions, keeps
a bounded history and a short-lived error for dead ends, and delegates
per-path focus memory to FocusMemory.

Every mutation is synchronous. The only delayed work (error expiry and
restore retries) goes through the injected Scheduler.

Usage:
    store = NavigationStore(scheduler=AsyncioScheduler())
    store.register_region(RegionConfig(id="main", priority=0))
    store.register_zone(ZoneConfig(id="cards", type=ZoneType.GRID,
                                   region_id="main", columns=3))
    store.update_zone("cards", bounds=Bounds(0, 300, 200, 0), items=cards)
    store.navigate(Direction.RIGHT)
"""

import logging
import time
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from keynav.config.constants import DUPLICATE_POLICY_REPLACE
from keynav.config.settings import NavigationSettings
from keynav.exceptions import DuplicateRegistrationError, UnknownRegionError
from keynav.models.geometry import Bounds
from keynav.models.navigation import (
    HistoryEntry,
    NavigationError,
    NavigationMemoryState,
    NavigationState,
    Region,
    RegionConfig,
    Zone,
    ZoneConfig,
)
from keynav.models.types import ActivationSource, Direction, SoundType

from .focus_memory import FocusMemory
from .navigation_algorithm import compute_intra_zone_index, find_adjacent_zone
from .navigation_registry import NavigationRegistry
from .scheduler import Scheduler, default_scheduler
from .sound import SoundPlayer

logger = logging.getLogger(__name__)

Observer = Callable[["NavigationStore"], None]


class NavigationStore:
    """Registry, active state, history and focus memory for one UI.

    Args:
        settings: Behavior knobs; defaults to NavigationSettings()
        scheduler: Timer source; defaults to the running asyncio loop
            (ConfigurationError when built outside one)
        sound: Audio feedback; defaults to a silent SoundPlayer honoring
            settings.muted
        clock: Wall clock used for history and error timestamps
    """

    def __init__(
        self,
        settings: Optional[NavigationSettings] = None,
        scheduler: Optional[Scheduler] = None,
        sound: Optional[SoundPlayer] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings or NavigationSettings()
        self.scheduler: Scheduler = scheduler or default_scheduler()
        self.sound = sound or SoundPlayer(sounds=self.settings.sounds, muted=self.settings.muted)
        self.clock = clock
        self.debug = self.settings.debug

        self.registry = NavigationRegistry()
        self.state = NavigationState()
        self._history: Deque[HistoryEntry] = deque(maxlen=self.settings.history_limit)
        self._observers: List[Observer] = []
        self._last_timestamp = 0.0

        self.memory = FocusMemory(
            self,
            retry_delay=self.settings.restore_retry_delay,
            max_attempts=self.settings.restore_max_attempts,
        )

    # =========================================================================
    # Read accessors
    # =========================================================================

    @property
    def regions(self) -> Mapping[str, Region]:
        return self.registry.regions

    @property
    def zones(self) -> Mapping[str, Zone]:
        return self.registry.zones

    @property
    def active_region(self) -> Optional[Region]:
        return self.registry.get_region(self.state.active_region)

    @property
    def active_zone(self) -> Optional[Zone]:
        return self.registry.get_zone(self.state.active_zone)

    @property
    def active_index(self) -> int:
        return self.state.active_index

    @property
    def last_error(self) -> Optional[NavigationError]:
        return self.state.last_error

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._history)

    @property
    def is_debug_enabled(self) -> bool:
        return self.debug

    def toggle_debug(self) -> bool:
        """Flip verbose tracing and return the new value."""
        self.debug = not self.debug
        logger.info(f"Navigation debug {'enabled' if self.debug else 'disabled'}")
        return self.debug

    def trace(self, message: str) -> None:
        """Log a tracing message when debug is enabled."""
        if self.debug:
            logger.info(f"[Navigation] {message}")

    # =========================================================================
    # Observers
    # =========================================================================

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Call observer with the store after every state change.

        Returns:
            Function that unsubscribes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _notify(self) -> None:
        for observer in list(self._observers):
            try:
                observer(self)
            except Exception as e:
                logger.warning(f"Navigation observer {observer!r} failed: {e}")

    # =========================================================================
    # Registration
    # =========================================================================

    def register_region(self, config: RegionConfig) -> Region:
        """Register a region; the first region present becomes active.

        Raises:
            DuplicateRegistrationError: If the id is taken and the duplicate
                policy is "error"
        """
        self.trace(f"Registering region: {config.id}")

        if self.registry.has_region(config.id):
            self._handle_duplicate("region", config.id)
            self.unregister_region(config.id)

        region = Region.from_config(config)
        self.registry.add_region(region)

        if len(self.registry) == 1 and self.state.active_region is None:
            self.set_active_region(region.id)
        else:
            self._notify()
        return region

    def unregister_region(self, region_id: str) -> None:
        """Remove a region and its zones.

        If it was active, focus moves to the remaining region with the
        lowest priority value, if any.
        """
        region = self.registry.get_region(region_id)
        if region is None:
            return

        self.trace(f"Unregistering region: {region_id}")

        for zone_id in region.zone_ids:
            self.unregister_zone(zone_id)
        self.registry.remove_region(region_id)

        if self.state.active_region == region_id:
            self.state.clear_focus()
            remaining = self.registry.regions_by_priority()
            if remaining:
                self.set_active_region(remaining[0].id)
                return
        self._notify()

    def register_zone(self, config: ZoneConfig) -> Zone:
        """Register a zone inside an existing region.

        The first zone of the active region, or the active region's default
        zone while nothing is focused, becomes the active zone at index 0.

        Raises:
            UnknownRegionError: If config.region_id is not registered
            DuplicateRegistrationError: If the id is taken and the duplicate
                policy is "error"
        """
        self.trace(f"Registering zone: {config.id} in region: {config.region_id}")

        if not self.registry.has_region(config.region_id):
            raise UnknownRegionError(
                f"Region {config.region_id} not found", region_id=config.region_id, zone_id=config.id
            )
        if self.registry.has_zone(config.id):
            self._handle_duplicate("zone", config.id)
            self.unregister_zone(config.id)

        zone = Zone.from_config(config)
        region = self.registry.get_region(config.region_id)
        if region is not None and region.id == self.state.active_region:
            first_zone = not region.zones
            is_default = region.default_zone == zone.id and self.state.active_zone is None
            becomes_active = first_zone or is_default
        else:
            becomes_active = False

        self.registry.add_zone(zone)

        # A pending focus restore may already have claimed the zone.
        if becomes_active and self.state.active_zone is None:
            self._apply_zone(zone.id, 0)
            self._add_to_history()

        if self.debug:
            self.trace(f"State after registering {zone.id}: {self.describe_state()}")
        self._notify()
        return zone

    def unregister_zone(self, zone_id: str) -> None:
        """Remove a zone; if it was focused, the active zone is cleared."""
        zone = self.registry.remove_zone(zone_id)
        if zone is None:
            return

        self.trace(f"Unregistering zone: {zone_id}")

        if self.state.active_zone == zone_id:
            self.state.active_zone = None
            self.state.active_index = 0
        self._notify()

    def update_zone(
        self,
        zone_id: str,
        bounds: Optional[Bounds] = None,
        items: Optional[Sequence[Any]] = None,
    ) -> bool:
        """Ingest freshly measured geometry and items for a zone.

        Returns:
            False if the zone is not registered
        """
        zone = self.registry.get_zone(zone_id)
        if zone is None:
            return False

        if bounds is not None:
            zone.bounds = bounds
        if items is not None:
            zone.items = list(items)
            if (
                self.state.active_zone == zone_id
                and zone.item_count
                and self.state.active_index >= zone.item_count
            ):
                self.state.active_index = zone.item_count - 1
        self._notify()
        return True

    def _handle_duplicate(self, kind: str, item_id: str) -> None:
        if self.settings.on_duplicate != DUPLICATE_POLICY_REPLACE:
            raise DuplicateRegistrationError(
                f"{kind.capitalize()} {item_id} is already registered", kind=kind, item_id=item_id
            )
        logger.warning(f"Replacing already registered {kind} {item_id}")

    # =========================================================================
    # Active state
    # =========================================================================

    def set_active_region(self, region_id: Optional[str]) -> bool:
        """Make a region active (or clear it with None).

        on_leave/on_enter run before anything changes. A registered default
        zone of the new region is focused at index 0; otherwise a focused
        zone from another region is cleared.

        Returns:
            False if region_id is not registered
        """
        new_region = self.registry.get_region(region_id)
        if region_id is not None and new_region is None:
            logger.warning(f"[Navigation] Region {region_id} not found")
            return False

        self.trace(f"Setting active region: {region_id}")
        self._enter_region(new_region)

        target = None
        if new_region is not None and new_region.default_zone in new_region.zones:
            target = new_region.default_zone

        current_zone = self.active_zone
        if target is not None:
            self._apply_zone(target, 0)
        elif current_zone is not None and current_zone.region_id != region_id:
            self._apply_zone(None, 0)

        self._add_to_history()
        self._notify()
        return True

    def set_active_zone(self, zone_id: Optional[str], index: int = 0) -> bool:
        """Focus an item of a zone (or clear the zone with None).

        Switching to a zone of another region switches the active region
        too, without applying that region's default zone.

        Returns:
            False if zone_id is not registered
        """
        zone = self.registry.get_zone(zone_id)
        if zone_id is not None and zone is None:
            logger.warning(f"[Navigation] Zone {zone_id} not found")
            return False

        if self.debug:
            item_count = zone.item_count if zone else 0
            self.trace(f"Setting active zone: {zone_id} at index: {index} ({item_count} items)")

        if zone is not None and zone.region_id != self.state.active_region:
            self._enter_region(self.registry.get_region(zone.region_id))

        self._apply_zone(zone_id, index)
        self.sound.play(SoundType.MOVE)
        if self.debug:
            self.trace(f"State after focusing {zone_id}: {self.describe_state()}")

        self._add_to_history()
        self._notify()
        return True

    def set_active_element(
        self,
        zone_id: str,
        index: int,
        source: ActivationSource = ActivationSource.KEYBOARD,
    ) -> bool:
        """Focus a specific item, switching region first if needed.

        Returns:
            False (and changes nothing) for an unknown zone or an index
            outside the zone's items
        """
        zone = self.registry.get_zone(zone_id)
        if zone is None:
            logger.warning(f"[Navigation] Zone {zone_id} not found")
            return False

        if index < 0 or index >= zone.item_count:
            logger.warning(f"[Navigation] Invalid index {index} for zone {zone_id}")
            return False

        if self.state.active_region != zone.region_id:
            self.set_active_region(zone.region_id)

        zone.last_activation_source = source
        return self.set_active_zone(zone_id, index)

    def _enter_region(self, new_region: Optional[Region]) -> None:
        old_region = self.active_region
        if old_region is not None:
            self._call_hook(old_region.on_leave, f"region {old_region.id} on_leave")
        if new_region is not None:
            self._call_hook(new_region.on_enter, f"region {new_region.id} on_enter")
        self.state.active_region = new_region.id if new_region is not None else None

    def _apply_zone(self, zone_id: Optional[str], index: int) -> None:
        old_zone = self.active_zone
        new_zone = self.registry.get_zone(zone_id)
        if old_zone is not None:
            self._call_hook(old_zone.on_blur, f"zone {old_zone.id} on_blur", self.state.active_index)
        if new_zone is not None:
            self._call_hook(new_zone.on_focus, f"zone {new_zone.id} on_focus", index)
        self.state.active_zone = zone_id
        self.state.active_index = index

    def _call_hook(self, hook: Optional[Callable[..., Any]], name: str, *args: Any) -> None:
        if hook is None:
            return
        try:
            hook(*args)
        except Exception as e:
            logger.warning(f"[Navigation] {name} hook failed: {e}")

    def _timestamp(self) -> float:
        # Strictly increasing so error supersession can compare timestamps.
        now = self.clock()
        if now <= self._last_timestamp:
            now = self._last_timestamp + 1e-6
        self._last_timestamp = now
        return now

    def _add_to_history(self) -> None:
        if not self.state.active_region or not self.state.active_zone:
            return
        self._history.append(
            HistoryEntry(
                region=self.state.active_region,
                zone=self.state.active_zone,
                index=self.state.active_index,
                timestamp=self._timestamp(),
            )
        )

    # =========================================================================
    # Movement and selection
    # =========================================================================

    def navigate(self, direction: Union[Direction, str]) -> bool:
        """Move focus one step in a direction.

        Moves inside the focused zone when possible, otherwise jumps to the
        nearest zone on screen in that direction within the same region.
        A dead end records a NavigationError.

        Returns:
            True if focus moved
        """
        direction = Direction(direction)
        self.trace(f"Navigating {direction.value}")

        zone = self.active_zone
        if zone is None:
            self.trace("No active zone")
            return False

        index = self.state.active_index
        self.trace(f"Current zone: {zone.id}, index: {index}")

        new_index = compute_intra_zone_index(
            zone.type, index, zone.item_count, direction, columns=zone.column_count
        )
        if new_index is not None:
            zone.last_activation_source = ActivationSource.KEYBOARD
            return self.set_active_zone(zone.id, new_index)

        next_zone = find_adjacent_zone(
            zone, self.registry.zones_in_region(zone.region_id), direction
        )
        if next_zone is not None:
            next_zone.last_activation_source = ActivationSource.KEYBOARD
            return self.set_active_zone(next_zone.id, 0)

        self.set_error(NavigationError(zone=zone.id, index=index, timestamp=self._timestamp()))
        return False

    def handle_select(self) -> bool:
        """Invoke the focused zone's on_select with the active index.

        Returns:
            Whether the focused zone has an on_select hook
        """
        zone = self.active_zone
        if zone is None or zone.on_select is None:
            return False

        self.sound.play(SoundType.SELECT)
        self._call_hook(zone.on_select, f"zone {zone.id} on_select", self.state.active_index)
        return True

    def set_error(self, error: NavigationError) -> None:
        """Record a dead-end error that clears itself unless superseded.

        The expiry timer is scheduled first; if scheduling fails nothing is
        recorded.
        """

        def clear() -> None:
            current = self.state.last_error
            if current is not None and current.timestamp == error.timestamp:
                self.state.last_error = None
                self._notify()

        self.scheduler.call_later(self.settings.error_clear_delay, clear)

        self.state.last_error = error
        self.sound.play(SoundType.ERROR)
        if self.debug:
            logger.error(f"[Navigation] Error: {error}")
        self._notify()

    # =========================================================================
    # Focus memory
    # =========================================================================

    def save_state(self, path: str) -> bool:
        """Remember the focused location for path (memory zones only)."""
        return self.memory.save(path)

    def restore_state(self, path: str) -> bool:
        """Restore focus saved for path, waiting for its zone if needed."""
        return self.memory.restore(path)

    def cleanup(self) -> None:
        """Cancel any pending focus restore."""
        self.memory.cleanup()

    def apply_memory(self, memory: NavigationMemoryState) -> None:
        """Move focus to a remembered location whose zone is registered."""
        zone = self.registry.get_zone(memory.zone_id)
        if zone is None:
            return

        index = memory.index
        if zone.item_count and index >= zone.item_count:
            index = zone.item_count - 1

        if zone.region_id != self.state.active_region:
            self._enter_region(self.registry.get_region(zone.region_id))
        self._apply_zone(zone.id, index)
        self._add_to_history()
        self._notify()

    # =========================================================================
    # Diagnostics
    # =========================================================================

    def describe_state(self) -> Dict[str, Any]:
        """Structured dump of regions, zones, focus and memory."""
        regions = []
        for region_id, region in self.registry.regions.items():
            zones = []
            for zone_id, zone in region.zones.items():
                is_active = self.state.active_zone == zone_id
                zones.append(
                    {
                        "id": zone_id,
                        "type": zone.type.value,
                        "items": zone.item_count,
                        "is_active": is_active,
                        "active_index": self.state.active_index if is_active else None,
                        "memory": zone.memory,
                        "bounds": zone.bounds.to_dict() if zone.bounds else None,
                    }
                )
            regions.append(
                {
                    "id": region_id,
                    "is_active": self.state.active_region == region_id,
                    "priority": region.priority,
                    "persistent": region.persistent,
                    "zones": zones,
                }
            )

        memory = self.memory.memory
        error = self.state.last_error
        return {
            "regions": regions,
            "active_region": self.state.active_region,
            "active_zone": self.state.active_zone,
            "active_index": self.state.active_index,
            "last_error": {"zone": error.zone, "index": error.index} if error else None,
            "memory": (
                {
                    "path": memory.path,
                    "region": memory.region_id,
                    "zone": memory.zone_id,
                    "index": memory.index,
                }
                if memory
                else None
            ),
            "memory_status": self.memory.status,
            "history_size": len(self._history),
        }
