"""
RegionHandle: the lifecycle of one region owned by a UI scope.

A screen or panel creates a handle, mounts it when it appears and
unmounts it when it goes away. Persistent regions outlive the unmount.
"""

import logging
import secrets
import string
from typing import List, Optional

from keynav.config.constants import GENERATED_ID_LENGTH
from keynav.models.navigation import Hook, Region, RegionConfig, Zone
from keynav.services.navigation_store import NavigationStore

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(prefix: str) -> str:
    """Random id such as region-k3v9x0aqz."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(GENERATED_ID_LENGTH))
    return f"{prefix}-{suffix}"


class RegionHandle:
    """Registers, activates and cycles a single region."""

    def __init__(
        self,
        store: NavigationStore,
        priority: int = 0,
        persistent: bool = False,
        default_zone: Optional[str] = None,
        on_enter: Optional[Hook] = None,
        on_leave: Optional[Hook] = None,
        region_id: Optional[str] = None,
    ):
        self.store = store
        self.region_id = region_id or generate_id("region")
        self.config = RegionConfig(
            id=self.region_id,
            priority=priority or 0,
            persistent=persistent,
            default_zone=default_zone,
            on_enter=on_enter,
            on_leave=on_leave,
        )
        self.initialized = False

    @property
    def is_active(self) -> bool:
        region = self.store.active_region
        return region is not None and region.id == self.region_id

    @property
    def active_zone(self) -> Optional[Zone]:
        if not self.is_active:
            return None
        return self.store.active_zone

    @property
    def zones(self) -> List[Zone]:
        region = self.store.regions.get(self.region_id)
        return list(region.zones.values()) if region else []

    def mount(self) -> None:
        """Register the region; activate it if it is alone or persistent."""
        if self.initialized:
            return

        self.store.register_region(self.config)
        self.initialized = True
        logger.debug(f"Mounted region {self.region_id}")

        if (len(self.store.regions) == 1 or self.config.persistent) and not self.is_active:
            self.activate()

    def activate(self) -> None:
        """Make this region active and focus its default zone if present."""
        if not self.initialized:
            self.mount()

        self.store.set_active_region(self.region_id)

        default_zone = self.config.default_zone
        if default_zone:
            region = self.store.regions.get(self.region_id)
            if region is not None and default_zone in region.zones:
                self.store.set_active_zone(default_zone)

    def deactivate(self) -> None:
        if self.is_active:
            self.store.set_active_region(None)

    def next_region(self, direction: str = "next") -> Optional[str]:
        """
        Id of the neighbouring region in priority order, wrapping around.

        Persistent regions other than this one are skipped.

        Args:
            direction: "next" or "prev"
        """
        regions: List[Region] = [
            region
            for region in self.store.registry.regions_by_priority()
            if not region.persistent or region.id == self.region_id
        ]
        ids = [region.id for region in regions]
        if self.region_id not in ids:
            return None

        current = ids.index(self.region_id)
        step = 1 if direction == "next" else -1
        return ids[(current + step) % len(ids)]

    def zones_changed(self) -> None:
        """Focus the default zone once it shows up, if nothing is focused."""
        default_zone = self.config.default_zone
        if not (self.is_active and default_zone) or self.store.active_zone is not None:
            return
        if any(zone.id == default_zone for zone in self.zones):
            self.store.set_active_zone(default_zone)

    def unmount(self) -> None:
        if self.initialized and not self.config.persistent:
            self.store.unregister_region(self.region_id)
            self.initialized = False
            logger.debug(f"Unmounted region {self.region_id}")
