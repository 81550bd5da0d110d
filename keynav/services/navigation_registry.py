"""
Registry of navigable regions and zones.

The registry only owns the two lookup maps and keeps them consistent with
each other: every zone's region_id names a registered region, and every
region's zone map holds exactly the zones pointing back at it. Focus
changes caused by registration are the store's job.
"""

import logging
from types import MappingProxyType
from typing import Callable, Dict, Iterator, List, Mapping, Optional

from keynav.exceptions import DuplicateRegistrationError, UnknownRegionError
from keynav.models.navigation import Region, Zone

logger = logging.getLogger(__name__)

ZoneListener = Callable[[Zone], None]


class NavigationRegistry:
    """
    Lookup maps for regions and zones.

    Insertion order is registration order. It is preserved by both maps
    and used to break ties during adjacency search.

    Usage:
        registry = NavigationRegistry()
        registry.add_region(Region(id="sidebar", priority=1))
        registry.add_zone(Zone(id="menu", type=ZoneType.VERTICAL, region_id="sidebar"))
    """

    def __init__(self) -> None:
        self._regions: Dict[str, Region] = {}
        self._zones: Dict[str, Zone] = {}
        self._zone_listeners: List[ZoneListener] = []

    # Read access

    @property
    def regions(self) -> Mapping[str, Region]:
        return MappingProxyType(self._regions)

    @property
    def zones(self) -> Mapping[str, Zone]:
        return MappingProxyType(self._zones)

    def get_region(self, region_id: Optional[str]) -> Optional[Region]:
        if region_id is None:
            return None
        return self._regions.get(region_id)

    def get_zone(self, zone_id: Optional[str]) -> Optional[Zone]:
        if zone_id is None:
            return None
        return self._zones.get(zone_id)

    def has_region(self, region_id: str) -> bool:
        return region_id in self._regions

    def has_zone(self, zone_id: str) -> bool:
        return zone_id in self._zones

    def zones_in_region(self, region_id: str) -> Iterator[Zone]:
        """Zones of one region, in registration order."""
        return (zone for zone in self._zones.values() if zone.region_id == region_id)

    def regions_by_priority(self) -> List[Region]:
        """Regions sorted by priority (lowest first), ties in registration order."""
        return sorted(self._regions.values(), key=lambda region: region.priority)

    def __len__(self) -> int:
        return len(self._regions)

    # Mutation

    def add_region(self, region: Region) -> None:
        """
        Insert a region.

        Raises:
            DuplicateRegistrationError: If the id is already registered
        """
        if region.id in self._regions:
            raise DuplicateRegistrationError(
                "Region already registered", kind="region", item_id=region.id
            )
        self._regions[region.id] = region
        logger.debug(f"Added region {region.id} (priority={region.priority})")

    def remove_region(self, region_id: str) -> Optional[Region]:
        """
        Remove a region and every zone it owns.

        Returns:
            The removed region, or None if it was not registered
        """
        region = self._regions.get(region_id)
        if region is None:
            return None

        for zone_id in region.zone_ids:
            self.remove_zone(zone_id)

        del self._regions[region_id]
        logger.debug(f"Removed region {region_id}")
        return region

    def add_zone(self, zone: Zone) -> None:
        """
        Insert a zone into the global map and its region.

        Raises:
            UnknownRegionError: If the zone's region is not registered
            DuplicateRegistrationError: If the id is already registered
        """
        region = self._regions.get(zone.region_id)
        if region is None:
            raise UnknownRegionError(
                f"Region {zone.region_id} not found", region_id=zone.region_id, zone_id=zone.id
            )
        if zone.id in self._zones:
            raise DuplicateRegistrationError("Zone already registered", kind="zone", item_id=zone.id)

        self._zones[zone.id] = zone
        region.zones[zone.id] = zone
        logger.debug(f"Added zone {zone.id} to region {zone.region_id}")

        for listener in list(self._zone_listeners):
            listener(zone)

    def remove_zone(self, zone_id: str) -> Optional[Zone]:
        """
        Remove a zone from the global map and its region.

        Returns:
            The removed zone, or None if it was not registered
        """
        zone = self._zones.pop(zone_id, None)
        if zone is None:
            return None

        region = self._regions.get(zone.region_id)
        if region is not None:
            region.zones.pop(zone_id, None)
        return zone

    def on_zone_added(self, listener: ZoneListener) -> Callable[[], None]:
        """Call listener with every zone registered from now on.

        Returns:
            Function that removes the listener
        """
        self._zone_listeners.append(listener)

        def remove() -> None:
            if listener in self._zone_listeners:
                self._zone_listeners.remove(listener)

        return remove

    def check_consistency(self) -> List[str]:
        """
        Cross-check the region and zone maps.

        Returns:
            List of problems found (empty if consistent)
        """
        problems = []
        for zone in self._zones.values():
            region = self._regions.get(zone.region_id)
            if region is None:
                problems.append(f"Zone {zone.id} points at missing region {zone.region_id}")
            elif region.zones.get(zone.id) is not zone:
                problems.append(f"Region {region.id} does not list zone {zone.id}")
        for region in self._regions.values():
            for zone_id, zone in region.zones.items():
                if self._zones.get(zone_id) is not zone:
                    problems.append(f"Region {region.id} lists unregistered zone {zone_id}")
                elif zone.region_id != region.id:
                    problems.append(f"Zone {zone_id} listed by {region.id} belongs to {zone.region_id}")
        return problems
