"""
Layout descriptions: regions and zones declared in YAML.

Layout files let the CLI and the demo app build a registry without a
hosting UI. Example:

    regions:
      - id: main
        priority: 0
        default_zone: hero
        zones:
          - id: hero
            type: horizontal
            items: [Play, Settings, Quit]
            bounds: {top: 0, right: 100, bottom: 50, left: 0}
          - id: library
            type: grid
            columns: 3
            memory: true
            items: 7
            bounds: {top: 60, right: 100, bottom: 110, left: 0}
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from keynav.exceptions import LayoutError
from keynav.models.geometry import Bounds
from keynav.models.navigation import RegionConfig, ZoneConfig
from keynav.models.types import ZoneType

from .navigation_store import NavigationStore

logger = logging.getLogger(__name__)


def load_layout(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a layout file.

    Raises:
        LayoutError: If the file is missing or is not a YAML mapping
    """
    path = Path(path)
    if not path.exists():
        raise LayoutError("Layout file not found", path=str(path))

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise LayoutError(f"Failed to parse layout: {e}", path=str(path)) from e

    if not isinstance(data, dict) or not isinstance(data.get("regions"), list):
        raise LayoutError("Layout must be a mapping with a 'regions' list", path=str(path))
    return data


def _parse_items(zone_data: Dict[str, Any], zone_id: str) -> List[Any]:
    items = zone_data.get("items", [])
    if isinstance(items, int):
        if items < 0:
            raise LayoutError("Item count must be non-negative", zone=zone_id)
        return [f"{zone_id}-{i}" for i in range(items)]
    if isinstance(items, list):
        return items
    raise LayoutError("Zone items must be a list or a count", zone=zone_id)


def _parse_zone(zone_data: Dict[str, Any], region_id: str) -> ZoneConfig:
    try:
        zone_id = str(zone_data["id"])
    except (KeyError, TypeError) as e:
        raise LayoutError("Every zone needs an id", region=region_id) from e

    try:
        zone_type = ZoneType(zone_data.get("type", ZoneType.VERTICAL.value))
    except ValueError as e:
        raise LayoutError(f"Unknown zone type {zone_data.get('type')!r}", zone=zone_id) from e

    bounds = None
    if zone_data.get("bounds") is not None:
        try:
            bounds = Bounds.from_dict(zone_data["bounds"])
        except (KeyError, TypeError, ValueError) as e:
            raise LayoutError("Bounds need numeric top/right/bottom/left", zone=zone_id) from e

    return ZoneConfig(
        id=zone_id,
        type=zone_type,
        region_id=region_id,
        columns=zone_data.get("columns"),
        memory=bool(zone_data.get("memory", False)),
        group=zone_data.get("group"),
        items=_parse_items(zone_data, zone_id),
        bounds=bounds,
    )


def parse_layout(data: Dict[str, Any]) -> List[tuple]:
    """
    Turn layout data into (RegionConfig, [ZoneConfig, ...]) pairs.

    Raises:
        LayoutError: If a region or zone is malformed
    """
    parsed = []
    for region_data in data.get("regions") or []:
        if not isinstance(region_data, dict) or "id" not in region_data:
            raise LayoutError("Every region needs an id")
        region_id = str(region_data["id"])
        try:
            priority = int(region_data.get("priority", 0))
        except (TypeError, ValueError) as e:
            raise LayoutError("Region priority must be an integer", region=region_id) from e

        region = RegionConfig(
            id=region_id,
            priority=priority,
            persistent=bool(region_data.get("persistent", False)),
            default_zone=region_data.get("default_zone"),
        )
        zones = [_parse_zone(zone_data, region_id) for zone_data in region_data.get("zones") or []]
        parsed.append((region, zones))
    return parsed


def apply_layout(store: NavigationStore, data: Dict[str, Any]) -> NavigationStore:
    """Register every region and zone of a layout with the store."""
    for region, zones in parse_layout(data):
        store.register_region(region)
        for zone in zones:
            store.register_zone(zone)
    logger.debug(f"Applied layout with {len(store.regions)} regions and {len(store.zones)} zones")
    return store
