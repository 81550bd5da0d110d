"""
Directional movement.

Movement is two-phase: first try to move inside the focused zone, and only
when that hits a boundary search the zone's region for the nearest zone
on screen in that direction.
"""

from typing import Iterable, Optional

from keynav.models.geometry import calculate_overlap, get_distance, is_on_side
from keynav.models.navigation import Zone
from keynav.models.types import Direction, ZoneType


def compute_intra_zone_index(
    zone_type: ZoneType,
    index: int,
    item_count: int,
    direction: Direction,
    columns: int = 1,
) -> Optional[int]:
    """
    Compute the index reached by moving inside a zone.

    Args:
        zone_type: Shape of the zone
        index: Current index
        item_count: Number of items in the zone
        direction: Requested direction
        columns: Column count for grid zones

    Returns:
        The new index, or None if the move would leave the zone or the
        direction does not apply to this zone type
    """
    if zone_type is ZoneType.HORIZONTAL:
        if direction is Direction.LEFT and index > 0:
            return index - 1
        if direction is Direction.RIGHT and index < item_count - 1:
            return index + 1
        return None

    if zone_type is ZoneType.VERTICAL:
        if direction is Direction.UP and index > 0:
            return index - 1
        if direction is Direction.DOWN and index < item_count - 1:
            return index + 1
        return None

    columns = columns or 1
    if direction is Direction.LEFT:
        return index - 1 if index % columns > 0 else None
    if direction is Direction.RIGHT:
        if index % columns < columns - 1 and index + 1 < item_count:
            return index + 1
        return None
    if direction is Direction.UP:
        return index - columns if index - columns >= 0 else None
    return index + columns if index + columns < item_count else None


def find_adjacent_zone(
    current: Zone, candidates: Iterable[Zone], direction: Direction
) -> Optional[Zone]:
    """
    Find the nearest zone on screen in a direction.

    A candidate qualifies when it belongs to the same region, has been
    measured, lies entirely past the current zone's edge and overlaps it on
    the perpendicular axis. The closest one wins; equal distances keep the
    first candidate in iteration (registration) order.

    Args:
        current: The focused zone
        candidates: Zones to consider, in registration order
        direction: Direction of movement

    Returns:
        The chosen zone, or None
    """
    if current.bounds is None:
        return None

    best: Optional[Zone] = None
    best_distance = 0.0
    for zone in candidates:
        if zone.id == current.id or zone.bounds is None:
            continue
        if zone.region_id != current.region_id:
            continue
        if not is_on_side(current.bounds, zone.bounds, direction):
            continue
        if calculate_overlap(current.bounds, zone.bounds, direction) <= 0:
            continue

        distance = get_distance(current.bounds, zone.bounds, direction)
        if best is None or distance < best_distance:
            best = zone
            best_distance = distance

    return best
