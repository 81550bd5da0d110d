"""
Rectangle math for cross-zone navigation.

All rectangles share one coordinate space with y growing downwards, so
"up" means smaller top/bottom values.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .types import Direction


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned bounding box of a zone."""

    top: float
    right: float
    bottom: float
    left: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bounds":
        """Build bounds from a {top, right, bottom, left} mapping."""
        return cls(
            top=float(data["top"]),
            right=float(data["right"]),
            bottom=float(data["bottom"]),
            left=float(data["left"]),
        )

    @classmethod
    def from_region(cls, x: float, y: float, width: float, height: float) -> "Bounds":
        """Build bounds from an origin and a size (Textual's Region shape)."""
        return cls(top=y, right=x + width, bottom=y + height, left=x)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def to_dict(self) -> Dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


def calculate_overlap(current: Bounds, target: Bounds, direction: Direction) -> float:
    """
    Overlap of two boxes on the axis perpendicular to the movement.

    Moving up/down compares horizontal extents, moving left/right compares
    vertical extents. A value <= 0 means the boxes do not line up.
    """
    if direction.is_vertical:
        return min(current.right, target.right) - max(current.left, target.left)
    return min(current.bottom, target.bottom) - max(current.top, target.top)


def get_distance(current: Bounds, target: Bounds, direction: Direction) -> float:
    """Gap between the facing edges of two boxes along the movement axis."""
    if direction is Direction.UP:
        return current.top - target.bottom
    if direction is Direction.DOWN:
        return target.top - current.bottom
    if direction is Direction.LEFT:
        return current.left - target.right
    return target.left - current.right


def is_on_side(current: Bounds, target: Bounds, direction: Direction) -> bool:
    """Whether target lies entirely past current's edge in the given direction."""
    if direction is Direction.UP:
        return target.bottom <= current.top
    if direction is Direction.DOWN:
        return target.top >= current.bottom
    if direction is Direction.LEFT:
        return target.right <= current.left
    return target.left >= current.right
