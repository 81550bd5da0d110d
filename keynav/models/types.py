"""Enumerations shared across keynav."""

from enum import Enum


class Direction(Enum):
    """Unit of directional input."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.UP, Direction.DOWN)


class ZoneType(Enum):
    """Shape of a zone's items."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    GRID = "grid"


class ActivationSource(Enum):
    """What moved focus into a zone item last."""

    KEYBOARD = "keyboard"
    POINTER = "pointer"


class SoundType(Enum):
    """Audio feedback events."""

    MOVE = "move"
    SELECT = "select"
    ERROR = "error"
