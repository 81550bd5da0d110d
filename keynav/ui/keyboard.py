"""
Key dispatch for navigation.

Translates key names (as Textual reports them) into store operations.
"""

import logging
from typing import Dict

from keynav.models.types import Direction
from keynav.services.navigation_store import NavigationStore

logger = logging.getLogger(__name__)

ARROW_KEYS: Dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

VIM_KEYS: Dict[str, Direction] = {
    "k": Direction.UP,
    "j": Direction.DOWN,
    "h": Direction.LEFT,
    "l": Direction.RIGHT,
}

SELECT_KEYS = ("enter", "space")


class KeyboardController:
    """Dispatches key presses to a NavigationStore.

    Arrows navigate, enter/space select, escape returns to the active
    region's default zone, and tab is swallowed so it cannot move focus
    behind the store's back.
    """

    def __init__(self, store: NavigationStore, vim_keys: bool = False):
        self.store = store
        self.directions = dict(ARROW_KEYS)
        if vim_keys:
            self.directions.update(VIM_KEYS)

    def handle_key(self, key: str) -> bool:
        """
        Handle one key press.

        Returns:
            True if the key belongs to navigation (whether or not focus moved)
        """
        if key in self.directions:
            self.navigate(self.directions[key])
            return True

        if key in SELECT_KEYS:
            self.store.handle_select()
            return True

        if key == "escape":
            self.focus_default_zone()
            return True

        if key == "tab":
            return True

        return False

    def navigate(self, direction: Direction) -> bool:
        zone = self.store.active_zone
        if zone is None:
            logger.debug("[Navigation] No active zone")
            return False

        logger.debug(f"[Navigation] Navigating {direction.value} in zone {zone.id}")
        return self.store.navigate(direction)

    def focus_default_zone(self) -> bool:
        region = self.store.active_region
        if region is None or not region.default_zone:
            return False
        return self.store.set_active_zone(region.default_zone)
