"""UI-side bindings: keyboard dispatch, region/zone handles, Textual widgets."""

from .keyboard import KeyboardController
from .region import RegionHandle
from .zone import ZoneHandle

__all__ = ["KeyboardController", "RegionHandle", "ZoneHandle"]
