"""
Audio feedback for navigation events.

Playback is fire-and-forget: a failing backend is logged and ignored so
that sound can never change what is focused.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from keynav.models.types import SoundType

logger = logging.getLogger(__name__)

SoundBackend = Callable[[SoundType, Optional[Path]], None]


class SoundPlayer:
    """Plays move/select/error feedback through a pluggable backend.

    Args:
        backend: Callable receiving the sound type and its configured file
            (None when no file is configured). No backend means silence.
        sounds: Sound type name -> file path
        muted: Start muted
    """

    def __init__(
        self,
        backend: Optional[SoundBackend] = None,
        sounds: Optional[Dict[str, Union[str, Path]]] = None,
        muted: bool = False,
    ):
        self.backend = backend
        self.sounds = {name: Path(path) for name, path in (sounds or {}).items()}
        self.muted = muted
        self._cache: Dict[SoundType, Optional[Path]] = {}

    def preload(self) -> None:
        """Resolve every configured sound file up front."""
        for sound_type in SoundType:
            self._resolve(sound_type)

    def _resolve(self, sound_type: SoundType) -> Optional[Path]:
        if sound_type not in self._cache:
            path = self.sounds.get(sound_type.value)
            if path is not None and not path.exists():
                logger.warning(f"Sound file for '{sound_type.value}' not found: {path}")
                path = None
            self._cache[sound_type] = path
        return self._cache[sound_type]

    def play(self, sound_type: SoundType) -> None:
        if self.muted or self.backend is None:
            return

        try:
            self.backend(sound_type, self._resolve(sound_type))
        except Exception as e:
            logger.warning(f"Failed to play sound '{sound_type.value}': {e}")

    def toggle_mute(self) -> bool:
        """Flip the muted flag and return the new value."""
        self.muted = not self.muted
        return self.muted
