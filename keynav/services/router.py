"""
Path router hooks for focus memory.

The router mirrors a web router's navigation guards: before leaving a
path the current focus is saved for it, and after arriving on a path
whatever was saved for that path is restored.
"""

import logging
from typing import Callable, List, Optional

from keynav.config.settings import NavigationSettings

from .navigation_store import NavigationStore
from .scheduler import Scheduler
from .sound import SoundPlayer

logger = logging.getLogger(__name__)

RouteListener = Callable[[str, str], None]


class PathRouter:
    """Tracks the current path and drives save/restore around changes."""

    def __init__(self, store: NavigationStore, initial_path: str = "/"):
        self.store = store
        self.current_path = initial_path
        self._listeners: List[RouteListener] = []

    def on_change(self, listener: RouteListener) -> Callable[[], None]:
        """Call listener(from_path, to_path) after every path change.

        Returns:
            Function that removes the listener
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def navigate(self, path: str) -> bool:
        """Change the current path.

        Returns:
            Whether focus was restored immediately for the new path
        """
        from_path = self.current_path
        # A restore still waiting on the old path must not land on the new one.
        self.store.cleanup()
        self.store.save_state(from_path)

        self.current_path = path
        for listener in list(self._listeners):
            try:
                listener(from_path, path)
            except Exception as e:
                logger.warning(f"Route listener failed for {from_path} -> {path}: {e}")

        return self.store.restore_state(path)


class KeyboardNavigation:
    """A store and its router, as created by create_keyboard_navigation."""

    def __init__(self, store: NavigationStore, router: PathRouter):
        self.store = store
        self.router = router

    def close(self) -> None:
        """Cancel pending restores when the host tears down."""
        self.store.cleanup()


def create_keyboard_navigation(
    settings: Optional[NavigationSettings] = None,
    router: Optional[PathRouter] = None,
    scheduler: Optional[Scheduler] = None,
    sound: Optional[SoundPlayer] = None,
    initial_path: str = "/",
) -> KeyboardNavigation:
    """
    Build a NavigationStore wired to a PathRouter.

    Args:
        settings: Navigation settings (debug and muted are honored)
        router: Existing router to reuse; its store is replaced
        scheduler: Timer source for the store; without one the call must
            happen inside a running asyncio loop
        sound: Sound player; defaults to one built from settings
        initial_path: Starting path for a new router

    Returns:
        The wired KeyboardNavigation

    Raises:
        ConfigurationError: If no scheduler is given and no loop is running
    """
    settings = settings or NavigationSettings()
    if sound is None:
        sound = SoundPlayer(sounds=settings.sounds, muted=settings.muted)
    elif settings.muted:
        sound.muted = True

    store = NavigationStore(settings=settings, scheduler=scheduler, sound=sound)
    if router is None:
        router = PathRouter(store, initial_path=initial_path)
    else:
        router.store = store

    if sound.backend is not None:
        sound.preload()
    if settings.debug:
        logger.info("Keyboard navigation created with debug tracing")

    return KeyboardNavigation(store, router)
