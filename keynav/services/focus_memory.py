"""
Focus memory: remember where focus was on a path and put it back later.

Only one snapshot is kept; saving again overwrites it. Restoring is keyed
by the exact path string captured at save time.

When the remembered zone has not mounted yet, the restore waits for it:
a retry is scheduled every restore_retry_delay seconds up to
restore_max_attempts times, and the zone registering in the meantime
completes the restore right away. Only one restore can be pending;
queueing another cancels the previous timer.
"""

import logging
from typing import TYPE_CHECKING, Optional

from keynav.models.navigation import NavigationMemoryState, PendingRestore, Zone

if TYPE_CHECKING:
    from .navigation_store import NavigationStore

logger = logging.getLogger(__name__)


class FocusMemory:
    """Save/restore state machine (idle, saved, pending restore)."""

    def __init__(self, store: "NavigationStore", retry_delay: float, max_attempts: int):
        self.store = store
        self.retry_delay = retry_delay
        self.max_attempts = max_attempts
        self.memory: Optional[NavigationMemoryState] = None
        self.pending: Optional[PendingRestore] = None
        store.registry.on_zone_added(self._on_zone_added)

    @property
    def status(self) -> str:
        """Current state name: "pending", "saved" or "idle"."""
        if self.pending is not None:
            return "pending"
        if self.memory is not None:
            return "saved"
        return "idle"

    def save(self, path: str) -> bool:
        """Remember the focused location for a path.

        Only zones that opted in with memory=True are remembered.

        Returns:
            True if a snapshot was stored
        """
        if not path:
            return False

        state = self.store.state
        if not state.active_region or not state.active_zone:
            return False

        zone = self.store.registry.get_zone(state.active_zone)
        if zone is None or not zone.memory:
            return False

        self.memory = NavigationMemoryState(
            region_id=state.active_region,
            zone_id=state.active_zone,
            index=state.active_index,
            path=path,
        )
        self.store.trace(f"Saved focus for {path}: {zone.id}[{state.active_index}]")
        return True

    def restore(self, path: str) -> bool:
        """Put focus back where it was when path was saved.

        Returns:
            True if focus was restored now. False if nothing matches the
            path, or if the zone is missing and a retry was queued.
        """
        if self.memory is None or self.memory.path != path:
            return False

        zone = self.store.registry.get_zone(self.memory.zone_id)
        if zone is None:
            self.queue(path)
            return False

        self._cancel_timer()
        self.pending = None
        self.store.apply_memory(self.memory)
        self.store.trace(f"Restored focus for {path}: {zone.id}[{self.memory.index}]")
        return True

    def queue(self, path: str) -> None:
        """Start waiting for the remembered zone, replacing any pending wait."""
        self._cancel_timer()
        self.pending = PendingRestore(path=path, max_attempts=self.max_attempts)
        self._attempt()

    def cleanup(self) -> None:
        """Drop any pending restore and its timer."""
        self._cancel_timer()
        self.pending = None

    def _cancel_timer(self) -> None:
        if self.pending is not None and self.pending.handle is not None:
            self.pending.handle.cancel()
            self.pending.handle = None

    def _attempt(self) -> None:
        pending = self.pending
        if pending is None or self.memory is None:
            return
        pending.handle = None

        if self.store.registry.has_zone(self.memory.zone_id):
            self.pending = None
            self.restore(pending.path)
            return

        if pending.attempts >= pending.max_attempts:
            logger.debug(
                f"Giving up restoring focus for {pending.path} after {pending.attempts} attempts"
            )
            self.pending = None
            return

        try:
            handle = self.store.scheduler.call_later(self.retry_delay, self._attempt)
        except Exception:
            self.pending = None
            raise
        pending.attempts += 1
        pending.handle = handle

    def _on_zone_added(self, zone: Zone) -> None:
        if self.pending is None or self.memory is None:
            return
        if zone.id != self.memory.zone_id:
            return
        self._cancel_timer()
        self._attempt()
