"""
Timer abstraction for the store's delayed work.

Only two things in keynav are delayed: clearing a dead-end error and
retrying a focus-memory restore. Both go through a Scheduler so that a
host can plug in its own event loop and tests can drive time by hand.
"""

import asyncio
import heapq
import itertools
from typing import Any, Callable, List, Optional, Protocol, Tuple

from keynav.exceptions import ConfigurationError


class TimerHandle(Protocol):
    """Handle returned by Scheduler.call_later."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Schedules a callback to run once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop.

    The loop is resolved when the first timer is scheduled, so the
    scheduler can be built before the host's loop starts running.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)


def default_scheduler() -> AsyncioScheduler:
    """
    Scheduler for a store built without one: the currently running loop.

    Raises:
        ConfigurationError: If called outside a running event loop
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError as e:
        raise ConfigurationError(
            "No scheduler given and no event loop is running; pass scheduler= "
            "(ManualScheduler, TextualScheduler or AsyncioScheduler(loop))",
            setting="scheduler",
        ) from e
    return AsyncioScheduler(loop)


class _ManualHandle:
    def __init__(self, due: float):
        self.due = due
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler with a hand-driven clock.

    Callbacks run only from advance(), in due-time order and then in the
    order they were scheduled. Callbacks scheduled while advancing run in
    the same call if they fall due before the new time.

    Example:
        scheduler = ManualScheduler()
        store = NavigationStore(scheduler=scheduler)
        ...
        scheduler.advance(0.5)
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: List[Tuple[float, int, _ManualHandle, Callable[[], None]]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle(self.now + max(delay, 0.0))
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle, callback))
        return handle

    def time(self) -> float:
        return self.now

    def pending(self) -> int:
        """Number of scheduled, not yet cancelled callbacks."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and run everything that fell due.

        Returns:
            Number of callbacks that ran
        """
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = due
            callback()
            ran += 1
        self.now = target
        return ran


class TextualTimerAdapter:
    """Exposes a Textual Timer's stop() as cancel()."""

    def __init__(self, timer: Any):
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class TextualScheduler:
    """Scheduler that runs callbacks on a Textual app's message loop."""

    def __init__(self, app: Any):
        self._app = app

    def call_later(self, delay: float, callback: Callable[[], None]) -> TextualTimerAdapter:
        return TextualTimerAdapter(self._app.set_timer(delay, callback))
