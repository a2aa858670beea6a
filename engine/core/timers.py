"""
Cooperative timer scheduler.

The scheduler owns a virtual clock that only moves when the host calls
update(dt) from its frame loop. Callbacks run synchronously on that
call, one at a time, so timer callbacks and input handlers never
overlap.

Usage:
    scheduler = Scheduler()
    handle = scheduler.call_later(0.05, reveal_next_char)
    ...
    scheduler.update(dt)   # once per frame
    handle.cancel()
"""

from __future__ import annotations

import heapq
import itertools
from typing import Callable

# Absorbs float error when summing frame deltas against timer due times
_EPSILON = 1e-9


class TimerHandle:
    """Handle to a scheduled callback."""

    __slots__ = ("due", "callback", "_cancelled")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call repeatedly."""
        self._cancelled = True


class Scheduler:
    """
    Fires callbacks after a delay measured on a dt-driven clock.

    While a callback runs, `time` equals that callback's due time, so a
    timer scheduled from inside a callback is relative to when it was
    meant to fire rather than to the end of the frame. Chained timers
    therefore keep an exact cadence however long the frames are.
    """

    def __init__(self):
        self._time = 0.0
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    @property
    def time(self) -> float:
        """Current scheduler time in seconds."""
        return self._time

    @property
    def pending(self) -> int:
        """Number of timers that have not fired or been cancelled."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Schedule a callback.

        Args:
            delay: Seconds from now (must be >= 0)
            callback: Called with no arguments

        Returns:
            Handle that can cancel the callback
        """
        if delay < 0:
            raise ValueError(f"Timer delay must be >= 0, got {delay}")

        handle = TimerHandle(self._time + delay, callback)
        heapq.heappush(self._queue, (handle.due, next(self._counter), handle))
        return handle

    def update(self, dt: float) -> None:
        """Advance the clock by dt seconds, firing due timers in order."""
        target = self._time + dt

        while self._queue and self._queue[0][0] <= target + _EPSILON:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._time = max(self._time, due)
            handle.callback()

        self._time = max(self._time, target)

    def clear(self) -> None:
        """Cancel every pending timer."""
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
