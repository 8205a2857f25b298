"""A millisecond clock driving one-shot callbacks and repeating timers."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(order=True)
class _Entry:
    due: int
    seq: int
    callback: Callable[[], Any] = field(compare=False)
    owner: Any = field(compare=False, default=None)
    cancelled: bool = field(compare=False, default=False)


class Scheduler:
    """Runs callbacks when simulated time reaches their due moment."""

    def __init__(self) -> None:
        self.now = 0
        self._queue: list[_Entry] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return sum(not entry.cancelled for entry in self._queue)

    def call_later(self, delay_ms: int, callback: Callable[[], Any], owner: Any = None) -> _Entry:
        """Run ``callback`` once, ``delay_ms`` milliseconds from now."""
        if delay_ms < 0:
            raise ValueError(f"delay must not be negative: {delay_ms}")
        entry = _Entry(self.now + delay_ms, next(self._counter), callback, owner)
        heapq.heappush(self._queue, entry)
        return entry

    def cancel_owner(self, owner: Any) -> int:
        """Drop every pending callback registered for ``owner``; return how many."""
        dropped = 0
        for entry in self._queue:
            if not entry.cancelled and entry.owner is owner:
                entry.cancelled = True
                dropped += 1
        return dropped

    def advance(self, ms: int) -> None:
        """Move the clock forward, running callbacks that fall due on the way."""
        if ms < 0:
            raise ValueError(f"cannot move time backwards: {ms}")
        target = self.now + ms
        while self._queue and self._queue[0].due <= target:
            entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue
            self.now = entry.due
            entry.callback()
        self.now = target


class RepeatingTimer:
    """Calls ``callback`` every interval until stopped."""

    def __init__(self, scheduler: Scheduler, callback: Callable[[], Any], owner: Any = None) -> None:
        self.scheduler = scheduler
        self.callback = callback
        self.owner = owner
        self.interval: int | None = None
        self._generation = 0
        self._pending: _Entry | None = None

    @property
    def active(self) -> bool:
        return self._pending is not None and not self._pending.cancelled

    def start(self, interval_ms: int) -> None:
        """Start, or restart from zero, with the given interval."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive: {interval_ms}")
        self.stop()
        self.interval = interval_ms
        self._schedule(self._generation)

    def stop(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancelled = True
            self._pending = None

    def _schedule(self, generation: int) -> None:
        def fire() -> None:
            if generation != self._generation:
                return
            self._schedule(generation)
            self.callback()

        self._pending = self.scheduler.call_later(self.interval, fire, self.owner)