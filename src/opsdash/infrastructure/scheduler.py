"""Delayed, cancelable callbacks for search debouncing.

Two implementations of one small protocol:

- :class:`AsyncioScheduler` schedules on the running event loop via
  ``loop.call_later``. Callbacks run cooperatively on the loop thread, so
  they never overlap with other operations.
- :class:`ManualScheduler` keeps a virtual clock that only moves when
  :meth:`ManualScheduler.advance` is called. Scripted sessions and tests
  use it to replay keystroke timing deterministically.

Delays are in milliseconds.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)


class Cancelable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run *callback* after *delay_ms*."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> Cancelable: ...


class AsyncioScheduler:
    """Schedule callbacks on an asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the running loop at call time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000, callback)


@dataclass(order=True)
class _Timer:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler. Time advances only through :meth:`advance`."""

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = start_ms
        self._queue: list[_Timer] = []
        self._seq = itertools.count()

    @property
    def now(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled, not yet fired, not cancelled callbacks."""
        return sum(1 for t in self._queue if not t.cancelled)

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> _Timer:
        timer = _Timer(due=self._now + max(0.0, delay_ms), seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, timer)
        return timer

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms*, firing due callbacks in order.

        Returns the number of callbacks fired.
        """
        if ms < 0:
            msg = f"Cannot move the clock backwards ({ms} ms)"
            raise ValueError(msg)
        target = self._now + ms
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = timer.due
            timer.callback()
            fired += 1
        self._now = target
        if fired:
            logger.debug("Virtual clock at %.0f ms, fired %d callback(s)", self._now, fired)
        return fired

    def run_pending(self) -> int:
        """Fire everything still scheduled, advancing the clock as needed."""
        live = [t for t in self._queue if not t.cancelled]
        if not live:
            return 0
        return self.advance(max(t.due for t in live) - self._now)
