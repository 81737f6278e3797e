"""Deferred-callback schedulers for the turn orchestrator.

The orchestrator never sleeps; it hands continuations to a ``Scheduler``
with a delay.  Delays exist only for presentation pacing, so outcomes
must not depend on them:

- ``VirtualScheduler`` keeps a virtual clock and runs callbacks in due-time
  order when drained.  Tests and the headless runner use it, which
  collapses every delay to pure ordering.
- ``AsyncioScheduler`` forwards to ``loop.call_later`` for interactive use.
"""

from __future__ import annotations

import asyncio
import heapq
from abc import ABC, abstractmethod
from typing import Callable


Callback = Callable[[], None]


class Scheduler(ABC):
    """Something that can run a callback after a delay (in seconds)."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> None:
        """Schedule *callback* to run once, *delay* seconds from now."""


# ---------------------------------------------------------------------------
# VirtualScheduler
# ---------------------------------------------------------------------------

class VirtualScheduler(Scheduler):
    """Deterministic scheduler driven by an explicit virtual clock.

    Callbacks due at the same instant run in the order they were
    scheduled.  Nothing runs until ``run_until_idle`` or ``advance`` is
    called.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._seq = 0
        self._heap: list[tuple[float, int, Callback]] = []

    # -- Scheduler -----------------------------------------------------------

    def call_later(self, delay: float, callback: Callback) -> None:
        due = self._now + max(0.0, delay)
        heapq.heappush(self._heap, (due, self._seq, callback))
        self._seq += 1

    # -- driving -------------------------------------------------------------

    def run_until_idle(self, max_callbacks: int = 100_000) -> int:
        """Run callbacks (including ones they schedule) until none are left.

        Returns the number of callbacks run.  Raises ``RuntimeError`` if
        *max_callbacks* is exceeded, which means something keeps
        rescheduling itself forever.
        """
        ran = 0
        while self._heap:
            if ran >= max_callbacks:
                raise RuntimeError(
                    f"VirtualScheduler exceeded {max_callbacks} callbacks"
                )
            self._run_next()
            ran += 1
        return ran

    def advance(self, seconds: float) -> int:
        """Run every callback due within the next *seconds* of virtual time."""
        horizon = self._now + seconds
        ran = 0
        while self._heap and self._heap[0][0] <= horizon:
            self._run_next()
            ran += 1
        self._now = horizon
        return ran

    def clear(self) -> None:
        """Drop all pending callbacks."""
        self._heap.clear()

    def _run_next(self) -> None:
        due, _, callback = heapq.heappop(self._heap)
        self._now = max(self._now, due)
        callback()

    # -- queries -------------------------------------------------------------

    @property
    def now(self) -> float:
        return self._now

    @property
    def is_idle(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)

    def __repr__(self) -> str:
        return f"VirtualScheduler(now={self._now:.3f}, pending={len(self._heap)})"


# ---------------------------------------------------------------------------
# AsyncioScheduler
# ---------------------------------------------------------------------------

class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop.

    Parameters
    ----------
    loop:
        Event loop to use.  Defaults to the running loop at call time.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callback) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(max(0.0, delay), callback)
