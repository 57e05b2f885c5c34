"""
Periodic callback schedulers.

AsyncioScheduler drives live engines from a running event loop, so ticks
and event handlers share one thread. ManualScheduler fires callbacks as a
ManualClock is advanced, for deterministic tests and trace replay.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from src.engine.clock import ManualClock


class ScheduledTask:
    """Handle for a periodic callback; cancel() stops further runs."""

    def __init__(self, interval_ms: float, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(ABC):
    """Abstract fixed-interval scheduler."""

    @abstractmethod
    def call_every(
        self, interval_ms: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        """
        Invoke callback every interval_ms until the task is cancelled.

        The first run happens one interval from now.
        """
        pass


class _AsyncioTask(ScheduledTask):
    """Periodic task rescheduled through loop.call_later."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval_ms: float,
        callback: Callable[[], None],
    ) -> None:
        super().__init__(interval_ms, callback)
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def _schedule(self) -> None:
        self._handle = self._loop.call_later(self.interval_ms / 1000.0, self._run)

    def _run(self) -> None:
        if self.cancelled:
            return
        self._schedule()
        self.callback()

    def cancel(self) -> None:
        super().cancel()
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler(Scheduler):
    """
    Scheduler backed by an asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the running loop, so the
              scheduler must be created inside a coroutine or callback.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_every(
        self, interval_ms: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        task = _AsyncioTask(self._loop, interval_ms, callback)
        task._schedule()
        return task


class _ManualTask(ScheduledTask):

    def __init__(
        self, interval_ms: float, callback: Callable[[], None], first_due_ms: float
    ) -> None:
        super().__init__(interval_ms, callback)
        self.next_due_ms = first_due_ms


class ManualScheduler(Scheduler):
    """
    Scheduler driven by a ManualClock.

    Example usage:
        clock = ManualClock()
        scheduler = ManualScheduler(clock)
        scheduler.call_every(200, tick)
        scheduler.advance(1000)  # tick runs 5 times
    """

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self._tasks: List[_ManualTask] = []

    def call_every(
        self, interval_ms: float, callback: Callable[[], None]
    ) -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got: {interval_ms}")
        task = _ManualTask(interval_ms, callback, self.clock.now_ms() + interval_ms)
        self._tasks.append(task)
        return task

    @property
    def pending(self) -> int:
        """Number of live (uncancelled) tasks."""
        return sum(1 for task in self._tasks if not task.cancelled)

    def advance(self, delta_ms: float) -> int:
        """Advance the clock by delta_ms, firing due callbacks in time order."""
        return self.advance_to(self.clock.now_ms() + delta_ms)

    def advance_to(self, target_ms: float) -> int:
        """
        Advance the clock to target_ms, firing due callbacks in time order.

        The clock reads each callback's due time while it runs.

        Returns:
            Number of callbacks fired
        """
        fired = 0
        while True:
            self._tasks = [task for task in self._tasks if not task.cancelled]
            due = [task for task in self._tasks if task.next_due_ms <= target_ms]
            if not due:
                break
            task = min(due, key=lambda t: t.next_due_ms)
            self.clock.set(task.next_due_ms)
            task.next_due_ms += task.interval_ms
            task.callback()
            fired += 1

        self.clock.set(target_ms)
        return fired
