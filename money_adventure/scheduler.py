"""
Deferred follow-up actions on a virtual clock.

The engine never sleeps. Pacing delays (dice animation, computer
"thinking") become scheduled callbacks that a driver fires by advancing
the clock, or that tests drain synchronously.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledTask:
    due_ms: int
    seq: int
    label: str = field(compare=False)
    callback: Callable[[], None] = field(compare=False, repr=False)
    cancelled: bool = field(default=False, compare=False)


class Scheduler:
    """Ordered queue of pending follow-ups. Tasks fire in (due time, insertion) order."""

    def __init__(self):
        self.now_ms = 0
        self._queue: List[ScheduledTask] = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: int, callback: Callable[[], None], label: str = "") -> ScheduledTask:
        task = ScheduledTask(self.now_ms + max(0, delay_ms), next(self._seq), label, callback)
        heapq.heappush(self._queue, task)
        logger.debug("Scheduled %s at t=%dms", label or "task", task.due_ms)
        return task

    @property
    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def pending_labels(self) -> List[str]:
        return [t.label for t in sorted(self._queue) if not t.cancelled]

    def _pop_next(self):
        while self._queue:
            task = heapq.heappop(self._queue)
            if not task.cancelled:
                return task
        return None

    def run_next(self) -> bool:
        """Fire the earliest task, moving the clock forward to it."""
        task = self._pop_next()
        if task is None:
            return False
        self.now_ms = max(self.now_ms, task.due_ms)
        logger.debug("Running %s at t=%dms", task.label or "task", self.now_ms)
        task.callback()
        return True

    def advance(self, ms: int) -> int:
        """Move the clock forward by `ms`, firing every task that falls due. Returns tasks fired."""
        target = self.now_ms + ms
        fired = 0
        while self._queue:
            head = self._queue[0]
            if head.cancelled:
                heapq.heappop(self._queue)
                continue
            if head.due_ms > target:
                break
            self.run_next()
            fired += 1
        self.now_ms = target
        return fired

    def run_until_idle(self, max_steps: int = 10000) -> int:
        """Fire tasks until the queue is empty or `max_steps` tasks have run."""
        steps = 0
        while steps < max_steps and self.run_next():
            steps += 1
        return steps

    def cancel_all(self) -> int:
        """Cancel every pending task."""
        count = self.pending
        for task in self._queue:
            task.cancelled = True
        self._queue.clear()
        if count:
            logger.debug("Cancelled %d pending task(s)", count)
        return count
