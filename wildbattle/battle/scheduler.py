"""Deferred follow-up actions on a logical clock.

The engine never sleeps. Anything that should happen "a moment later" (the
opponent's counter-attack, a replacement opponent walking in) is queued here
with a delay in milliseconds; whoever drives the battle decides when logical
time moves forward. Tasks run in due-time order, ties in scheduling order.
"""
from __future__ import annotations
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional

@dataclass(order=True)
class DeferredTask:
    due: int
    seq: int
    label: str = field(compare=False, default="")
    fn: Callable[[], None] = field(compare=False, default=lambda: None, repr=False)
    cancelled: bool = field(compare=False, default=False)

    def cancel(self) -> None:
        self.cancelled = True

class DeferredQueue:
    def __init__(self):
        self.now = 0
        self._heap: List[DeferredTask] = []
        self._seq = itertools.count()

    def schedule(self, fn: Callable[[], None], delay_ms: int = 0, label: str = "") -> DeferredTask:
        task = DeferredTask(due=self.now + max(0, int(delay_ms)), seq=next(self._seq), label=label, fn=fn)
        heapq.heappush(self._heap, task)
        return task

    def _prune(self) -> None:
        while self._heap and self._heap[0].cancelled:
            heapq.heappop(self._heap)

    def pending(self) -> int:
        return sum(1 for t in self._heap if not t.cancelled)

    def labels(self) -> List[str]:
        return [t.label for t in sorted(self._heap) if not t.cancelled]

    def next_due(self) -> Optional[int]:
        self._prune()
        return self._heap[0].due if self._heap else None

    def run_next(self) -> bool:
        """Jump the clock to the earliest task and run it. False if idle."""
        self._prune()
        if not self._heap:
            return False
        task = heapq.heappop(self._heap)
        self.now = max(self.now, task.due)
        task.fn()
        return True

    def advance(self, ms: int) -> int:
        """Move the clock forward ``ms`` and run everything that falls due."""
        target = self.now + max(0, int(ms))
        ran = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            self.run_next()
            ran += 1
        self.now = target
        return ran

    def drain(self, max_tasks: int = 1000) -> int:
        """Run until the queue is empty, including tasks scheduled along the way."""
        ran = 0
        while ran < max_tasks and self.run_next():
            ran += 1
        return ran

__all__ = ["DeferredTask","DeferredQueue"]
