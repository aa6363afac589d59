"""Multi-level feedback queue CPU scheduling."""

from __future__ import annotations

from collections import deque

from .fifo import _advance
from .pcb import Pcb

NUM_QUEUES = 3
_SLICES_MS = (500, 1000, 2000)


def slice_of(level: int) -> int:
    """Time slice in milliseconds for a queue level; deeper levels share the last."""
    if level <= 0:
        return _SLICES_MS[0]
    return _SLICES_MS[min(level, NUM_QUEUES - 1)]


class MlfqScheduler:
    """Three-level feedback queue scheduler.

    New and returning tasks enter the top level. A task that uses up its
    level's time slice drops one level, down to the lowest. The CPU always
    goes to the head of the highest non-empty level; a running task is not
    preempted by arrivals.
    """

    def __init__(self) -> None:
        self.queues: tuple[deque[Pcb], ...] = tuple(
            deque() for _ in range(NUM_QUEUES)
        )
        self.running_level = 0

    def __call__(
        self, current_time_ms: int, ready_queue: deque[Pcb], cpu_task: Pcb | None
    ) -> Pcb | None:
        """Run one tick and return the task that holds the CPU afterwards."""
        self.queues[0].extend(ready_queue)
        ready_queue.clear()

        if cpu_task is not None:
            if _advance(cpu_task, current_time_ms):
                cpu_task = None
            elif (
                cpu_task.elapsed_time_ms - cpu_task.slice_start_ms
                >= slice_of(self.running_level)
            ):
                self.running_level = min(self.running_level + 1, NUM_QUEUES - 1)
                cpu_task.slice_start_ms = cpu_task.elapsed_time_ms
                self.queues[self.running_level].append(cpu_task)
                cpu_task = None

        if cpu_task is None:
            for level, queue in enumerate(self.queues):
                if queue:
                    cpu_task = queue.popleft()
                    self.running_level = level
                    cpu_task.slice_start_ms = cpu_task.elapsed_time_ms
                    break
        return cpu_task