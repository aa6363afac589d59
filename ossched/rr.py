"""Round-robin CPU scheduling."""

from __future__ import annotations

from collections import deque

from .fifo import _advance
from .pcb import Pcb

TIME_SLICE_MS = 500
"""Longest time a task runs before yielding to the next in line."""


def rr_scheduler(
    current_time_ms: int, ready_queue: deque[Pcb], cpu_task: Pcb | None
) -> Pcb | None:
    """Advance the running task, rotate it out when its slice ends, fill an idle CPU.

    A task that has used up its time slice without finishing goes to the back
    of the ready queue.
    """
    if cpu_task is not None:
        if _advance(cpu_task, current_time_ms):
            cpu_task = None
        elif cpu_task.elapsed_time_ms - cpu_task.slice_start_ms >= TIME_SLICE_MS:
            cpu_task.slice_start_ms = cpu_task.elapsed_time_ms
            ready_queue.append(cpu_task)
            cpu_task = None
    if cpu_task is None and ready_queue:
        cpu_task = ready_queue.popleft()
        cpu_task.slice_start_ms = cpu_task.elapsed_time_ms
    return cpu_task