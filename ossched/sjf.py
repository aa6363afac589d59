"""Non-preemptive shortest-job-first CPU scheduling."""

from __future__ import annotations

from collections import deque

from .fifo import _advance
from .pcb import Pcb


def sjf_scheduler(
    current_time_ms: int, ready_queue: deque[Pcb], cpu_task: Pcb | None
) -> Pcb | None:
    """Advance the running task and, if the CPU is idle, take the shortest job.

    The shortest job is the ready task with the smallest requested time; on a
    tie the one that entered the queue first wins. A running task keeps the
    CPU until it finishes.
    """
    if cpu_task is not None and _advance(cpu_task, current_time_ms):
        cpu_task = None
    if cpu_task is None and ready_queue:
        cpu_task = min(ready_queue, key=lambda task: task.time_ms)
        ready_queue.remove(cpu_task)
    return cpu_task