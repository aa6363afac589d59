"""First-in-first-out CPU scheduling."""

from __future__ import annotations

import logging
from collections import deque

from .msg import TICKS_MS, ProcessRequest
from .pcb import Pcb

_log = logging.getLogger(__name__)


def _advance(task: Pcb, current_time_ms: int) -> bool:
    """Run ``task`` for one tick; report DONE and return True once it is finished."""
    task.elapsed_time_ms += TICKS_MS
    if task.elapsed_time_ms < task.time_ms:
        return False
    try:
        task.notify(ProcessRequest.DONE, current_time_ms)
    except OSError as exc:
        _log.error("write to process %d failed: %s", task.pid, exc)
    return True


def fifo_scheduler(
    current_time_ms: int, ready_queue: deque[Pcb], cpu_task: Pcb | None
) -> Pcb | None:
    """Advance the running task and, if the CPU is idle, take the oldest ready task.

    Returns the task that holds the CPU after this tick, or None if it is idle.
    """
    if cpu_task is not None and _advance(cpu_task, current_time_ms):
        cpu_task = None
    if cpu_task is None and ready_queue:
        cpu_task = ready_queue.popleft()
    return cpu_task