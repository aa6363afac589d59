"""Process control blocks kept by the scheduler."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass

from .msg import Message, ProcessRequest, send_message


class TaskStatus(enum.IntEnum):
    """Life-cycle states of a task."""

    COMMAND = 0     # connected, waiting for instructions
    BLOCKED = 1     # waiting on I/O
    RUNNING = 2     # in the ready queue or on the CPU
    STOPPED = 3     # sent DONE, waiting for more messages
    TERMINATED = 4  # will be removed


@dataclass(eq=False)
class Pcb:
    """State the scheduler keeps for one connected application.

    Blocks compare by identity, so a given block can be found and removed
    from a queue even when another block holds the same values.
    """

    pid: int
    sock: socket.socket | None = None
    time_ms: int = 0
    status: TaskStatus = TaskStatus.COMMAND
    elapsed_time_ms: int = 0
    slice_start_ms: int = 0
    last_update_time_ms: int = 0

    def notify(self, request: ProcessRequest, time_ms: int) -> Message:
        """Send a message for this task to its application and return it."""
        if self.sock is None:
            raise RuntimeError(f"process {self.pid} has no socket")
        message = Message(self.pid, ProcessRequest(request), time_ms)
        send_message(self.sock, message)
        return message