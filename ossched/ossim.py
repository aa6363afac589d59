"""Scheduler server that simulates a single CPU for connected applications."""

from __future__ import annotations

import enum
import errno
import logging
import os
import socket
import sys
import time
from collections import deque
from collections.abc import Callable
from typing import Optional

from .fifo import fifo_scheduler
from .mlfq import MlfqScheduler
from .msg import SOCKET_PATH, TICKS_MS, Message, ProcessRequest, ProtocolError
from .pcb import Pcb, TaskStatus
from .rr import rr_scheduler
from .sjf import sjf_scheduler

_log = logging.getLogger(__name__)

MAX_CLIENTS = 128

SchedulerFn = Callable[[int, "deque[Pcb]", Optional[Pcb]], Optional[Pcb]]


class SchedulerKind(enum.Enum):
    """Available CPU scheduling algorithms."""

    FIFO = "FIFO"
    SJF = "SJF"
    RR = "RR"
    MLFQ = "MLFQ"


def get_scheduler(name: str) -> SchedulerKind:
    """Look up a scheduler by its exact name; raise ValueError if unknown."""
    for kind in SchedulerKind:
        if kind.value == name:
            return kind
    options = "\n".join(f" - {kind.value}" for kind in SchedulerKind)
    raise ValueError(
        f"Scheduler {name} not recognized. Available options are:\n{options}"
    )


def make_scheduler(kind: SchedulerKind) -> SchedulerFn:
    """Return a fresh scheduling callable for ``kind``."""
    if kind is SchedulerKind.FIFO:
        return fifo_scheduler
    if kind is SchedulerKind.SJF:
        return sjf_scheduler
    if kind is SchedulerKind.RR:
        return rr_scheduler
    if kind is SchedulerKind.MLFQ:
        return MlfqScheduler()
    raise ValueError(f"Unknown scheduler type {kind!r}")


def setup_server_socket(socket_path: str | os.PathLike[str]) -> socket.socket:
    """Create a non-blocking listening UNIX socket, replacing any stale file."""
    path = os.fspath(socket_path)
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        server.bind(path)
        server.listen(MAX_CLIENTS)
        server.setblocking(False)
    except OSError:
        server.close()
        raise
    return server


class Simulator:
    """Clock, queues and CPU of the simulated system.

    The command queue holds tasks waiting for instructions from their
    application, the ready queue tasks waiting for the CPU, and the blocked
    queue tasks waiting on simulated I/O.
    """

    def __init__(
        self,
        server: socket.socket,
        scheduler: SchedulerFn,
        tick_delay_s: float = TICKS_MS / 2000,
    ) -> None:
        self.server = server
        self.scheduler = scheduler
        self.tick_delay_s = tick_delay_s
        self.command_queue: deque[Pcb] = deque()
        self.ready_queue: deque[Pcb] = deque()
        self.blocked_queue: deque[Pcb] = deque()
        self.cpu: Pcb | None = None
        self.current_time_ms = 0
        self._last_pid = 0

    def accept_clients(self) -> None:
        """Accept every pending connection as a new task in the command queue."""
        while True:
            try:
                client, _ = self.server.accept()
            except BlockingIOError:
                break
            except OSError as exc:
                if exc.errno in (errno.EMFILE, errno.ENFILE):
                    _log.error("accept: too many fds: %s", exc)
                elif exc.errno not in (errno.EINTR, errno.ECONNABORTED):
                    _log.error("accept: %s", exc)
                break
            client.setblocking(False)
            self._last_pid += 1
            _log.debug("[Scheduler] New client connected: fd=%d", client.fileno())
            self.command_queue.append(Pcb(pid=self._last_pid, sock=client))

    def _drop(self, pcb: Pcb) -> None:
        if pcb.sock is not None:
            pcb.sock.close()

    def check_new_commands(self, current_time_ms: int) -> None:
        """Accept new clients and act on RUN and BLOCK requests that have arrived."""
        self.accept_clients()

        waiting: list[Pcb] = []
        for pcb in self.command_queue:
            try:
                data = pcb.sock.recv(Message.SIZE)
            except BlockingIOError:
                waiting.append(pcb)
                continue
            except OSError as exc:
                _log.error("read: %s", exc)
                self._drop(pcb)
                continue
            if not data:
                _log.debug("Connection closed by remote host")
                self._drop(pcb)
                continue

            try:
                msg = Message.unpack(data)
            except ProtocolError:
                msg = None
            if msg is None or msg.request not in (
                ProcessRequest.RUN,
                ProcessRequest.BLOCK,
            ):
                print("Unexpected message received from client")
                waiting.append(pcb)
                continue

            pcb.pid = msg.pid
            pcb.time_ms = msg.time_ms
            if msg.request == ProcessRequest.RUN:
                pcb.elapsed_time_ms = 0
                pcb.status = TaskStatus.RUNNING
                self.ready_queue.append(pcb)
                _log.debug("Process %d requested RUN for %d ms", pcb.pid, pcb.time_ms)
            else:
                pcb.status = TaskStatus.BLOCKED
                self.blocked_queue.append(pcb)
                _log.debug("Process %d requested BLOCK for %d ms", pcb.pid, pcb.time_ms)

            try:
                pcb.notify(ProcessRequest.ACK, current_time_ms)
            except OSError as exc:
                _log.error("write to process %d failed: %s", pcb.pid, exc)
            _log.debug(
                "Send ACK message to process %d with time %d", pcb.pid, current_time_ms
            )

        self.command_queue.clear()
        self.command_queue.extend(waiting)

    def check_blocked_queue(self, current_time_ms: int) -> None:
        """Count down blocked tasks and hand finished ones back to the command queue."""
        still_blocked: list[Pcb] = []
        for pcb in self.blocked_queue:
            if pcb.last_update_time_ms < current_time_ms:
                pcb.time_ms = max(pcb.time_ms - TICKS_MS, 0)

            if pcb.time_ms != 0:
                still_blocked.append(pcb)
                continue

            try:
                pcb.notify(ProcessRequest.DONE, current_time_ms)
            except OSError as exc:
                _log.error("write to process %d failed: %s", pcb.pid, exc)
            _log.debug("Process %d finished BLOCK, sending DONE", pcb.pid)
            pcb.status = TaskStatus.COMMAND
            pcb.last_update_time_ms = current_time_ms
            self.command_queue.append(pcb)

        self.blocked_queue.clear()
        self.blocked_queue.extend(still_blocked)

    def step(self) -> None:
        """Simulate one clock tick."""
        now = self.current_time_ms
        self.check_new_commands(now)
        if now % 1000 == 0:
            print(f"Current time: {now // 1000} s")
        self.check_blocked_queue(now)
        if self.tick_delay_s:
            time.sleep(self.tick_delay_s)
        # Tasks just released from I/O may already have new instructions.
        self.check_new_commands(now)

        self.cpu = self.scheduler(now, self.ready_queue, self.cpu)

        if self.tick_delay_s:
            time.sleep(self.tick_delay_s)
        self.current_time_ms += TICKS_MS

    def run(self) -> None:
        """Simulate ticks forever."""
        while True:
            self.step()


def main(argv: list[str] | None = None) -> int:
    """Command-line entry: ``<scheduler>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "ossim"
        options = ", ".join(kind.value for kind in SchedulerKind)
        print(f"Usage: {prog} <scheduler>\nScheduler options: {options}")
        return 1

    try:
        kind = get_scheduler(args[0])
    except ValueError as exc:
        print(exc)
        return 1

    try:
        server = setup_server_socket(SOCKET_PATH)
    except OSError as exc:
        print(f"Failed to set up server socket: {exc}", file=sys.stderr)
        return 1

    print(f"Scheduler server listening on {SOCKET_PATH}...")
    with server:
        try:
            Simulator(server, make_scheduler(kind)).run()
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())