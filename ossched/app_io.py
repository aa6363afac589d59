"""Simulated application that replays a file of CPU and I/O bursts."""

from __future__ import annotations

import logging
import os
import socket
import sys
from collections.abc import Iterable
from dataclasses import dataclass

from .burst import Burst, read_bursts
from .msg import (
    SOCKET_PATH,
    Message,
    ProcessRequest,
    ProtocolError,
    recv_message,
    send_message,
)

_log = logging.getLogger(__name__)

_UINT32 = 2**32


@dataclass(frozen=True)
class AppIoResult:
    """Timing of one application run over a sequence of bursts."""

    name: str
    pid: int
    start_time_ms: int
    finish_time_ms: int
    elapsed_s: float
    cpu_s: float
    blocked_s: float


def basename_no_ext(path: str) -> str:
    """Return the last path component with everything from its last '.' removed."""
    base = path.rsplit("/", 1)[-1]
    stem, dot, _ = base.rpartition(".")
    return stem if dot else base


def handle_request(
    sock: socket.socket,
    pid: int,
    app_name: str,
    burst: Burst,
    request: ProcessRequest,
) -> tuple[int, int]:
    """Send one RUN or BLOCK request and wait for its ACK and DONE.

    Returns the scheduler clock at the ACK and at the DONE, in milliseconds.
    Raises ProtocolError if the scheduler answers out of order.
    """
    request = ProcessRequest(request)
    time_ms = (
        burst.burst_time_ms if request == ProcessRequest.RUN else burst.block_time_ms
    )
    send_message(sock, Message(pid, request, time_ms))
    _log.debug(
        "Application %s (PID %d) sent %s request for %d ms",
        app_name, pid, request.name, time_ms,
    )

    ack = recv_message(sock)
    if ack.request != ProcessRequest.ACK:
        raise ProtocolError(
            f"Received invalid request. Expected ACK, received {ack.request.name}"
        )
    _log.debug(
        "Received ACK from scheduler for application %s (PID %d) at time %d ms",
        app_name, pid, ack.time_ms,
    )

    done = recv_message(sock)
    if done.request != ProcessRequest.DONE:
        raise ProtocolError(
            f"Received invalid request. Expected DONE, received {done.request.name}"
        )
    _log.debug(
        "Received DONE from scheduler for application %s (PID %d) at time %d ms",
        app_name, pid, done.time_ms,
    )
    return ack.time_ms, done.time_ms


def run_app_io(
    app_name: str,
    bursts: Iterable[Burst],
    socket_path: str | os.PathLike[str] = SOCKET_PATH,
    pid: int | None = None,
) -> AppIoResult:
    """Replay ``bursts`` against the scheduler and report the timing.

    A failure in the middle of the exchange ends the run early; the result
    then covers the bursts completed so far.
    """
    if pid is None:
        pid = os.getpid()
    clock_ms = 0
    start_ms = 0
    cpu_ms = 0
    blocked_ms = 0

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(os.fspath(socket_path))
        try:
            for burst in bursts:
                ack_ms, clock_ms = handle_request(
                    sock, pid, app_name, burst, ProcessRequest.RUN
                )
                if start_ms == 0:
                    start_ms = ack_ms
                cpu_ms += burst.burst_time_ms

                if burst.block_time_ms > 0:
                    ack_ms, clock_ms = handle_request(
                        sock, pid, app_name, burst, ProcessRequest.BLOCK
                    )
                    if start_ms == 0:
                        start_ms = ack_ms
                    blocked_ms += burst.block_time_ms
        except (OSError, EOFError, ProtocolError) as exc:
            _log.error("Application %s (PID %d): %s", app_name, pid, exc)

    return AppIoResult(
        name=app_name,
        pid=pid,
        start_time_ms=start_ms,
        finish_time_ms=clock_ms,
        elapsed_s=((clock_ms - start_ms) % _UINT32) / 1000.0,
        cpu_s=cpu_ms / 1000.0,
        blocked_s=blocked_ms / 1000.0,
    )


def main(argv: list[str] | None = None) -> int:
    """Command-line entry: ``<burst-file.csv>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "app-io"
        print(f"Usage: {prog} <burst-file.csv>")
        return 1

    burst_file = args[0]
    app_name = basename_no_ext(burst_file)
    try:
        bursts = read_bursts(burst_file)
    except OSError as exc:
        _log.error("%s: %s", burst_file, exc)
        bursts = []
    if not bursts:
        print(f"Failed to read burst file {burst_file}", file=sys.stderr)
        return 1

    try:
        result = run_app_io(app_name, bursts, SOCKET_PATH)
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1

    print(
        f"Application {result.name} (PID {result.pid}) finished at time "
        f"{result.finish_time_ms} ms, Elapsed: {result.elapsed_s:.3f} seconds, "
        f"CPU: {result.cpu_s:.3f} seconds, BLOCKED: {result.blocked_s:.3f} seconds"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())