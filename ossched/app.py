"""Simulated application that asks the scheduler for one CPU burst."""

from __future__ import annotations

import logging
import os
import re
import socket
import sys
from dataclasses import dataclass

from .msg import (
    SOCKET_PATH,
    Message,
    ProcessRequest,
    ProtocolError,
    recv_message,
    send_message,
)

_log = logging.getLogger(__name__)

_INT_MAX = 2**31 - 1
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1
_UINT32 = 2**32

_DECIMAL = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


@dataclass(frozen=True)
class AppResult:
    """Timing of one completed application run."""

    name: str
    pid: int
    start_time_ms: int
    finish_time_ms: int
    elapsed_s: float
    cpu_s: float


def parse_seconds(text: str) -> int:
    """Parse a non-negative decimal number of seconds that fits in an int."""
    if not _DECIMAL.fullmatch(text):
        raise ValueError(f"Invalid number: {text}")
    value = int(text)
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise ValueError(f"Numerical result out of range: {text}")
    if value < 0 or value > _INT_MAX:
        raise ValueError(f"Value out of range: {value}")
    return value


def run_app(
    name: str,
    time_s: int,
    socket_path: str | os.PathLike[str] = SOCKET_PATH,
    pid: int | None = None,
) -> AppResult:
    """Ask the scheduler to run for ``time_s`` seconds and wait until it is done."""
    if pid is None:
        pid = os.getpid()
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(os.fspath(socket_path))
        request = Message(pid, ProcessRequest.RUN, (time_s * 1000) % _UINT32)
        send_message(sock, request)
        _log.debug(
            "Application %s (PID %d) sent RUN request for %d ms",
            name, pid, request.time_ms,
        )
        ack = recv_message(sock)
        if ack.request != ProcessRequest.ACK:
            raise ProtocolError("Received invalid request. Expected ACK")
        start_time_ms = ack.time_ms
        done = recv_message(sock)
        if done.request != ProcessRequest.DONE:
            _log.warning("Received invalid request. Expected EXIT")
    elapsed_ms = (done.time_ms - start_time_ms) % _UINT32
    return AppResult(
        name=name,
        pid=pid,
        start_time_ms=start_time_ms,
        finish_time_ms=done.time_ms,
        elapsed_s=elapsed_ms / 1000.0,
        cpu_s=float(time_s),
    )


def main(argv: list[str] | None = None) -> int:
    """Command-line entry: ``<name> <time_s>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "app"
        print(f"Usage: {prog} <name> <time_s>")
        return 1
    name, seconds = args
    try:
        time_s = parse_seconds(seconds)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(f"Application {name} started, will need the CPU for {time_s} seconds")
    try:
        result = run_app(name, time_s, SOCKET_PATH)
    except (OSError, EOFError, ProtocolError) as exc:
        print(exc, file=sys.stderr)
        return 1

    print(
        f"Application {result.name} (PID {result.pid}) finished at time "
        f"{result.finish_time_ms} ms, Elapsed: {result.elapsed_s:.3f} seconds, "
        f"CPU: {result.cpu_s:.3f} seconds"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())