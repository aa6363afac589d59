"""Wire messages exchanged between applications and the scheduler."""

from __future__ import annotations

import enum
import socket
import struct
from dataclasses import dataclass
from typing import ClassVar

TICKS_MS = 10
"""Length of one simulated clock tick in milliseconds."""

SOCKET_PATH = "/tmp/scheduler.sock"
"""Default path of the scheduler's UNIX domain socket."""

MAX_PAGES = 32
"""Largest number of page ids a burst may carry."""

# pid (int32), request (int32 enum), time_ms (uint32), native byte order.
_WIRE = struct.Struct("=iiI")


class ProtocolError(Exception):
    """Raised when a message cannot be encoded or decoded."""


class ProcessRequest(enum.IntEnum):
    """Kinds of request exchanged over the socket."""

    RUN = 0
    BLOCK = 1
    ACK = 2
    DONE = 3


@dataclass(frozen=True)
class Message:
    """One fixed-size message on the scheduler socket."""

    pid: int
    request: ProcessRequest
    time_ms: int

    SIZE: ClassVar[int] = _WIRE.size

    def pack(self) -> bytes:
        """Encode the message into its wire form."""
        try:
            return _WIRE.pack(self.pid, int(self.request), self.time_ms)
        except struct.error as exc:
            raise ProtocolError(f"cannot encode {self!r}: {exc}") from exc

    @classmethod
    def unpack(cls, data: bytes) -> Message:
        """Decode a message from exactly one wire record."""
        if len(data) != _WIRE.size:
            raise ProtocolError(
                f"expected {_WIRE.size} bytes, got {len(data)}"
            )
        pid, raw_request, time_ms = _WIRE.unpack(data)
        try:
            request = ProcessRequest(raw_request)
        except ValueError as exc:
            raise ProtocolError(f"unknown request code {raw_request}") from exc
        return cls(pid, request, time_ms)


def send_message(sock: socket.socket, message: Message) -> None:
    """Write one whole message to the socket."""
    sock.sendall(message.pack())


def recv_message(sock: socket.socket) -> Message:
    """Read one whole message from the socket.

    Raises EOFError if the peer closed the connection before any byte of the
    message arrived, and ProtocolError if it closed in the middle of one.
    """
    buffer = bytearray()
    while len(buffer) < _WIRE.size:
        chunk = sock.recv(_WIRE.size - len(buffer))
        if not chunk:
            if not buffer:
                raise EOFError("connection closed by peer")
            raise ProtocolError(
                f"truncated message: {len(buffer)} of {_WIRE.size} bytes"
            )
        buffer += chunk
    return Message.unpack(bytes(buffer))