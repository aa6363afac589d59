"""CPU/IO burst descriptions and the burst file format."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

from .msg import MAX_PAGES

_log = logging.getLogger(__name__)

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_UINT32 = 2**32

_INTEGER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")


class BurstParseError(ValueError):
    """Raised when a burst line is malformed."""


@dataclass(frozen=True)
class Burst:
    """One CPU burst followed by an optional blocking period."""

    burst_time_ms: int
    block_time_ms: int = 0
    nice: int = 0
    pages: tuple[int, ...] = ()


class _Fields:
    """Splits text into non-empty fields, each call naming its delimiters."""

    def __init__(self, text: str) -> None:
        self._rest: str | None = text

    def next(self, delimiters: str) -> str | None:
        if self._rest is None:
            return None
        rest = self._rest.lstrip(delimiters)
        if not rest:
            self._rest = None
            return None
        end = next((i for i, ch in enumerate(rest) if ch in delimiters), None)
        if end is None:
            self._rest = None
            return rest
        self._rest = rest[end + 1:]
        return rest[:end]


def _integer(text: str, low: int, high: int, what: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise BurstParseError(f"Invalid {what}: {text}")
    value = int(text)
    if not low <= value <= high:
        raise BurstParseError(f"Invalid {what}: {text}")
    return value


def parse_burst_line(line: str) -> Burst:
    """Parse ``burst_ms[,block_ms[,nice[,<text>[page,page,...]]]]``."""
    fields = _Fields(line)

    field = fields.next(",\r\n")
    if field is None:
        raise BurstParseError("Missing burst time")
    burst_time = _integer(field, 0, _INT_MAX, "burst time")

    block_time = 0
    field = fields.next(",\r\n")
    if field is not None:
        # Stored as an unsigned 32-bit value, so negatives wrap around.
        block_time = _integer(field, _INT_MIN, _INT_MAX, "block time value") % _UINT32

    nice = 0
    field = fields.next(",\r\n")
    if field is not None:
        nice = _integer(field, _INT_MIN, _INT_MAX, "nice value")

    pages: list[int] = []
    field = fields.next("[")
    if field is not None:
        field = fields.next("]")
    if field is not None:
        page_fields = _Fields(field)
        while len(pages) < MAX_PAGES:
            page_field = page_fields.next(",")
            if page_field is None:
                break
            pages.append(_integer(page_field, 0, _INT_MAX, "page number"))

    return Burst(burst_time, block_time, nice, tuple(pages))


def read_bursts(filename: str | os.PathLike[str]) -> list[Burst]:
    """Read every well-formed burst from a file, in order.

    Blank lines and lines starting with ``#`` are ignored; malformed lines
    are logged and skipped.
    """
    bursts: list[Burst] = []
    with open(filename, encoding="utf-8") as file:
        for line in file:
            trimmed = line.lstrip()
            if not trimmed or trimmed.startswith("#"):
                continue
            try:
                bursts.append(parse_burst_line(trimmed))
            except BurstParseError as exc:
                _log.warning("Skipping malformed line %r: %s", line, exc)
    return bursts