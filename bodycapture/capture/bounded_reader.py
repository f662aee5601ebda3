"""Byte-bounded stream reading."""

from __future__ import annotations

from typing import BinaryIO, NamedTuple

READ_CHUNK_SIZE = 8192


class BoundedRead(NamedTuple):
    data: bytes
    more: bool  # True when the stream held bytes beyond the limit


def read_bounded(stream: BinaryIO, limit: int, chunk_size: int = READ_CHUNK_SIZE) -> BoundedRead:
    """Read at most ``limit`` bytes from ``stream``.

    One extra byte is requested to learn whether the stream continues past
    the limit; it is never part of the returned data.
    """
    if limit <= 0:
        raise ValueError(f"limit must be positive, got {limit}")

    wanted = limit + 1
    buffer = bytearray()
    while len(buffer) < wanted:
        chunk = stream.read(min(chunk_size, wanted - len(buffer)))
        if not chunk:
            break
        buffer += chunk

    return BoundedRead(bytes(buffer[:limit]), len(buffer) > limit)
