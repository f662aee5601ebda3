"""Concrete entity implementations."""

from __future__ import annotations

import io
from collections.abc import Iterable, Iterator
from typing import BinaryIO, Optional

from .types import UNKNOWN_LENGTH, EntityConsumedError


class ChunkedStream(io.RawIOBase):
    """Read-once binary stream over an iterable of chunks.

    ``str`` chunks are encoded as UTF-8. Closing the stream does not close
    the source, so it is safe to wrap iterators and files owned by the caller.
    """

    def __init__(self, chunks: Iterable[bytes | str]):
        self._chunks: Iterator[bytes | str] = iter(chunks)
        self._pending = b""

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        while not self._pending:
            try:
                chunk = next(self._chunks)
            except StopIteration:
                return 0
            if isinstance(chunk, str):
                chunk = chunk.encode("utf-8")
            self._pending = bytes(chunk)

        size = min(len(buffer), len(self._pending))
        buffer[:size] = self._pending[:size]
        self._pending = self._pending[size:]
        return size


def iter_file_chunks(source, chunk_size: int = 8192) -> Iterator[bytes | str]:
    """Yield chunks from a file-like object until it reports end of data."""
    while True:
        chunk = source.read(chunk_size)
        if not chunk:
            return
        yield chunk


class ByteArrayEntity:
    """Repeatable entity backed by an in-memory byte string."""

    repeatable = True

    def __init__(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
    ) -> None:
        self._content = bytes(content)
        self.content_type = content_type
        self.content_encoding = content_encoding

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={len(self._content)}, content_type={self.content_type!r})"

    @property
    def content_length(self) -> int:
        return len(self._content)

    @property
    def content(self) -> bytes:
        return self._content

    def get_content(self) -> BinaryIO:
        return io.BytesIO(self._content)


class StringEntity(ByteArrayEntity):
    """Repeatable entity holding UTF-8 encoded text."""

    def __init__(self, text: str, content_type: Optional[str] = "text/plain; charset=utf-8") -> None:
        super().__init__(text.encode("utf-8"), content_type=content_type)


class InputStreamEntity:
    """Non-repeatable entity over a stream that can only be read once."""

    repeatable = False

    def __init__(
        self,
        stream: BinaryIO,
        content_length: int = UNKNOWN_LENGTH,
        content_type: Optional[str] = None,
        content_encoding: Optional[str] = None,
    ) -> None:
        self._stream = stream
        self._consumed = False
        self.content_length = content_length
        self.content_type = content_type
        self.content_encoding = content_encoding

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={self.content_length}, consumed={self._consumed})"

    def get_content(self) -> BinaryIO:
        if self._consumed:
            raise EntityConsumedError("Entity content has already been consumed")
        self._consumed = True
        return self._stream
