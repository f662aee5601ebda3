"""Conversion of read-once entities into buffered, repeatable ones."""

from __future__ import annotations

import logging
from contextlib import closing

from ..core.entity import ByteArrayEntity
from ..core.types import Entity, RepeatableResult

logger = logging.getLogger(__name__)

MATERIALIZE_CHUNK_SIZE = 8192


class RepeatableEntityAdapter:
    """Buffers a non-repeatable entity so every later reader sees the same bytes.

    The whole stream is read regardless of any capture limit, since the
    buffered copy replaces the original for the application as well.
    """

    def __init__(self, chunk_size: int = MATERIALIZE_CHUNK_SIZE) -> None:
        self._chunk_size = chunk_size

    def make_repeatable(self, entity: Entity) -> RepeatableResult:
        """Return a repeatable equivalent of ``entity``.

        Repeatable entities come back unchanged. If reading fails part way,
        the original entity is returned with ``replaced=False``.
        """
        if entity.repeatable:
            return RepeatableResult(entity, 0, False)

        buffer = bytearray()
        try:
            with closing(entity.get_content()) as stream:
                while True:
                    chunk = stream.read(self._chunk_size)
                    if not chunk:
                        break
                    buffer += chunk
        except Exception:
            logger.debug(
                f"Failed to make entity repeatable after {len(buffer)} bytes, keeping original",
                exc_info=True,
            )
            return RepeatableResult(entity, 0, False)

        replacement = ByteArrayEntity(
            bytes(buffer),
            content_type=entity.content_type,
            content_encoding=entity.content_encoding,
        )
        logger.debug(f"Buffered non-repeatable entity ({len(buffer)} bytes)")
        return RepeatableResult(replacement, len(buffer), True)
