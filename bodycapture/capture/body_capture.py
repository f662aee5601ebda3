"""Bounded capture of HTTP entity bodies as text."""

from __future__ import annotations

import codecs
import logging
from contextlib import closing
from typing import Optional

from ..core.config import CaptureConfig
from ..core.types import TRUNCATION_MARKER, CapturedBody, CaptureResult, Entity
from .bounded_reader import read_bounded
from .repeatable import RepeatableEntityAdapter

logger = logging.getLogger(__name__)

BODY_ENCODING = "utf-8"


def decode_body(data: bytes, truncated: bool) -> str:
    """Decode captured bytes as UTF-8.

    Invalid bytes become replacement characters. When the data was cut at
    the size limit, a trailing incomplete character is dropped instead.
    """
    decoder = codecs.getincrementaldecoder(BODY_ENCODING)(errors="replace")
    return decoder.decode(data, final=not truncated)


class BodyCapture:
    """Reads up to ``max_body_size`` bytes of an entity into a CapturedBody.

    Non-repeatable entities are buffered first through
    RepeatableEntityAdapter; the buffered copy is handed back in the
    CaptureResult and the caller is expected to install it in place of the
    original. Failures never propagate: they produce a result without a body.
    """

    def __init__(self, config: CaptureConfig, adapter: Optional[RepeatableEntityAdapter] = None) -> None:
        self._max_body_size = config.max_body_size
        self._adapter = adapter or RepeatableEntityAdapter()

    @property
    def max_body_size(self) -> int:
        return self._max_body_size

    def capture(self, entity: Optional[Entity]) -> CaptureResult:
        if entity is None:
            return CaptureResult(None, None, False)

        try:
            declared_length = entity.content_length
            if declared_length == 0:
                return CaptureResult(None, entity, False)

            observed_length = -1
            replaced = False
            if not entity.repeatable:
                result = self._adapter.make_repeatable(entity)
                entity, replaced = result.entity, result.replaced
                if replaced:
                    observed_length = result.bytes_read
        except Exception:
            logger.debug("Failed to prepare entity for capture", exc_info=True)
            return CaptureResult(None, entity, False)

        body = self._read(entity, declared_length, observed_length)
        return CaptureResult(body, entity, replaced)

    def _read(self, entity: Entity, declared_length: int, observed_length: int) -> Optional[CapturedBody]:
        limit = self._max_body_size
        try:
            with closing(entity.get_content()) as stream:
                chunk = read_bounded(stream, limit)

            if not chunk.data:
                return None

            truncated = chunk.more or declared_length > limit
            text = decode_body(chunk.data, truncated)
            if truncated:
                text += TRUNCATION_MARKER

            if declared_length >= 0:
                actual_size = declared_length
            elif observed_length >= 0:
                actual_size = observed_length
            else:
                # Unknown length on a repeatable stream: only the capped read is known
                actual_size = len(chunk.data)

            return CapturedBody(text=text, actual_size=actual_size, truncated=truncated)
        except Exception:
            logger.debug("Failed to capture entity content", exc_info=True)
            return None
