"""Entity views over requests' PreparedRequest and Response objects.

Each message wrapper exposes an ``entity`` attribute. Reading it adapts the
current body; assigning a buffered entity installs its bytes back onto the
underlying requests object so later readers see the full content.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, BinaryIO, Optional

from ...core.entity import ByteArrayEntity, ChunkedStream, iter_file_chunks
from ...core.types import UNKNOWN_LENGTH, Entity

if TYPE_CHECKING:
    from requests import PreparedRequest, Response

STREAM_CHUNK_SIZE = 8192


def _declared_length(headers: Any) -> int:
    value = headers.get("Content-Length") if headers is not None else None
    if value is None:
        return UNKNOWN_LENGTH
    try:
        length = int(value)
    except (TypeError, ValueError):
        return UNKNOWN_LENGTH
    return length if length >= 0 else UNKNOWN_LENGTH


def _entity_bytes(entity: Entity) -> bytes:
    if isinstance(entity, ByteArrayEntity):
        return entity.content
    with entity.get_content() as stream:
        return stream.read()


class PreparedRequestEntity:
    """A PreparedRequest body.

    ``bytes`` and ``str`` bodies are repeatable. File objects and iterables
    (generators, chunk lists) are read once.
    """

    def __init__(self, request: PreparedRequest) -> None:
        self._request = request
        self._body = request.body
        self.repeatable = isinstance(self._body, (bytes, bytearray, str))
        self.content_type = request.headers.get("Content-Type")
        self.content_encoding = request.headers.get("Content-Encoding")

    @property
    def content_length(self) -> int:
        length = _declared_length(self._request.headers)
        if length == UNKNOWN_LENGTH and isinstance(self._body, (bytes, bytearray)):
            return len(self._body)
        return length

    def get_content(self) -> BinaryIO:
        body = self._body
        if isinstance(body, str):
            return io.BytesIO(body.encode("utf-8"))
        if isinstance(body, (bytes, bytearray)):
            return io.BytesIO(bytes(body))
        if hasattr(body, "read"):
            return ChunkedStream(iter_file_chunks(body, STREAM_CHUNK_SIZE))
        return ChunkedStream(body)


class ResponseEntity:
    """A Response body.

    Repeatable once requests has loaded the content (the default
    ``stream=False``). With ``stream=True`` the raw stream is read once.
    """

    def __init__(self, response: Response) -> None:
        self._response = response
        self.content_type = response.headers.get("Content-Type")
        self.content_encoding = response.headers.get("Content-Encoding")

    @property
    def repeatable(self) -> bool:
        return self._response._content is not False

    @property
    def decoded(self) -> bool:
        """True when urllib3 decompresses the body, so Content-Length is the wire size."""
        encoding = (self.content_encoding or "").strip().lower()
        return encoding not in ("", "identity")

    @property
    def content_length(self) -> int:
        if not self.repeatable:
            return UNKNOWN_LENGTH if self.decoded else _declared_length(self._response.headers)

        content = self._response._content
        if not content:
            return 0
        if self.decoded:
            return len(content)
        # Loaded content of a chunked response: its size is known now
        declared = _declared_length(self._response.headers)
        return declared if declared != UNKNOWN_LENGTH else len(content)

    def get_content(self) -> BinaryIO:
        if self.repeatable:
            return io.BytesIO(self._response._content or b"")
        return ChunkedStream(self._response.iter_content(chunk_size=STREAM_CHUNK_SIZE))


class PreparedRequestMessage:
    """Outgoing request whose body can be swapped for a buffered one."""

    def __init__(self, request: PreparedRequest) -> None:
        self.request = request

    @property
    def entity(self) -> Optional[Entity]:
        if self.request.body is None:
            return None
        return PreparedRequestEntity(self.request)

    @entity.setter
    def entity(self, entity: Optional[Entity]) -> None:
        if entity is None:
            return
        body = _entity_bytes(entity)
        self.request.body = body
        self.request.headers.pop("Transfer-Encoding", None)
        self.request.headers["Content-Length"] = str(len(body))


class ResponseMessage:
    """Received response whose body can be replaced by a buffered copy."""

    def __init__(self, response: Response) -> None:
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def entity(self) -> Optional[Entity]:
        return ResponseEntity(self.response)

    @entity.setter
    def entity(self, entity: Optional[Entity]) -> None:
        if entity is None:
            return
        self.response._content = _entity_bytes(entity)
        self.response._content_consumed = True
