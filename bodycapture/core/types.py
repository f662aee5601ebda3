"""Core types and data structures for HTTP body capture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, BinaryIO, NamedTuple, Optional, Protocol, Union

TRUNCATION_MARKER = "... (truncated)"

# Length reported by entities whose size is not known up front (chunked, streamed)
UNKNOWN_LENGTH = -1

AttributeValue = Union[str, int]


class HttpBodyAttributes:
    """Span attribute keys written by the body recorder."""

    REQUEST_BODY = "http.request.body"
    REQUEST_BODY_SIZE = "http.request.body.size"
    RESPONSE_BODY = "http.response.body"
    RESPONSE_BODY_SIZE = "http.response.body.size"


class EntityConsumedError(IOError):
    """Raised when the content of a read-once entity is requested twice."""


class Entity(Protocol):
    """An HTTP message payload.

    Attributes:
        content_length: Declared length in bytes, or -1 when unknown
        repeatable: Whether get_content() may be called more than once
        content_type: Content-Type metadata, if any
        content_encoding: Content-Encoding metadata, if any
    """

    content_length: int
    repeatable: bool
    content_type: Optional[str]
    content_encoding: Optional[str]

    def get_content(self) -> BinaryIO: ...


class EntityMessage(Protocol):
    """A request or response that owns an entity which may be swapped."""

    entity: Optional[Entity]


class AttributeSink(Protocol):
    def put(self, key: str, value: AttributeValue) -> None: ...


@dataclass(frozen=True)
class CapturedBody:
    """Bounded text rendering of an entity.

    ``actual_size`` is the real length of the payload, which is larger than
    the captured text whenever ``truncated`` is set.
    """

    text: str
    actual_size: int
    truncated: bool = False


class CaptureResult(NamedTuple):
    """Outcome of capturing an entity.

    ``entity`` is the entity callers must keep using. When ``replaced`` is
    true it is a buffered copy and the original stream has been drained.
    """

    body: Optional[CapturedBody]
    entity: Optional[Entity]
    replaced: bool = False


class RepeatableResult(NamedTuple):
    entity: Entity
    bytes_read: int
    replaced: bool


class RecordResult(NamedTuple):
    """Attributes recorded for one direction plus the entity to keep."""

    attributes: dict[str, Any]
    entity: Optional[Entity]
    replaced: bool = False
