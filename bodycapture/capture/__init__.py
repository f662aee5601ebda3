"""Body capture components."""

from .body_capture import BodyCapture, decode_body
from .bounded_reader import BoundedRead, read_bounded
from .recorder import HttpEntityRecorder
from .repeatable import RepeatableEntityAdapter
from .response_handler import WrappingResponseHandler

__all__ = [
    "BodyCapture",
    "BoundedRead",
    "HttpEntityRecorder",
    "RepeatableEntityAdapter",
    "WrappingResponseHandler",
    "decode_body",
    "read_bounded",
]
