"""Core module for body capture."""

from .attributes import DictAttributeSink, SpanAttributeSink
from .config import (
    DEFAULT_MAX_BODY_SIZE,
    CaptureConfig,
    find_config_file,
    load_capture_config,
    load_config_file,
)
from .entity import ByteArrayEntity, ChunkedStream, InputStreamEntity, StringEntity
from .logger import LogLevel, configure_logger, get_log_level, set_log_level
from .types import (
    TRUNCATION_MARKER,
    UNKNOWN_LENGTH,
    AttributeSink,
    CapturedBody,
    CaptureResult,
    Entity,
    EntityConsumedError,
    EntityMessage,
    HttpBodyAttributes,
    RecordResult,
    RepeatableResult,
)

__all__ = [
    # Config
    "CaptureConfig",
    "DEFAULT_MAX_BODY_SIZE",
    "load_capture_config",
    "load_config_file",
    "find_config_file",
    # Logger
    "LogLevel",
    "configure_logger",
    "set_log_level",
    "get_log_level",
    # Entities
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    "ChunkedStream",
    # Sinks
    "DictAttributeSink",
    "SpanAttributeSink",
    # Types
    "AttributeSink",
    "CapturedBody",
    "CaptureResult",
    "Entity",
    "EntityConsumedError",
    "EntityMessage",
    "HttpBodyAttributes",
    "RecordResult",
    "RepeatableResult",
    "TRUNCATION_MARKER",
    "UNKNOWN_LENGTH",
]
