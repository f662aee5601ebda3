"""HTTP entity body capture for OpenTelemetry client spans."""

from .capture import (
    BodyCapture,
    HttpEntityRecorder,
    RepeatableEntityAdapter,
    WrappingResponseHandler,
)
from .core import (
    ByteArrayEntity,
    CaptureConfig,
    CapturedBody,
    CaptureResult,
    DictAttributeSink,
    Entity,
    EntityConsumedError,
    HttpBodyAttributes,
    InputStreamEntity,
    SpanAttributeSink,
    StringEntity,
    TRUNCATION_MARKER,
    load_capture_config,
)
from .core.logger import LogLevel, configure_logger, get_log_level, set_log_level
from .instrumentation.requests import RequestsInstrumentation
from .version import __version__

__all__ = [
    # Capture
    "BodyCapture",
    "HttpEntityRecorder",
    "RepeatableEntityAdapter",
    "WrappingResponseHandler",
    # Config
    "CaptureConfig",
    "load_capture_config",
    # Types
    "CapturedBody",
    "CaptureResult",
    "Entity",
    "EntityConsumedError",
    "HttpBodyAttributes",
    "TRUNCATION_MARKER",
    # Entities
    "ByteArrayEntity",
    "StringEntity",
    "InputStreamEntity",
    # Sinks
    "DictAttributeSink",
    "SpanAttributeSink",
    # Logger
    "LogLevel",
    "configure_logger",
    "set_log_level",
    "get_log_level",
    # Instrumentations
    "RequestsInstrumentation",
    "__version__",
]
