from .adapters import PreparedRequestEntity, PreparedRequestMessage, ResponseEntity, ResponseMessage
from .instrumentation import RequestsInstrumentation

__all__ = [
    "RequestsInstrumentation",
    "PreparedRequestEntity",
    "PreparedRequestMessage",
    "ResponseEntity",
    "ResponseMessage",
]
