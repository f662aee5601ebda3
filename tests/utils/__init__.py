"""Test utilities for body capture."""

from .helpers import FailingStream, StubTransport, TrackingStream, make_session

__all__ = [
    "FailingStream",
    "StubTransport",
    "TrackingStream",
    "make_session",
]
