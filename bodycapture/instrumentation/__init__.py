"""Instrumentation module for body capture."""

from .base import InstrumentationBase
from .registry import register_patch, unregister_patch

__all__ = [
    "InstrumentationBase",
    "register_patch",
    "unregister_patch",
]
