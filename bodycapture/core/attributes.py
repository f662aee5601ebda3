"""Attribute sinks that receive captured body attributes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import AttributeValue

if TYPE_CHECKING:
    from opentelemetry.trace import Span


class DictAttributeSink(dict):
    """Plain dict that collects attributes via put()."""

    def put(self, key: str, value: AttributeValue) -> None:
        self[key] = value


class SpanAttributeSink:
    """Writes attributes onto an OpenTelemetry span."""

    def __init__(self, span: Span) -> None:
        self._span = span

    def put(self, key: str, value: AttributeValue) -> None:
        self._span.set_attribute(key, value)
