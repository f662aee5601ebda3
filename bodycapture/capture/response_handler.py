"""Response handler wrapper that records the body before the caller reads it."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Generic, Optional, TypeVar

from opentelemetry import context as otel_context
from opentelemetry.trace import Status
from opentelemetry.trace import StatusCode as OTelStatusCode

from ..core.attributes import SpanAttributeSink
from .recorder import HttpEntityRecorder

if TYPE_CHECKING:
    from opentelemetry.context import Context
    from opentelemetry.trace import Span

logger = logging.getLogger(__name__)

M = TypeVar("M")
T = TypeVar("T")


class WrappingResponseHandler(Generic[M, T]):
    """Wraps a response handler so the span is finished before it runs.

    Order on each call:
    1. buffer the response entity if it is read-once
    2. record the response body on the span
    3. set the span status and end the span
    4. run the wrapped handler under ``parent_context``

    Work done by the handler, including nested client calls, falls outside
    the span.
    """

    def __init__(
        self,
        recorder: HttpEntityRecorder,
        span: Span,
        handler: Callable[[M], T],
        parent_context: Optional[Context] = None,
    ) -> None:
        self._recorder = recorder
        self._span = span
        self._handler = handler
        self._parent_context = parent_context

    def __call__(self, response: M) -> T:
        self._recorder.make_response_repeatable(response)
        self._recorder.on_end(SpanAttributeSink(self._span), response)
        self._finish_span(response)

        if self._parent_context is None:
            return self._handler(response)

        token = otel_context.attach(self._parent_context)
        try:
            return self._handler(response)
        finally:
            otel_context.detach(token)

    def _finish_span(self, response: M) -> None:
        try:
            status_code = getattr(response, "status_code", None)
            if isinstance(status_code, int):
                self._span.set_attribute("http.response.status_code", status_code)
                if status_code >= 400:
                    self._span.set_status(Status(OTelStatusCode.ERROR, f"HTTP {status_code}"))
        except Exception:
            logger.debug("Failed to set span status from response", exc_info=True)
        finally:
            self._span.end()
