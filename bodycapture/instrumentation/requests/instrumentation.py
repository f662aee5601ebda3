"""Body capture instrumentation for the requests HTTP client library."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from urllib.parse import urlparse

from opentelemetry import context as otel_context
from opentelemetry import trace
from opentelemetry.trace import SpanKind as OTelSpanKind
from opentelemetry.trace import Status, set_span_in_context
from opentelemetry.trace import StatusCode as OTelStatusCode

from ...capture.recorder import HttpEntityRecorder
from ...capture.response_handler import WrappingResponseHandler
from ...core.attributes import SpanAttributeSink
from ...core.config import CaptureConfig, load_capture_config
from ..base import InstrumentationBase
from .adapters import PreparedRequestMessage, ResponseMessage

if TYPE_CHECKING:
    from opentelemetry.trace import TracerProvider

logger = logging.getLogger(__name__)


class RequestsInstrumentation(InstrumentationBase):
    """Instrumentation for the requests HTTP client library.

    Patches requests.Session.send to:
    - Start a CLIENT span per request
    - Record the request body before it is sent
    - Buffer and record the response body before the response is returned
    """

    def __init__(
        self,
        config: Optional[CaptureConfig] = None,
        tracer_provider: Optional[TracerProvider] = None,
        enabled: bool = True,
    ) -> None:
        self._recorder = HttpEntityRecorder(config or load_capture_config())
        self._tracer = trace.get_tracer(__name__, tracer_provider=tracer_provider)
        self._original_send: Any = None
        super().__init__(
            name="RequestsInstrumentation",
            module_name="requests",
            supported_versions="*",
            enabled=enabled,
        )

    @property
    def recorder(self) -> HttpEntityRecorder:
        return self._recorder

    def patch(self, module: Any) -> None:
        """Patch the requests module."""
        if not hasattr(module, "Session"):
            logger.warning("requests.Session not found, skipping instrumentation")
            return

        original_send = module.Session.send
        instrumentation = self

        def patched_send(session_self, request, **kwargs):
            """Patched Session.send method."""
            return instrumentation._traced_send(original_send, session_self, request, **kwargs)

        self._original_send = original_send
        module.Session.send = patched_send
        logger.info("requests.Session.send instrumented")

    def unpatch(self, module: Any) -> None:
        if self._original_send is None:
            return
        module.Session.send = self._original_send
        self._original_send = None
        logger.info("requests.Session.send restored")

    def _traced_send(self, original_send, session, request, **kwargs):
        # Pass through when no body capture is configured
        if not self._recorder.config.enabled:
            return original_send(session, request, **kwargs)

        method = (request.method or "GET").upper()
        url = request.url or ""
        span_name = f"{method} {urlparse(url).path or '/'}"

        parent_context = otel_context.get_current()
        span = self._tracer.start_span(
            name=span_name,
            kind=OTelSpanKind.CLIENT,
            attributes={
                "http.request.method": method,
                "url.full": url,
            },
        )

        if not span.is_recording():
            try:
                return original_send(session, request, **kwargs)
            finally:
                span.end()

        token = otel_context.attach(set_span_in_context(span, parent_context))
        try:
            self._recorder.on_start(SpanAttributeSink(span), PreparedRequestMessage(request))
            response = original_send(session, request, **kwargs)
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(OTelStatusCode.ERROR, str(e)))
            span.end()
            raise
        finally:
            otel_context.detach(token)

        handler = WrappingResponseHandler(
            self._recorder,
            span,
            lambda message: message.response,
            parent_context,
        )
        return handler(ResponseMessage(response))
