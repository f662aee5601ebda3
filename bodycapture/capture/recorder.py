"""Request/response body recorder.

Exposes two hook shapes:
- before_send()/after_receive(): pure functions of an entity returning the
  attributes to record and the entity the caller must keep.
- on_start()/on_end(): framework-style callbacks that write into an
  attribute sink and swap the entity on the message when it was buffered.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.config import CaptureConfig
from ..core.types import AttributeSink, CaptureResult, Entity, EntityMessage, HttpBodyAttributes, RecordResult
from .body_capture import BodyCapture
from .repeatable import RepeatableEntityAdapter

logger = logging.getLogger(__name__)


class HttpEntityRecorder:
    """Records HTTP request and response bodies as attributes.

    The config is captured at construction time. Build a new recorder to
    pick up different settings.
    """

    def __init__(self, config: Optional[CaptureConfig] = None) -> None:
        self._config = config or CaptureConfig()
        self._adapter = RepeatableEntityAdapter()
        self._capture = BodyCapture(self._config, self._adapter)

    @property
    def config(self) -> CaptureConfig:
        return self._config

    def before_send(self, entity: Optional[Entity]) -> RecordResult:
        """Capture an outgoing request entity."""
        if not self._config.capture_request_body:
            return RecordResult({}, entity, False)
        return self._record(
            self._capture.capture(entity),
            HttpBodyAttributes.REQUEST_BODY,
            HttpBodyAttributes.REQUEST_BODY_SIZE,
        )

    def after_receive(self, entity: Optional[Entity]) -> RecordResult:
        """Capture an incoming response entity."""
        if not self._config.capture_response_body:
            return RecordResult({}, entity, False)
        return self._record(
            self._capture.capture(entity),
            HttpBodyAttributes.RESPONSE_BODY,
            HttpBodyAttributes.RESPONSE_BODY_SIZE,
        )

    def make_response_repeatable(self, message: Optional[EntityMessage]) -> None:
        """Buffer a response's entity in place before anything reads it.

        Does nothing when response capture is disabled.
        """
        if message is None or not self._config.capture_response_body:
            return
        try:
            entity = message.entity
            if entity is None or entity.repeatable:
                return
            result = self._adapter.make_repeatable(entity)
            if result.replaced:
                message.entity = result.entity
        except Exception:
            logger.debug("Failed to make response entity repeatable", exc_info=True)

    def on_start(self, attributes: AttributeSink, request: Optional[EntityMessage]) -> None:
        if not self._config.capture_request_body or request is None:
            return
        self._apply(attributes, request, self.before_send, "request")

    def on_end(
        self,
        attributes: AttributeSink,
        response: Optional[EntityMessage],
        error: Optional[BaseException] = None,
    ) -> None:
        if not self._config.capture_response_body or response is None:
            return
        self._apply(attributes, response, self.after_receive, "response")

    def _apply(self, attributes: AttributeSink, message: EntityMessage, hook: Any, direction: str) -> None:
        try:
            result = hook(getattr(message, "entity", None))
            if result.replaced:
                message.entity = result.entity
            for key, value in result.attributes.items():
                attributes.put(key, value)
        except Exception:
            logger.debug(f"Failed to record {direction} body", exc_info=True)

    @staticmethod
    def _record(result: CaptureResult, body_key: str, size_key: str) -> RecordResult:
        attributes: dict[str, Any] = {}
        if result.body is not None and result.body.text:
            attributes[body_key] = result.body.text
            attributes[size_key] = result.body.actual_size
        return RecordResult(attributes, result.entity, result.replaced)
