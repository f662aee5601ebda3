"""Common test utilities for body capture tests."""

from __future__ import annotations

import io
from typing import Any

import requests
import urllib3
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


class FailingStream(io.RawIOBase):
    """Binary stream that yields ``payload`` and then raises OSError."""

    def __init__(self, payload: bytes = b"partial", error: Exception | None = None):
        self._payload = payload
        self._error = error or OSError("connection reset by peer")
        self.reads = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        self.reads += 1
        if self._payload:
            size = min(len(buffer), len(self._payload))
            buffer[:size] = self._payload[:size]
            self._payload = self._payload[size:]
            return size
        raise self._error


class TrackingStream(io.BytesIO):
    """BytesIO that remembers whether it was closed."""

    def __init__(self, data: bytes = b""):
        super().__init__(data)
        self.was_closed = False

    def close(self) -> None:
        self.was_closed = True
        super().close()


class StubTransport(BaseAdapter):
    """In-process transport adapter that serves canned responses.

    Every PreparedRequest it receives is kept in ``requests`` so tests can
    check exactly what would have gone over the wire.
    With ``decode_content`` the body is served through a urllib3 response, so
    a ``Content-Encoding`` header makes requests decompress it.
    """

    def __init__(
        self,
        body: bytes = b"",
        status_code: int = 200,
        headers: dict[str, str] | None = None,
        error: Exception | None = None,
        include_length: bool = True,
        decode_content: bool = False,
    ):
        super().__init__()
        self.body = body
        self.status_code = status_code
        self.headers = dict(headers or {})
        self.error = error
        self.include_length = include_length
        self.decode_content = decode_content
        self.requests: list[requests.PreparedRequest] = []
        self.sent_bodies: list[Any] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        self.sent_bodies.append(_drain(request.body))
        if self.error is not None:
            raise self.error

        response = requests.Response()
        response.status_code = self.status_code
        response.reason = "OK" if self.status_code < 400 else "Error"
        response.headers = CaseInsensitiveDict(self.headers)
        if self.include_length:
            response.headers.setdefault("Content-Length", str(len(self.body)))
        response.raw = self._raw(response.headers)
        response.url = request.url
        response.request = request
        response.encoding = "utf-8"
        return response

    def _raw(self, headers):
        if not self.decode_content:
            return io.BytesIO(self.body)
        return urllib3.HTTPResponse(
            body=io.BytesIO(self.body),
            headers=dict(headers),
            status=self.status_code,
            preload_content=False,
            decode_content=True,
        )

    def close(self) -> None:
        pass


def _drain(body: Any) -> Any:
    if body is None or isinstance(body, (bytes, str)):
        return body
    if hasattr(body, "read"):
        return body.read()
    return b"".join(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8") for chunk in body)


def make_session(transport: StubTransport) -> requests.Session:
    session = requests.Session()
    session.trust_env = False
    session.mount("http://stub.test", transport)
    return session
