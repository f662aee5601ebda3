"""Pytest configuration and fixtures for body capture tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

CAPTURE_ENV_VARS = [
    "BODYCAPTURE_CAPTURE_REQUEST_BODY",
    "BODYCAPTURE_CAPTURE_RESPONSE_BODY",
    "BODYCAPTURE_MAX_BODY_SIZE",
    "BODYCAPTURE_CONFIG_FILE",
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove capture environment variables for the duration of a test."""
    original_env = {k: os.environ.get(k) for k in CAPTURE_ENV_VARS}
    for var in CAPTURE_ENV_VARS:
        os.environ.pop(var, None)
    yield
    for var, value in original_env.items():
        if value is not None:
            os.environ[var] = value
        else:
            os.environ.pop(var, None)


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    """Fresh in-memory exporter receiving every finished span."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> TracerProvider:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return provider
