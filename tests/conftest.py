"""
Pytest configuration and shared fixtures for ctrace tests.
"""

import json

import pytest

import ctrace
from ctrace import Tracer, TracerConfig


class RecordingStream:
    """Stream that keeps every write for inspection."""

    def __init__(self):
        self.buf = []

    def write(self, data):
        self.buf.append(data)

    def records(self):
        """Parse every write as one JSON record."""
        return [json.loads(item) for item in self.buf]

    def clear(self):
        self.buf.clear()


@pytest.fixture
def stream():
    """Provide a recording stream for testing."""
    return RecordingStream()


@pytest.fixture
def tracer_config(stream):
    """Provide a single-event tracer configuration."""
    return TracerConfig(stream=stream)


@pytest.fixture
def tracer(tracer_config):
    """Provide a test tracer instance."""
    return Tracer(tracer_config)


@pytest.fixture(autouse=True)
def clean_global_state(monkeypatch):
    """Ensure each test starts without a global tracer or env overrides."""
    monkeypatch.delenv("CTRACE_DEBUG", raising=False)
    monkeypatch.delenv("CTRACE_MULTI_EVENT", raising=False)
    ctrace.shutdown()
    yield
    ctrace.shutdown()
