"""
Integration tests for global tracer initialization.
"""

import pytest

import ctrace
from ctrace import ConfigurationError

pytestmark = pytest.mark.integration


class TestInitialization:
    """Test global init patterns."""

    def test_simple_init(self, stream):
        tracer = ctrace.init(stream=stream)

        assert tracer is not None
        assert ctrace.get_tracer() is tracer
        assert tracer.debug_enabled is False
        assert tracer.multi_event is False

    def test_reinit_keeps_tracer_instance(self, stream):
        first = ctrace.init(stream=stream, debug=True)
        second = ctrace.init(stream=stream)

        assert first is second
        assert second.debug_enabled is False

    def test_init_from_env_vars(self, stream, monkeypatch):
        monkeypatch.setenv("CTRACE_DEBUG", "true")
        monkeypatch.setenv("CTRACE_MULTI_EVENT", "1")

        tracer = ctrace.init(stream=stream)

        assert tracer.debug_enabled is True
        assert tracer.multi_event is True

    def test_explicit_args_override_env(self, stream, monkeypatch):
        monkeypatch.setenv("CTRACE_DEBUG", "yes")

        assert ctrace.init(stream=stream, debug=False).debug_enabled is False

    def test_uninitialized_api_raises(self):
        assert ctrace.get_tracer() is None

        with pytest.raises(ConfigurationError):
            ctrace.start_span("op")
        with pytest.raises(ConfigurationError):
            ctrace.extract(ctrace.FORMAT_HTTP_HEADERS, {})

    def test_shutdown_clears_tracer(self, stream):
        ctrace.init(stream=stream)
        ctrace.shutdown()

        assert ctrace.get_tracer() is None

    def test_context_manager(self, stream):
        with ctrace.CtraceTrace(stream=stream, multi_event=True) as tracer:
            assert ctrace.get_tracer() is tracer
            ctrace.start_span("inside")
            assert len(stream.buf) == 1

        assert ctrace.get_tracer() is None

    def test_configure_alias(self, stream):
        assert ctrace.configure(stream=stream) is ctrace.get_tracer()

    def test_level_helpers_follow_reinit(self, stream):
        ctrace.init(stream=stream, debug=False)
        span = ctrace.start_span("op")
        ctrace.debug({"span": span}, "Hidden")

        ctrace.init(stream=stream, debug=True)
        ctrace.debug({"span": span}, "Shown")
        ctrace.info({"span": span}, "Info")
        ctrace.warn({"span": span}, "Warn")
        ctrace.error({"span": span}, "Error")

        events = [log["event"] for log in span.logs]
        assert events == ["Start-Span", "Shown", "Info", "Warn", "Error"]
