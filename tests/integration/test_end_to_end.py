"""
End-to-end tests: a trace crossing a simulated service boundary.
"""

import pytest

import ctrace
from ctrace import FORMAT_HTTP_HEADERS, SpanContext, Tracer

pytestmark = pytest.mark.integration


class TestEndToEnd:
    """Test a trace spanning a client and a server tracer."""

    def test_trace_crosses_boundary(self, stream):
        client = Tracer(stream=stream)
        server = Tracer(stream=stream)

        request_span = client.start_span("http-request", tags={"http.method": "GET"})
        request_span.set_baggage_item("tenant", "acme")
        headers = {}
        client.inject(request_span, FORMAT_HTTP_HEADERS, headers)

        incoming = server.extract(FORMAT_HTTP_HEADERS, headers)
        handler_span = server.start_span("handle-request", child_of=incoming)
        server.info({"span": handler_span}, "Handled", {"status": 200})
        handler_span.finish()
        request_span.finish()

        handler, request = stream.records()
        assert handler["traceId"] == request["traceId"]
        assert handler["parentId"] == request["spanId"]
        assert handler["baggage"] == {"tenant": "acme"}
        assert handler["logs"][1]["status"] == 200
        assert request["tags"] == {"http.method": "GET"}

    def test_root_request_without_incoming_context(self, stream):
        ctrace.init(stream=stream)

        incoming = ctrace.extract(FORMAT_HTTP_HEADERS, {"accept": "text/html"})
        span = ctrace.start_span("handle-request", child_of=incoming)

        assert incoming is None
        assert span.parent_id is None

    def test_correlation_id_fallback(self, stream):
        ctrace.init(
            stream=stream,
            propagators={
                FORMAT_HTTP_HEADERS: [
                    ctrace.Propagator(
                        extract=lambda carrier: SpanContext(
                            trace_id=carrier["x-correlation-id"],
                            span_id=carrier["x-correlation-id"],
                        )
                        if "x-correlation-id" in carrier
                        else None,
                        inject=lambda ctx, carrier: carrier.update(
                            {"x-correlation-id": ctx.trace_id}
                        ),
                    )
                ]
            },
        )

        incoming = ctrace.extract(FORMAT_HTTP_HEADERS, {"x-correlation-id": "corr123"})
        span = ctrace.start_span("legacy-call", child_of=incoming)
        outgoing = {}
        ctrace.inject(span, FORMAT_HTTP_HEADERS, outgoing)

        assert span.trace_id == "corr123"
        assert span.parent_id == "corr123"
        assert outgoing["ct-trace-id"] == "corr123"
        assert outgoing["ct-span-id"] == span.span_id
        assert outgoing["x-correlation-id"] == "corr123"

    def test_multi_event_stream_of_snapshots(self, stream):
        ctrace.init(stream=stream, multi_event=True)

        parent = ctrace.start_span("parent")
        child = ctrace.start_span("child", child_of=parent)
        assert len(stream.buf) == 2

        child.finish()
        parent.finish()

        span_ids = [record["spanId"] for record in stream.records()]
        assert span_ids == [parent.span_id, child.span_id, child.span_id, parent.span_id]
