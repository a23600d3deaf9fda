"""
Basic usage example for the ctrace SDK.

Simulates a client calling a server: the client injects its span
context into request headers, the server extracts it and continues the
trace. Every finished span is printed to stdout as one JSON line.
"""

import ctrace
from ctrace import FORMAT_HTTP_HEADERS, trace_function


@trace_function(
    name="render-invoice",
    child_of=lambda order_id, parent, span=None: parent,
)
def render_invoice(order_id, parent, span=None):
    span.set_tag("order.id", order_id)
    return f"<invoice {order_id}>"


def handle_request(headers):
    """Server side: continue the caller's trace."""
    incoming = ctrace.extract(FORMAT_HTTP_HEADERS, headers)
    with ctrace.start_span("GET /invoice", child_of=incoming) as span:
        ctrace.info({"span": span}, "Request-Received", {"path": "/invoice"})
        ctrace.debug({"span": span}, "Headers", {"headers": dict(headers)})
        return render_invoice("o-123", span)


def main():
    """Run basic usage example."""
    ctrace.init(debug=False)

    with ctrace.start_span("checkout", tags={"component": "web"}) as span:
        span.set_baggage_item("tenant", "acme")
        headers = {}
        ctrace.inject(span, FORMAT_HTTP_HEADERS, headers)
        handle_request(headers)

    ctrace.shutdown()


if __name__ == "__main__":
    main()
