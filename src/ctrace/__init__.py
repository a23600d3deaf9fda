"""
ctrace SDK

A distributed-tracing client: spans linked into trace trees across
process boundaries, serialized as JSON lines to a stream.

Quick Start:
    ```python
    import ctrace

    ctrace.init()

    span = ctrace.start_span("handle-request")
    headers = {}
    ctrace.inject(span, ctrace.FORMAT_HTTP_HEADERS, headers)
    ctrace.info({"span": span}, "Request-Sent", {"url": "/orders"})
    span.finish()
    ```
"""

__version__ = "0.1.0"

# Core components
from .core.context import SpanContext
from .core.span import Span
from .core.tracer import Tracer, TracerConfig

# Simplified API
from .init import (
    CtraceTrace,
    configure,
    debug,
    error,
    extract,
    get_tracer,
    info,
    init,
    inject,
    shutdown,
    start_span,
    warn,
)

# Instrumentation
from .instrumentation.decorators import trace_function

# Propagation
from .propagation import (
    FORMAT_BINARY,
    FORMAT_HTTP_HEADERS,
    FORMAT_TEXT_MAP,
    CtracePropagator,
    Propagator,
    PropagatorRegistry,
)

# Output
from .sinks import JsonEncoder, Reporter

# Exceptions
from .utils.exceptions import (
    ConfigurationError,
    CtraceError,
    PropagationError,
    SpanError,
)

__all__ = [
    # Simplified API
    "init",
    "configure",
    "get_tracer",
    "shutdown",
    "start_span",
    "inject",
    "extract",
    "debug",
    "info",
    "warn",
    "error",
    "CtraceTrace",
    # Core components
    "Tracer",
    "TracerConfig",
    "Span",
    "SpanContext",
    # Propagation
    "FORMAT_HTTP_HEADERS",
    "FORMAT_TEXT_MAP",
    "FORMAT_BINARY",
    "Propagator",
    "PropagatorRegistry",
    "CtracePropagator",
    # Output
    "JsonEncoder",
    "Reporter",
    # Instrumentation
    "trace_function",
    # Exceptions
    "CtraceError",
    "ConfigurationError",
    "SpanError",
    "PropagationError",
]
