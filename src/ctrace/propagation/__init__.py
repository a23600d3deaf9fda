"""
Context propagation across wire boundaries.
"""

from .base import (
    FORMAT_BINARY,
    FORMAT_HTTP_HEADERS,
    FORMAT_TEXT_MAP,
    Propagator,
    PropagatorRegistry,
    as_propagator,
)
from .default import (
    BAGGAGE_PREFIX,
    SPAN_ID_KEY,
    TRACE_ID_KEY,
    CtracePropagator,
    default_registry,
)

__all__ = [
    "FORMAT_BINARY",
    "FORMAT_HTTP_HEADERS",
    "FORMAT_TEXT_MAP",
    "Propagator",
    "PropagatorRegistry",
    "as_propagator",
    "CtracePropagator",
    "default_registry",
    "TRACE_ID_KEY",
    "SPAN_ID_KEY",
    "BAGGAGE_PREFIX",
]
