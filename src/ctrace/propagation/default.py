"""
Default ``ct-*`` propagator used for HTTP headers and text maps.
"""

from typing import Any, Dict, Mapping, Optional

from ..core.context import SpanContext
from ..types import Carrier
from .base import FORMAT_HTTP_HEADERS, FORMAT_TEXT_MAP, PropagatorRegistry

TRACE_ID_KEY = "ct-trace-id"
SPAN_ID_KEY = "ct-span-id"
BAGGAGE_PREFIX = "ct-bag-"


class CtracePropagator:
    """
    Carries a context as flat ``ct-*`` keys.

    ``ct-trace-id`` and ``ct-span-id`` hold the identifiers and each
    baggage item is written as ``ct-bag-<key>`` with the key verbatim.
    """

    def inject(self, context: SpanContext, carrier: Carrier) -> None:
        if context.trace_id is not None:
            carrier[TRACE_ID_KEY] = context.trace_id
        if context.span_id is not None:
            carrier[SPAN_ID_KEY] = context.span_id
        for key, value in (context.baggage or {}).items():
            carrier[BAGGAGE_PREFIX + key] = value

    def extract(self, carrier: Mapping[str, Any]) -> Optional[SpanContext]:
        trace_id = carrier.get(TRACE_ID_KEY)
        span_id = carrier.get(SPAN_ID_KEY)
        # Both ids must be non-empty so that chains can fall through to
        # custom propagators on partial carriers.
        if not trace_id or not span_id:
            return None

        baggage: Dict[str, str] = {
            key[len(BAGGAGE_PREFIX):]: value
            for key, value in carrier.items()
            if key.startswith(BAGGAGE_PREFIX)
        }
        return SpanContext(trace_id=trace_id, span_id=span_id, baggage=baggage)


DEFAULT_FORMATS = (FORMAT_HTTP_HEADERS, FORMAT_TEXT_MAP)


def default_registry() -> PropagatorRegistry:
    """A fresh registry holding only the built-in propagators."""
    registry = PropagatorRegistry()
    propagator = CtracePropagator()
    for fmt in DEFAULT_FORMATS:
        registry.register(fmt, propagator)
    return registry
