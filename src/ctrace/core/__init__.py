"""
Core components of the ctrace SDK.
"""

from .context import SpanContext
from .span import FINISH_EVENT, START_EVENT, Span
from .tracer import Tracer, TracerConfig, get_current_tracer, set_current_tracer

__all__ = [
    # Tracer
    "Tracer",
    "TracerConfig",
    "get_current_tracer",
    "set_current_tracer",
    # Span
    "Span",
    "START_EVENT",
    "FINISH_EVENT",
    # Context
    "SpanContext",
]
