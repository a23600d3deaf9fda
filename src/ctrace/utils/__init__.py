"""
Utility modules for the ctrace SDK.
"""

from .exceptions import (
    ConfigurationError,
    CtraceError,
    PropagationError,
    SpanError,
)

__all__ = [
    "CtraceError",
    "ConfigurationError",
    "SpanError",
    "PropagationError",
]
