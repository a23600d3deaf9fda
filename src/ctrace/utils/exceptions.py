"""
Exceptions raised by the ctrace SDK.
"""

from typing import Any, Dict, Optional


class CtraceError(Exception):
    """Base class for all ctrace errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigurationError(CtraceError):
    """Invalid tracer configuration or use of an uninitialized tracer."""


class SpanError(CtraceError):
    """Operation not allowed in the span's current lifecycle state."""


class PropagationError(CtraceError):
    """Malformed propagator registered for a wire format."""
