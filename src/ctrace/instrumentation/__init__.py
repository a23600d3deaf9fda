"""
Instrumentation helpers for the ctrace SDK.
"""

from .decorators import trace_function

__all__ = ["trace_function"]
