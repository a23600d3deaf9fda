"""
Span output for the ctrace SDK.
"""

from .encoder import JsonEncoder
from .reporter import Encoder, Reporter, Stream

__all__ = [
    "Encoder",
    "JsonEncoder",
    "Reporter",
    "Stream",
]
