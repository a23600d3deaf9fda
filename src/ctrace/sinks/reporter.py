"""
Stream reporter for the ctrace SDK.
"""

import sys
from typing import Any, Dict, Optional, Protocol


class Encoder(Protocol):
    def encode(self, fields: Dict[str, Any]) -> Any: ...


class Stream(Protocol):
    def write(self, data: Any) -> Any: ...


class Reporter:
    """
    Writes encoded span records to a stream.

    There is no batching and no retry: a failing write propagates to
    the caller of :meth:`report`.
    """

    def __init__(self, encoder: Encoder, stream: Optional[Stream] = None):
        self.encoder = encoder
        self.stream = stream if stream is not None else sys.stdout

    def report(self, fields: Dict[str, Any]) -> None:
        encoded = self.encoder.encode(fields)
        self.stream.write(encoded)

        flush = getattr(self.stream, "flush", None)
        if callable(flush):
            flush()
