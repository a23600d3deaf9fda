"""
Shared types for the ctrace SDK.
"""

import random
import re
import string
from typing import Any, Dict, MutableMapping, Union

TagValue = Union[str, int, float, bool]
Carrier = MutableMapping[str, str]
LogEntry = Dict[str, Any]

_ALNUM = string.ascii_lowercase + string.digits
_URL_SAFE = _ALNUM + "-_"

ID_LENGTH = 16


class TraceID:
    """Trace identifier: 16 lowercase alphanumerics."""

    ALPHABET = _ALNUM
    PATTERN = re.compile(r"^[a-z0-9]{16}$")

    @classmethod
    def generate(cls) -> str:
        return "".join(random.choices(cls.ALPHABET, k=ID_LENGTH))

    @classmethod
    def is_valid(cls, value: Any) -> bool:
        return isinstance(value, str) and bool(cls.PATTERN.match(value))


class SpanID(TraceID):
    """Span identifier: 16 URL-safe characters."""

    ALPHABET = _URL_SAFE
    PATTERN = re.compile(r"^[a-z0-9_-]{16}$")


__all__ = [
    "TagValue",
    "Carrier",
    "LogEntry",
    "TraceID",
    "SpanID",
    "ID_LENGTH",
]
