"""
Span context: the part of a span that crosses process boundaries.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass
class SpanContext:
    """Trace, span and parent identifiers plus baggage."""

    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    parent_id: Optional[str] = None
    baggage: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SpanContext":
        """
        Build a context from a mapping.

        Accepts both the camelCase keys used on the wire and in reports
        (``traceId``) and the attribute names (``trace_id``).
        """

        def pick(camel: str, snake: str) -> Any:
            return data.get(camel, data.get(snake))

        return cls(
            trace_id=pick("traceId", "trace_id"),
            span_id=pick("spanId", "span_id"),
            parent_id=pick("parentId", "parent_id"),
            baggage=dict(data.get("baggage") or {}),
        )

    def child(self, span_id: str) -> "SpanContext":
        """Derive the context of a child span with its own baggage copy."""
        return SpanContext(
            trace_id=self.trace_id,
            span_id=span_id,
            parent_id=self.span_id,
            baggage=dict(self.baggage),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "traceId": self.trace_id,
            "spanId": self.span_id,
        }
        if self.parent_id is not None:
            result["parentId"] = self.parent_id
        result["baggage"] = dict(self.baggage)
        return result

    @property
    def is_valid(self) -> bool:
        return bool(self.trace_id and self.span_id)
