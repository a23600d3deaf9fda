"""
Span implementation for the ctrace SDK.

A span records one unit of work. It is created by
:meth:`ctrace.core.tracer.Tracer.start_span`, mutated while open and
closed exactly once by :meth:`Span.finish`.
"""

import logging
import time
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Tuple

from ..types import LogEntry, TagValue
from ..utils.exceptions import SpanError
from .context import SpanContext

if TYPE_CHECKING:
    from .tracer import Tracer

logger = logging.getLogger(__name__)

START_EVENT = "Start-Span"
FINISH_EVENT = "Finish-Span"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Span:
    """
    A single traced operation.

    Spans are not thread-safe; callers sharing a span across threads
    must coordinate access themselves.
    """

    def __init__(
        self,
        tracer: "Tracer",
        operation: str,
        context: SpanContext,
        tags: Optional[Mapping[str, TagValue]] = None,
        debug: bool = False,
        start: Optional[int] = None,
    ):
        self._tracer = tracer
        self._context = context
        self._operation = operation
        self._start = start if start is not None else now_ms()
        self._tags: Dict[str, TagValue] = dict(tags or {})
        self._logs: List[LogEntry] = []
        self._debug = bool(debug)
        self._end: Optional[int] = None

        self._logs.append(
            {"timestamp": max(now_ms(), self._start), "event": START_EVENT, "level": "info"}
        )

    # Properties

    @property
    def tracer(self) -> "Tracer":
        return self._tracer

    @property
    def context(self) -> SpanContext:
        """A copy of the span context; use set_baggage_item to change baggage."""
        return SpanContext(
            trace_id=self._context.trace_id,
            span_id=self._context.span_id,
            parent_id=self._context.parent_id,
            baggage=dict(self._context.baggage),
        )

    @property
    def trace_id(self) -> Optional[str]:
        return self._context.trace_id

    @property
    def span_id(self) -> Optional[str]:
        return self._context.span_id

    @property
    def parent_id(self) -> Optional[str]:
        return self._context.parent_id

    @property
    def baggage(self) -> Mapping[str, str]:
        return MappingProxyType(self._context.baggage)

    @property
    def operation(self) -> str:
        return self._operation

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> Optional[int]:
        return self._end

    @property
    def tags(self) -> Mapping[str, TagValue]:
        return MappingProxyType(self._tags)

    @property
    def logs(self) -> Tuple[LogEntry, ...]:
        return tuple(dict(entry) for entry in self._logs)

    @property
    def debug(self) -> bool:
        return self._debug

    @property
    def is_finished(self) -> bool:
        return self._end is not None

    @property
    def duration_ms(self) -> Optional[int]:
        if self._end is None:
            return None
        return self._end - self._start

    # Mutation

    def _check_open(self, action: str) -> None:
        if self._end is not None:
            raise SpanError(
                f"Cannot {action} on finished span '{self._operation}'",
                {"span_id": self.span_id},
            )

    def set_operation_name(self, operation: str) -> "Span":
        self._check_open("rename")
        self._operation = operation
        return self

    def set_tag(self, key: str, value: TagValue) -> "Span":
        self._check_open("set tag")
        self._tags[key] = value
        return self

    def add_tags(self, tags: Mapping[str, TagValue]) -> "Span":
        self._check_open("set tags")
        self._tags.update(tags)
        return self

    def set_baggage_item(self, key: str, value: str) -> "Span":
        """Set baggage on this span only; existing children keep their copy."""
        self._check_open("set baggage")
        self._context.baggage[key] = value
        return self

    def get_baggage_item(self, key: str) -> Optional[str]:
        return self._context.baggage.get(key)

    def log(self, fields: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "Span":
        """
        Append a log entry stamped with the current time.

        Caller fields are merged over the timestamp verbatim. No level
        filtering happens here; see the tracer's level helpers.
        """
        self._check_open("log")
        entry: LogEntry = {"timestamp": now_ms()}
        if fields:
            entry.update(fields)
        entry.update(kwargs)
        self._logs.append(entry)
        return self

    def finish(self, end: Optional[int] = None) -> None:
        """
        Close the span and hand it to the tracer for reporting.

        Raises:
            SpanError: If the span was already finished
        """
        self._check_open("finish")
        finished_at = max(end if end is not None else now_ms(), self._start)
        self._logs.append(
            {"timestamp": finished_at, "event": FINISH_EVENT, "level": "info"}
        )
        self._end = finished_at

        logger.debug(
            f"Finished span: {self._operation} "
            f"(trace_id={self.trace_id}, span_id={self.span_id}, "
            f"duration_ms={self.duration_ms})"
        )
        self._tracer.report(self)

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the span's field set, safe to keep after mutation."""
        fields = self._context.to_dict()
        fields.update(
            {
                "operation": self._operation,
                "start": self._start,
                "tags": dict(self._tags),
                "logs": [dict(entry) for entry in self._logs],
            }
        )
        if self._debug:
            fields["debug"] = True
        if self._end is not None:
            fields["end"] = self._end
            fields["duration"] = self.duration_ms
        return fields

    @property
    def fields(self) -> Dict[str, Any]:
        return self.to_dict()

    # Context manager

    def __enter__(self) -> "Span":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.is_finished:
            return
        if exc_type is not None:
            self._tracer.error(
                self,
                "Exception",
                {"errorKind": exc_type.__name__, "message": str(exc_val)},
            )
        self.finish()

    def __repr__(self) -> str:
        return (
            f"Span(operation={self._operation!r}, trace_id={self.trace_id!r}, "
            f"span_id={self.span_id!r}, finished={self.is_finished})"
        )
