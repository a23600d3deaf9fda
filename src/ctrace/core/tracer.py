"""
Main tracer implementation for the ctrace SDK.

The tracer owns the configuration (output stream, encoder, debug flag,
emission mode and propagator registry), creates spans, applies the
debug admission rule when reporting, and moves span contexts across
wire boundaries through the propagator registry.
"""

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from ..propagation import PropagatorRegistry, default_registry
from ..sinks import Encoder, JsonEncoder, Reporter, Stream
from ..types import Carrier, SpanID, TagValue, TraceID
from ..utils.exceptions import ConfigurationError, SpanError
from .context import SpanContext
from .span import Span

logger = logging.getLogger(__name__)

LEVEL_DEBUG = "debug"
LEVEL_INFO = "info"
LEVEL_WARN = "warn"
LEVEL_ERROR = "error"


@dataclass
class TracerConfig:
    """Configuration for the ctrace tracer."""

    # Output
    stream: Optional[Stream] = None
    encoder: Optional[Encoder] = None

    # Behaviour flags
    debug: bool = False
    multi_event: bool = False

    # Custom propagators per format, appended after the built-in ones
    propagators: Mapping[str, Iterable[Any]] = field(default_factory=dict)


_CONFIG_OPTIONS = frozenset(TracerConfig.__dataclass_fields__)


class Tracer:
    """
    Span factory and propagation entry point.

    Configuration is replaced wholesale by :meth:`init`. Spans keep a
    reference to their tracer and read its flags when they need them,
    so re-initializing changes behaviour for subsequent calls on live
    spans too. No locking is done; configure the tracer before span
    traffic starts.
    """

    def __init__(self, config: Optional[TracerConfig] = None, **options: Any):
        self.init(config, **options)

    def init(self, config: Optional[TracerConfig] = None, **options: Any) -> "Tracer":
        """
        Replace the tracer configuration.

        Args:
            config: Complete configuration; mutually exclusive with options
            **options: TracerConfig fields (stream, encoder, debug,
                multi_event, propagators)

        Raises:
            ConfigurationError: On unknown options or malformed propagators
        """
        if config is not None and options:
            raise ConfigurationError("Pass either a TracerConfig or keyword options, not both")

        unknown = set(options) - _CONFIG_OPTIONS
        if unknown:
            raise ConfigurationError(
                "Unknown tracer options", {"options": sorted(unknown)}
            )

        config = config if config is not None else TracerConfig(**options)
        self._validate_config(config)

        registry = default_registry()
        registry.register_all(config.propagators)

        self.config = config
        self._registry = registry
        self._reporter = Reporter(
            config.encoder if config.encoder is not None else JsonEncoder(),
            config.stream if config.stream is not None else sys.stdout,
        )

        logger.info(
            f"Tracer initialized (debug={config.debug}, multi_event={config.multi_event}, "
            f"formats={registry.formats()})"
        )
        return self

    def _validate_config(self, config: TracerConfig) -> None:
        if not isinstance(config.propagators, Mapping):
            raise ConfigurationError(
                "propagators must be a mapping of format to propagator sequence",
                {"type": type(config.propagators).__name__},
            )
        for fmt, entries in config.propagators.items():
            if isinstance(entries, (str, bytes, Mapping)) or not isinstance(entries, Iterable):
                raise ConfigurationError(
                    f"propagators for format '{fmt}' must be a sequence",
                    {"type": type(entries).__name__},
                )

    # Configuration accessors

    @property
    def debug_enabled(self) -> bool:
        return bool(self.config.debug)

    @property
    def multi_event(self) -> bool:
        return bool(self.config.multi_event)

    @property
    def registry(self) -> PropagatorRegistry:
        return self._registry

    @property
    def reporter(self) -> Reporter:
        return self._reporter

    # Span lifecycle

    def start_span(
        self,
        operation: str,
        child_of: Optional[Union[Span, SpanContext]] = None,
        tags: Optional[Mapping[str, TagValue]] = None,
        debug: bool = False,
    ) -> Span:
        """
        Start a new span.

        Args:
            operation: Operation name
            child_of: Parent span or span context
            tags: Initial span tags
            debug: Withhold the span unless the tracer runs in debug mode

        Returns:
            New Span instance
        """
        parent = child_of.context if isinstance(child_of, Span) else child_of
        span_id = SpanID.generate()

        if parent is not None and parent.trace_id:
            context = parent.child(span_id)
        else:
            context = SpanContext(trace_id=TraceID.generate(), span_id=span_id)

        span = Span(self, operation, context, tags=tags, debug=debug)

        logger.debug(
            f"Started span: {operation} (trace_id={context.trace_id}, "
            f"span_id={span_id}, parent_id={context.parent_id})"
        )

        if self.multi_event:
            self.report(span)

        return span

    def is_admitted(self, span: Span) -> bool:
        """Debug spans are only emitted while the tracer is in debug mode."""
        return not (span.debug and not self.debug_enabled)

    def report(self, span: Span) -> None:
        """Report the span's current field set if admitted."""
        if not self.is_admitted(span):
            logger.debug(f"Withholding debug span: {span.operation} (span_id={span.span_id})")
            return
        self._reporter.report(span.to_dict())

    # Propagation

    def inject(
        self,
        context: Union[Span, SpanContext, Mapping[str, Any]],
        fmt: str,
        carrier: Carrier,
    ) -> None:
        """Write the context into the carrier using every injector for fmt."""
        if isinstance(context, Span):
            context = context.context
        elif isinstance(context, Mapping):
            context = SpanContext.from_dict(context)
        self._registry.inject(context, fmt, carrier)

    def extract(self, fmt: str, carrier: Carrier) -> Optional[SpanContext]:
        """Read a context from the carrier; ``None`` means no incoming context."""
        return self._registry.extract(fmt, carrier)

    # Level helpers

    def log(
        self,
        level: str,
        holder: Any,
        event: str,
        data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Append a levelled log entry to the holder's span.

        Debug entries are dropped unless the tracer's debug flag is set
        at call time. The holder is validated for every level, so an
        invalid holder or a finished span raises even when the entry
        would be dropped.

        Raises:
            SpanError: If the holder has no span or the span is finished
        """
        span = _resolve_span(holder)
        if span.is_finished:
            raise SpanError(
                f"Cannot log on finished span '{span.operation}'",
                {"span_id": span.span_id},
            )

        if level == LEVEL_DEBUG and not self.debug_enabled:
            logger.debug(f"Dropping debug event '{event}' (tracer debug disabled)")
            return

        entry: Dict[str, Any] = {"event": event, "level": level}
        if level == LEVEL_DEBUG:
            entry["debug"] = True
        elif level == LEVEL_ERROR:
            entry["error"] = True
        if data:
            entry.update(data)

        span.log(entry)

    def debug(self, holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LEVEL_DEBUG, holder, event, data)

    def info(self, holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LEVEL_INFO, holder, event, data)

    def warn(self, holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LEVEL_WARN, holder, event, data)

    def error(self, holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
        self.log(LEVEL_ERROR, holder, event, data)


def _resolve_span(holder: Any) -> Span:
    """Accept a Span, an object with ``.span`` or a mapping with ``"span"``."""
    if isinstance(holder, Span):
        return holder
    if isinstance(holder, Mapping):
        span = holder.get("span")
    else:
        span = getattr(holder, "span", None)
    if not isinstance(span, Span):
        raise SpanError(
            "Log target does not hold a span",
            {"holder": type(holder).__name__},
        )
    return span


# Global tracer instance
_current_tracer: Optional[Tracer] = None
_tracer_lock = threading.RLock()


def set_current_tracer(tracer: Optional[Tracer]) -> None:
    """Set the global current tracer."""
    global _current_tracer
    with _tracer_lock:
        _current_tracer = tracer


def get_current_tracer() -> Optional[Tracer]:
    """Get the global current tracer."""
    with _tracer_lock:
        return _current_tracer


__all__ = [
    "TracerConfig",
    "Tracer",
    "set_current_tracer",
    "get_current_tracer",
    "LEVEL_DEBUG",
    "LEVEL_INFO",
    "LEVEL_WARN",
    "LEVEL_ERROR",
]
