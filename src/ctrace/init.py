"""
Process-wide initialization API for the ctrace SDK.

The global tracer is a convenience at the application boundary. Code
that prefers explicit ownership can construct :class:`Tracer` directly
and pass it around.
"""

import logging
import os
from typing import Any, Iterable, Mapping, Optional, Union

from .core.context import SpanContext
from .core.span import Span
from .core.tracer import Tracer, TracerConfig, get_current_tracer, set_current_tracer
from .sinks import Encoder, Stream
from .types import Carrier, TagValue
from .utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def init(
    stream: Optional[Stream] = None,
    encoder: Optional[Encoder] = None,
    debug: Optional[bool] = None,
    multi_event: Optional[bool] = None,
    propagators: Optional[Mapping[str, Iterable[Any]]] = None,
) -> Tracer:
    """
    Initialize (or re-initialize) the global tracer.

    ```python
    import ctrace
    ctrace.init(debug=True)
    ```

    Every call replaces the whole configuration; nothing from a previous
    call is carried over. When the global tracer already exists it is
    reconfigured in place so that spans it created see the new flags.

    Args:
        stream: Writable sink for encoded spans (defaults to stdout)
        encoder: Span encoder (defaults to JSON lines)
        debug: Emit debug spans and debug log entries
            (falls back to the CTRACE_DEBUG env var)
        multi_event: Report spans at start as well as at finish
            (falls back to the CTRACE_MULTI_EVENT env var)
        propagators: Custom propagators per format, appended after the
            built-in ones

    Returns:
        Tracer: The configured global tracer

    Raises:
        ConfigurationError: If the configuration is invalid
    """
    if debug is None:
        debug = _env_flag("CTRACE_DEBUG")
    if multi_event is None:
        multi_event = _env_flag("CTRACE_MULTI_EVENT")

    config = TracerConfig(
        stream=stream,
        encoder=encoder,
        debug=debug,
        multi_event=multi_event,
        propagators=propagators if propagators is not None else {},
    )

    tracer = get_current_tracer()
    if tracer is None:
        tracer = Tracer(config)
        set_current_tracer(tracer)
    else:
        tracer.init(config)

    return tracer


def configure(**kwargs: Any) -> Tracer:
    """Alternative name for init()."""
    return init(**kwargs)


def get_tracer() -> Optional[Tracer]:
    """Get the current global tracer instance."""
    return get_current_tracer()


def _require_tracer() -> Tracer:
    tracer = get_current_tracer()
    if tracer is None:
        raise ConfigurationError("ctrace is not initialized. Call ctrace.init() first")
    return tracer


def shutdown() -> None:
    """Drop the global tracer."""
    if get_current_tracer() is not None:
        set_current_tracer(None)
        logger.info("ctrace shutdown complete")


def start_span(
    operation: str,
    child_of: Optional[Union[Span, SpanContext]] = None,
    tags: Optional[Mapping[str, TagValue]] = None,
    debug: bool = False,
) -> Span:
    """Start a span on the global tracer."""
    return _require_tracer().start_span(operation, child_of=child_of, tags=tags, debug=debug)


def inject(context: Union[Span, SpanContext], fmt: str, carrier: Carrier) -> None:
    """Inject a context into a carrier with the global tracer."""
    _require_tracer().inject(context, fmt, carrier)


def extract(fmt: str, carrier: Carrier) -> Optional[SpanContext]:
    """Extract a context from a carrier with the global tracer."""
    return _require_tracer().extract(fmt, carrier)


def debug(holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
    _require_tracer().debug(holder, event, data)


def info(holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
    _require_tracer().info(holder, event, data)


def warn(holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
    _require_tracer().warn(holder, event, data)


def error(holder: Any, event: str, data: Optional[Mapping[str, Any]] = None) -> None:
    _require_tracer().error(holder, event, data)


# Context manager for easy setup/teardown
class CtraceTrace:
    """Context manager for the global tracer."""

    def __init__(self, **kwargs: Any):
        self.kwargs = kwargs
        self.tracer: Optional[Tracer] = None

    def __enter__(self) -> Tracer:
        self.tracer = init(**self.kwargs)
        return self.tracer

    def __exit__(self, exc_type, exc_val, exc_tb):
        shutdown()


__all__ = [
    "init",
    "configure",
    "get_tracer",
    "shutdown",
    "start_span",
    "inject",
    "extract",
    "debug",
    "info",
    "warn",
    "error",
    "CtraceTrace",
]
