"""
Decorators for automatic span creation around functions.
"""

import functools
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union, cast

from ..core.context import SpanContext
from ..core.span import Span
from ..core.tracer import Tracer, get_current_tracer
from ..types import TagValue

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

Parent = Optional[Union[Span, SpanContext]]


def trace_function(
    name: Optional[str] = None,
    tags: Optional[Dict[str, TagValue]] = None,
    tracer: Optional[Tracer] = None,
    debug: bool = False,
    child_of: Union[Parent, Callable[..., Parent]] = None,
) -> Callable[[F], F]:
    """Decorator to trace function execution in its own span.

    The span is passed to the function as the ``span`` argument when the
    function declares such a parameter and the caller did not pass one.

    Args:
        name: Operation name (defaults to the function name)
        tags: Additional span tags
        tracer: Tracer to use (defaults to the global tracer)
        debug: Mark the span as a debug span
        child_of: Parent span or context, or a callable invoked with the
            call's arguments that returns one

    Returns:
        Decorated function
    """

    def decorator(func: F) -> F:
        operation = name or func.__name__
        span_tags: Dict[str, TagValue] = {
            "function.name": func.__name__,
            "function.module": func.__module__,
        }
        span_tags.update(tags or {})
        signature = inspect.signature(func)
        wants_span = "span" in signature.parameters

        def _start(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Optional[Span]:
            current_tracer = tracer or get_current_tracer()
            if current_tracer is None:
                logger.warning("No tracer available for function tracing")
                return None

            inject_span = (
                wants_span and "span" not in signature.bind_partial(*args, **kwargs).arguments
            )
            parent = child_of(*args, **kwargs) if callable(child_of) else child_of
            span = current_tracer.start_span(
                operation, child_of=parent, tags=span_tags, debug=debug
            )
            if inject_span:
                kwargs["span"] = span
            return span

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args, **kwargs):
                span = _start(args, kwargs)
                if span is None:
                    return await func(*args, **kwargs)
                with span:
                    return await func(*args, **kwargs)

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def sync_wrapper(*args, **kwargs):
            span = _start(args, kwargs)
            if span is None:
                return func(*args, **kwargs)
            with span:
                return func(*args, **kwargs)

        return cast(F, sync_wrapper)

    return decorator
