"""
Propagator chains keyed by wire format.

Each format holds an ordered chain. Extraction short-circuits on the
first propagator that returns a context; injection runs every
propagator so later writers overwrite earlier ones on conflicting keys.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from ..core.context import SpanContext
from ..types import Carrier
from ..utils.exceptions import PropagationError

logger = logging.getLogger(__name__)

FORMAT_HTTP_HEADERS = "http_headers"
FORMAT_TEXT_MAP = "text_map"
FORMAT_BINARY = "binary"

Extractor = Callable[[Carrier], Optional[Any]]
Injector = Callable[[SpanContext, Carrier], None]


@dataclass(frozen=True)
class Propagator:
    """
    A propagator with optional extract and inject capabilities.

    Either side may be left as ``None``; the registry skips missing
    capabilities instead of treating them as errors.
    """

    extract: Optional[Extractor] = None
    inject: Optional[Injector] = None


def _capability(entry: Any, name: str) -> Optional[Callable[..., Any]]:
    if isinstance(entry, Mapping):
        func = entry.get(name)
    else:
        func = getattr(entry, name, None)
    if func is not None and not callable(func):
        raise PropagationError(
            f"Propagator '{name}' must be callable",
            {"propagator": repr(entry), "type": type(func).__name__},
        )
    return func


def as_propagator(entry: Any) -> Propagator:
    """Normalize a mapping, object or Propagator into a Propagator."""
    if isinstance(entry, Propagator):
        return entry
    propagator = Propagator(
        extract=_capability(entry, "extract"),
        inject=_capability(entry, "inject"),
    )
    if propagator.extract is None and propagator.inject is None:
        logger.debug(f"Propagator {entry!r} defines neither extract nor inject")
    return propagator


class PropagatorRegistry:
    """Ordered propagator chains per wire format."""

    def __init__(self) -> None:
        self._chains: Dict[str, List[Propagator]] = {}

    def register(self, fmt: str, propagator: Any) -> None:
        """Append a propagator to the end of a format's chain."""
        self._chains.setdefault(fmt, []).append(as_propagator(propagator))

    def register_all(self, propagators: Mapping[str, Iterable[Any]]) -> None:
        for fmt, entries in propagators.items():
            for entry in entries:
                self.register(fmt, entry)

    def chain(self, fmt: str) -> Tuple[Propagator, ...]:
        return tuple(self._chains.get(fmt, ()))

    def formats(self) -> List[str]:
        return list(self._chains)

    def extract(self, fmt: str, carrier: Carrier) -> Optional[SpanContext]:
        """
        Extract a context from a carrier.

        Returns the first non-``None`` result in chain order, or ``None``
        when no propagator matches (including unknown formats).
        """
        for index, propagator in enumerate(self._chains.get(fmt, ())):
            if propagator.extract is None:
                continue
            result = propagator.extract(carrier)
            if result is None:
                continue
            if isinstance(result, Mapping):
                result = SpanContext.from_dict(result)
            logger.debug(f"Extracted context for format '{fmt}' at chain index {index}")
            return result

        logger.debug(f"No propagator matched for format '{fmt}'")
        return None

    def inject(self, context: SpanContext, fmt: str, carrier: Carrier) -> None:
        """Run every injector of the format's chain against the carrier."""
        for propagator in self._chains.get(fmt, ()):
            if propagator.inject is not None:
                propagator.inject(context, carrier)

    def __len__(self) -> int:
        return sum(len(chain) for chain in self._chains.values())
