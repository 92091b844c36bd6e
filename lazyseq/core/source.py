from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from lazyseq.core.errors import InvalidCallbackError, InvalidSourceError

logger = logging.getLogger(__name__)


def iterate(obj: Any) -> Iterator:
    """Iterate obj; mappings enumerate as (key, value) pairs."""
    if isinstance(obj, Mapping):
        return iter(obj.items())
    return iter(obj)


@dataclass(frozen=True)
class EagerSource:
    """An iterable stored as-is. Re-traversable only if the iterable is."""

    iterable: Iterable

    def open(self) -> Iterator:
        return iterate(self.iterable)


@dataclass(frozen=True)
class FactorySource:
    """A zero-argument callable invoked anew for every traversal."""

    factory: Callable[[], Any]

    def open(self) -> Iterator:
        logger.debug("Invoking factory %r for a new traversal", self.factory)
        produced = self.factory()
        if not isinstance(produced, Iterable):
            raise InvalidSourceError(
                f"Invalid source. factory {self.factory!r} returned "
                f"non-iterable {type(produced).__name__!r}"
            )
        return iterate(produced)


Source = EagerSource | FactorySource


def resolve_source(source: Any) -> Source:
    """Classify constructor input once: eager iterable or lazy factory."""
    if source is None:
        raise InvalidSourceError("Invalid source. source is None")
    if isinstance(source, Iterable):
        logger.debug("Wrapping eager source of type %s", type(source).__name__)
        return EagerSource(source)
    if callable(source):
        logger.debug("Wrapping factory source %r", source)
        return FactorySource(source)
    raise InvalidSourceError(
        f"Invalid source. {type(source).__name__!r} is neither iterable nor "
        "a zero-argument factory"
    )


def _binds(signature: inspect.Signature, *args: Any) -> bool:
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


def _accepts_index(fn: Callable) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    return not _binds(signature, None) and _binds(signature, None, None)


def indexed(
    fn: Callable | None,
    name: str,
    error: type[InvalidCallbackError] = InvalidCallbackError,
) -> Callable[[Any, int], Any]:
    """Validate a callback and adapt it to the fn(item, index) calling form.

    The index is passed only when the callback requires a second positional
    argument. Callbacks callable with the item alone (optional extra
    parameters, `*args`, builtins such as `round` or `str.split`) get the
    item only.
    """
    if fn is None:
        raise error(f"Invalid {name}. {name} is None")
    if not callable(fn):
        raise error(f"Invalid {name}. {type(fn).__name__!r} is not callable")
    if _accepts_index(fn):
        return fn
    return lambda item, _index: fn(item)
