from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Generic, TypeVar

from lazyseq.core.errors import (
    InvalidCallbackError,
    InvalidPredicateError,
    InvalidSelectorError,
)
from lazyseq.core.source import indexed, iterate, resolve_source

logger = logging.getLogger(__name__)

T = TypeVar("T")
V = TypeVar("V")

_Op = Callable[[Iterable], Iterator]

# Stands in for every NaN key so they collapse to one.
_NAN = object()


def _is_hashable(key: Any) -> bool:
    try:
        hash(key)
    except TypeError:
        return False
    return True


class _SeenKeys:
    """Keys seen during one traversal of distinct().

    Hashable keys compare by value, unhashable keys by identity. NaN keys
    are all equal to each other.
    """

    def __init__(self) -> None:
        self._values: set = set()
        self._identities: dict[int, Any] = {}

    def add(self, key: Any) -> bool:
        """Record key; return False if it was already seen."""
        if isinstance(key, float) and math.isnan(key):
            key = _NAN
        if _is_hashable(key):
            if key in self._values:
                return False
            self._values.add(key)
            return True
        if id(key) in self._identities:
            return False
        logger.debug("distinct() comparing unhashable key %r by identity", key)
        # Holding the key keeps its id from being reused mid-traversal.
        self._identities[id(key)] = key
        return True


class LazySequence(Generic[T]):
    """Re-iterable lazy sequence. Combinators return new sequences and do no
    work until the result is iterated."""

    def __init__(self, source: Any) -> None:
        self._source = resolve_source(source)

    def __iter__(self) -> Iterator[T]:
        return self._source.open()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._source!r})"

    def _add_op(self, op: _Op) -> "LazySequence":
        return LazySequence(lambda: op(self))

    # ---- lazy combinators ----

    def filter(self, predicate: Callable[..., bool]) -> "LazySequence[T]":
        fn = indexed(predicate, "predicate", InvalidPredicateError)

        def op(iterable: Iterable):
            for index, item in enumerate(iterable):
                if fn(item, index):
                    yield item
        return self._add_op(op)

    def map(self, selector: Callable[..., V]) -> "LazySequence[V]":
        fn = indexed(selector, "selector", InvalidSelectorError)

        def op(iterable: Iterable):
            for index, item in enumerate(iterable):
                yield fn(item, index)
        return self._add_op(op)

    def map_many(self, selector: Callable[..., Iterable[V]]) -> "LazySequence[V]":
        """Map each item to an iterable and flatten the results in order.
        Mappings returned by the selector contribute (key, value) pairs."""
        fn = indexed(selector, "selector", InvalidSelectorError)

        def op(iterable: Iterable):
            for index, item in enumerate(iterable):
                yield from iterate(fn(item, index))
        return self._add_op(op)

    def distinct(self, key_selector: Callable[..., Any]) -> "LazySequence[T]":
        """Keep the first item for each key. The seen-key set is rebuilt on
        every traversal.

        Hashable keys compare with hash and ==, as in a set, so 1, 1.0 and
        True are one key and every NaN is one key. Unhashable keys (lists,
        dicts) compare by identity.
        """
        fn = indexed(key_selector, "key_selector", InvalidSelectorError)

        def op(iterable: Iterable):
            seen = _SeenKeys()
            for index, item in enumerate(iterable):
                if seen.add(fn(item, index)):
                    yield item
        return self._add_op(op)

    def concat(self, other: Any) -> "LazySequence[T]":
        """Append `other` (an iterable or zero-argument factory). `other` is
        not touched until the result is iterated."""
        tail = resolve_source(other)

        def op(iterable: Iterable):
            yield from iterable
            yield from tail.open()
        return self._add_op(op)

    # ---- terminal operations ----

    def count(self) -> int:
        count = 0
        for _ in self:
            count += 1
        return count

    def items(self) -> list[T]:
        return list(self)

    def first(
        self,
        predicate: Callable[..., bool] | None = None,
        default: Any = None,
    ) -> Any:
        """Return the first item (matching `predicate`, if given), or
        `default` once the sequence is exhausted. Falsy items are returned
        as-is."""
        if predicate is None:
            for item in self:
                return item
            return default
        fn = indexed(predicate, "predicate", InvalidPredicateError)
        for index, item in enumerate(self):
            if fn(item, index):
                return item
        return default

    def some(self, predicate: Callable[..., bool]) -> bool:
        fn = indexed(predicate, "predicate", InvalidPredicateError)
        for index, item in enumerate(self):
            if fn(item, index):
                return True
        return False

    def every(self, predicate: Callable[..., bool]) -> bool:
        fn = indexed(predicate, "predicate", InvalidPredicateError)
        for index, item in enumerate(self):
            if not fn(item, index):
                return False
        return True

    def for_each(self, action: Callable[..., Any]) -> int:
        """Call action(item, index) for every item. Returns the number of
        items visited."""
        fn = indexed(action, "action", InvalidCallbackError)
        visited = 0
        for index, item in enumerate(self):
            fn(item, index)
            visited += 1
        return visited

    # ---- constructors ----

    @staticmethod
    def empty() -> "LazySequence":
        return LazySequence(())

    @staticmethod
    def keys(obj: Any) -> "LazySequence":
        """Keys of a mapping, or attribute names of an object: its own
        attributes, then public data attributes of its classes."""
        return LazySequence(lambda: _record(obj).keys())

    @staticmethod
    def values(obj: Any) -> "LazySequence":
        """Values matching keys(obj), in the same order."""
        return LazySequence(lambda: _record(obj).values())


def _record(obj: Any) -> Mapping:
    """Own attributes of obj first, then public data attributes inherited
    from its classes (a class object contributes its own and its bases').
    Methods, descriptors and underscore names on classes are skipped."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return obj
    if isinstance(obj, type):
        layers = []
        classes = obj.__mro__
    else:
        layers = [getattr(obj, "__dict__", None) or {}]
        classes = type(obj).__mro__
    layers += [vars(cls) for cls in classes if cls is not object]

    record: dict = {}
    seen: set = set()
    for depth, layer in enumerate(layers):
        from_class = depth > 0 or isinstance(obj, type)
        for name, value in layer.items():
            if name in seen:
                continue
            seen.add(name)
            if from_class and _is_hidden(name, value):
                continue
            record[name] = value
    return record


def _is_hidden(name: str, value: Any) -> bool:
    return (
        name.startswith("_")
        or callable(value)
        or hasattr(type(value), "__get__")
    )
