from typing import Any

from lazyseq.core.errors import (
    InvalidCallbackError,
    InvalidPredicateError,
    InvalidSelectorError,
    InvalidSourceError,
    LazySequenceError,
)
from lazyseq.core.sequence import LazySequence


def seq(source: Any) -> LazySequence:
    """Wrap an iterable or zero-argument factory in a LazySequence."""
    return LazySequence(source)


__all__ = [
    "seq",
    "LazySequence",
    "LazySequenceError",
    "InvalidSourceError",
    "InvalidCallbackError",
    "InvalidPredicateError",
    "InvalidSelectorError",
]
