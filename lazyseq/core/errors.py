class LazySequenceError(Exception):
    """Base class for errors raised by lazyseq itself."""


class InvalidSourceError(LazySequenceError, TypeError):
    """Source is None, or neither iterable nor a zero-argument factory."""


class InvalidCallbackError(LazySequenceError, TypeError):
    """A required callback is missing or not callable."""


class InvalidPredicateError(InvalidCallbackError):
    pass


class InvalidSelectorError(InvalidCallbackError):
    pass
