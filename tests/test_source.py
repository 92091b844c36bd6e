import functools

import pytest

from lazyseq import InvalidPredicateError, InvalidSourceError
from lazyseq.core.source import (
    EagerSource,
    FactorySource,
    indexed,
    iterate,
    resolve_source,
)


def test_iterables_resolve_eagerly():
    for source in ([1], (1,), "ab", {1}, {"a": 1}, iter([1])):
        assert isinstance(resolve_source(source), EagerSource)


def test_callables_resolve_to_factories():
    def gen():
        yield 1

    for source in (gen, lambda: [1], list):
        assert isinstance(resolve_source(source), FactorySource)


def test_resolve_rejects_none_and_scalars():
    for source in (None, 1, 2.5, object()):
        with pytest.raises(InvalidSourceError):
            resolve_source(source)


def test_mapping_opens_as_pairs():
    assert list(resolve_source({"a": 1, "b": 2}).open()) == [("a", 1), ("b", 2)]
    assert list(resolve_source(lambda: {"a": 1}).open()) == [("a", 1)]


def test_eager_open_returns_fresh_iterators():
    source = resolve_source([1, 2])
    first = source.open()
    next(first)
    assert list(source.open()) == [1, 2]


def test_indexed_passes_index_when_accepted():
    assert indexed(lambda x, i: (x, i), "selector")("a", 3) == ("a", 3)


def test_indexed_drops_index_for_single_argument():
    assert indexed(lambda x: x * 2, "selector")(4, 0) == 8
    assert indexed(len, "selector")("abc", 9) == 3


def test_indexed_drops_index_for_keyword_only_extras():
    def scale(x, *, factor=2):
        return x * factor

    assert indexed(scale, "selector")(3, 0) == 6
    assert indexed(functools.partial(scale, factor=3), "selector")(3, 1) == 9


def test_indexed_rejects_missing_callback():
    with pytest.raises(InvalidPredicateError, match="predicate is None"):
        indexed(None, "predicate", InvalidPredicateError)


def test_indexed_drops_index_for_optional_second_parameter():
    def join(x, sep="-"):
        return sep + x

    assert indexed(join, "selector")("a", 7) == "-a"
    assert indexed(round, "selector")(2.6, 1) == 3
    assert indexed(str.split, "selector")("a b", 0) == ["a", "b"]


def test_indexed_drops_index_for_var_positional():
    def collect(*args):
        return args

    assert indexed(collect, "selector")("a", 1) == ("a",)


def test_iterate_normalizes_mappings():
    assert list(iterate({"a": 1})) == [("a", 1)]
    assert list(iterate("ab")) == ["a", "b"]
