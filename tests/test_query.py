from dataclasses import FrozenInstanceError

import pytest

from silverbrain.query import And, CompareOperator, Filter, Keyword, Not, Or, Property


def test_nested_queries_compare_by_value():
    left = And([Keyword("a"), Not(Keyword("b")), Or([Keyword("c")])])
    right = And((Keyword("a"), Not(Keyword("b")), Or((Keyword("c"),))))
    assert left == right


def test_and_accepts_any_iterable():
    query = And(k for k in [Keyword("x"), Keyword("y")])
    assert query.items == (Keyword("x"), Keyword("y"))


def test_queries_are_hashable():
    queries = {Keyword("a"), Keyword("a"), Keyword("b"), And([Keyword("a")]), And([Keyword("a")])}
    assert len(queries) == 3


def test_filter_and_property_are_distinct():
    filter_query = Filter("k", CompareOperator.EQUAL, "v")
    property_query = Property("k", CompareOperator.EQUAL, "v")
    assert (filter_query == property_query) is False


def test_operator_is_part_of_equality():
    assert (
        Filter("k", CompareOperator.LESS, "1") == Filter("k", CompareOperator.GREATER, "1")
    ) is False


def test_queries_are_immutable():
    keyword = Keyword("a")
    with pytest.raises(FrozenInstanceError):
        keyword.text = "b"
    assert keyword.text == "a"