import pytest

from silverbrain.expr import Expr, ExprKind, ExprParseError, parse_expr
from silverbrain.query import CompareOperator


def seq(*items):
    return Expr(ExprKind.SEQUENCE, items=items)


def word(text):
    return Expr(ExprKind.STRING, text=text)


NOT = Expr(ExprKind.NOT)
AND = Expr(ExprKind.AND)
OR = Expr(ExprKind.OR)


def test_single_word():
    assert parse_expr("aa") == (seq(seq(word("aa"))), "")


def test_quoted_string_keeps_spaces():
    assert parse_expr('"aa bb"') == (seq(seq(word("aa bb"))), "")


def test_filter_expression():
    expr, rest = parse_expr("key:value")
    assert rest == ""
    assert expr == seq(seq(Expr(ExprKind.FILTER, key="key", op=CompareOperator.EQUAL, value="value")))


def test_property_expression_with_spaces():
    expr, rest = parse_expr("key = value")
    assert rest == ""
    assert expr == seq(
        seq(Expr(ExprKind.PROPERTY, key="key", op=CompareOperator.EQUAL, value="value"))
    )


def test_property_not_equal():
    expr, _ = parse_expr("a != b")
    assert expr.items[0].items[0].op is CompareOperator.NOT_EQUAL


def test_operators_symbols_and_words():
    expr, rest = parse_expr("a && b || !c and d or not e")
    assert rest == ""
    assert expr == seq(
        seq(word("a"), AND, word("b"), OR, NOT, word("c"), AND, word("d"), OR, NOT, word("e"))
    )


def test_word_operator_needs_following_space():
    assert parse_expr("notebook android") == (seq(seq(word("notebook"), word("android"))), "")


@pytest.mark.parametrize("text", ["not", "a and", "a or   ", "(x not)"])
def test_word_operator_at_end_is_an_error(text):
    with pytest.raises(ExprParseError):
        parse_expr(text)


def test_reserved_word_is_left_unparsed():
    assert parse_expr("NOT") == (seq(), "NOT")


def test_parentheses_group():
    expr, rest = parse_expr("(a || b) c")
    assert rest == ""
    assert expr == seq(seq(seq(word("a"), OR, word("b"))), seq(word("c")))


def test_empty_parentheses():
    assert parse_expr("()") == (seq(seq()), "")


def test_longer_operator_is_shadowed_by_shorter():
    assert parse_expr("a <= b") == (seq(seq(word("a"))), "<= b")


def test_leading_space_is_not_consumed():
    assert parse_expr(" aa") == (seq(), " aa")


def test_unclosed_parenthesis_is_left_unparsed():
    assert parse_expr("(a") == (seq(), "(a")