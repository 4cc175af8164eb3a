"""Turning search text into a query."""

from __future__ import annotations

from silverbrain.expr import Expr, ExprKind, ExprParseError, parse_expr
from silverbrain.query import And, Filter, Keyword, Not, Or, Property, Query

_OPERATOR_KINDS = frozenset({ExprKind.NOT, ExprKind.AND, ExprKind.OR})


class InvalidSearchError(ValueError):
    """The search text is not a valid query."""


def parse(text: str) -> Query:
    """Parse search text into a query, raising InvalidSearchError if it is malformed."""
    try:
        expr, remaining = parse_expr(text)
    except ExprParseError as error:
        raise InvalidSearchError(str(error)) from error
    if remaining:
        raise InvalidSearchError(f"cannot parse {remaining!r}")
    return _to_query(expr)


def _all_of(queries: list[Query]) -> Query:
    return queries[0] if len(queries) == 1 else And(queries)


def _any_of(queries: list[Query]) -> Query:
    return queries[0] if len(queries) == 1 else Or(queries)


def _to_query(expr: Expr) -> Query:
    kind = expr.kind
    if kind is ExprKind.SEQUENCE:
        if len(expr.items) == 1:
            return _to_query(expr.items[0])
        return _sequence_to_query(expr.items)
    if kind is ExprKind.STRING:
        return Keyword(expr.text)
    if kind is ExprKind.FILTER:
        return Filter(expr.key, expr.op, expr.value)
    if kind is ExprKind.PROPERTY:
        return Property(expr.key, expr.op, expr.value)
    raise InvalidSearchError(f"unexpected {kind.value} operator")


def _sequence_to_query(items: tuple[Expr, ...]) -> Query:
    has_or = any(item.kind is ExprKind.OR for item in items)
    groups: list[Query] = []
    current: list[Query] = []
    negate = False

    for item in items:
        if negate:
            current.append(Not(_to_query(item)))
            negate = False
        elif item.kind is ExprKind.NOT:
            negate = True
        elif item.kind is ExprKind.AND:
            continue
        elif item.kind is ExprKind.OR:
            groups.append(_all_of(current))
            current = []
        else:
            current.append(_to_query(item))

    if not has_or:
        return _all_of(current)
    if current:
        groups.append(_all_of(current))
    return _any_of(groups)