"""Tokenising search text into a flat expression tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from silverbrain.query import CompareOperator

_SPACES = " \t"
_NON_BASIC = frozenset(' ":=<>!()')
_RESERVED = frozenset({"&&", "||", "AND", "OR", "NOT"})

_FILTER_OPS = (
    (":", CompareOperator.EQUAL),
    (":!", CompareOperator.NOT_EQUAL),
    (":=", CompareOperator.EQUAL),
    (":!=", CompareOperator.NOT_EQUAL),
    (":<", CompareOperator.LESS),
    (":<=", CompareOperator.LESS_EQUAL),
    (":>", CompareOperator.GREATER),
    (":>=", CompareOperator.GREATER_EQUAL),
)

_PROPERTY_OPS = (
    ("=", CompareOperator.EQUAL),
    ("!=", CompareOperator.NOT_EQUAL),
    ("<", CompareOperator.LESS),
    ("<=", CompareOperator.LESS_EQUAL),
    (">", CompareOperator.GREATER),
    (">=", CompareOperator.GREATER_EQUAL),
)


class ExprKind(Enum):
    """The kind of an expression node."""

    STRING = "string"
    NOT = "not"
    AND = "and"
    OR = "or"
    FILTER = "filter"
    PROPERTY = "property"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class Expr:
    """An expression node; which fields matter depends on ``kind``."""

    kind: ExprKind
    text: str = ""
    key: str = ""
    op: CompareOperator | None = None
    value: str = ""
    items: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


class ExprParseError(ValueError):
    """The text ended where more input was required."""


class _NoMatch(Exception):
    """A parser did not match here; the caller may try something else."""


_Parsed = tuple[Expr, int]


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _SPACES:
        pos += 1
    return pos


def _require_spaces(text: str, pos: int) -> int:
    # At least one space that is followed by more input.
    if pos >= len(text):
        raise ExprParseError(f"unexpected end of input at {pos}")
    if text[pos] not in _SPACES:
        raise _NoMatch
    end = _skip_spaces(text, pos)
    if end == len(text):
        raise ExprParseError(f"unexpected end of input at {end}")
    return end


def _keyword(kind: ExprKind, symbol: str, word: str) -> Callable[[str, int], _Parsed]:
    def parse(text: str, pos: int) -> _Parsed:
        if text.startswith(symbol, pos):
            return Expr(kind), _skip_spaces(text, pos + len(symbol))
        if text.startswith(word, pos):
            return Expr(kind), _require_spaces(text, pos + len(word))
        raise _NoMatch

    return parse


def _any_string(text: str, pos: int) -> tuple[str, int]:
    if text.startswith('"', pos):
        end = text.find('"', pos + 1)
        if end >= 0:
            return text[pos + 1 : end], _skip_spaces(text, end + 1)
    end = pos
    while end < len(text) and text[end] not in _NON_BASIC:
        end += 1
    word = text[pos:end]
    if not word or word in _RESERVED:
        raise _NoMatch
    return word, _skip_spaces(text, end)


def _operator(
    text: str, pos: int, table: Iterable[tuple[str, CompareOperator]]
) -> tuple[CompareOperator, int]:
    for token, op in table:
        if text.startswith(token, pos):
            return op, _skip_spaces(text, pos + len(token))
    raise _NoMatch


def _comparison(
    kind: ExprKind, table: Iterable[tuple[str, CompareOperator]]
) -> Callable[[str, int], _Parsed]:
    def parse(text: str, pos: int) -> _Parsed:
        key, pos = _any_string(text, pos)
        op, pos = _operator(text, pos, table)
        value, pos = _any_string(text, pos)
        return Expr(kind, key=key, op=op, value=value), pos

    return parse


def _string(text: str, pos: int) -> _Parsed:
    word, pos = _any_string(text, pos)
    return Expr(ExprKind.STRING, text=word), pos


_SINGLES = (
    _keyword(ExprKind.NOT, "!", "not"),
    _keyword(ExprKind.AND, "&&", "and"),
    _keyword(ExprKind.OR, "||", "or"),
    _comparison(ExprKind.FILTER, _FILTER_OPS),
    _comparison(ExprKind.PROPERTY, _PROPERTY_OPS),
    _string,
)


def _single(text: str, pos: int) -> _Parsed:
    for parser in _SINGLES:
        try:
            return parser(text, pos)
        except _NoMatch:
            continue
    raise _NoMatch


def _sequence(text: str, pos: int) -> _Parsed:
    items: list[Expr] = []
    while True:
        try:
            item, pos = _single(text, pos)
        except _NoMatch:
            break
        items.append(item)
    if not items:
        raise _NoMatch
    return Expr(ExprKind.SEQUENCE, items=tuple(items)), pos


def _paren(text: str, pos: int) -> _Parsed:
    if not text.startswith("(", pos):
        raise _NoMatch
    inner, pos = _expression(text, _skip_spaces(text, pos + 1))
    if not text.startswith(")", pos):
        raise _NoMatch
    return inner, _skip_spaces(text, pos + 1)


def _expression(text: str, pos: int) -> _Parsed:
    items: list[Expr] = []
    while True:
        try:
            item, pos = _paren(text, pos)
        except _NoMatch:
            try:
                item, pos = _sequence(text, pos)
            except _NoMatch:
                break
        items.append(item)
    return Expr(ExprKind.SEQUENCE, items=tuple(items)), pos


def parse_expr(text: str) -> tuple[Expr, str]:
    """Parse as much of ``text`` as possible; return the tree and the unparsed rest.

    Raises ExprParseError when a word operator runs into the end of input.
    """
    expr, pos = _expression(text, 0)
    return expr, text[pos:]