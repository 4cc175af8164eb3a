"""Search query tree."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union


class CompareOperator(Enum):
    """How a filter or property value is compared."""

    LESS = "less"
    LESS_EQUAL = "less_equal"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    GREATER = "greater"
    GREATER_EQUAL = "greater_equal"


class FilterKey(Enum):
    """Keys that a filter may refer to."""

    HAS = "has"
    CHILD_COUNT = "child_count"
    LINK_COUNT = "link_count"
    PARENT_COUNT = "parent_count"
    CREATE_TIME = "create_time"


@dataclass(frozen=True)
class Keyword:
    """Match entries containing a keyword."""

    text: str


@dataclass(frozen=True)
class Filter:
    """Compare a built-in attribute of an entry."""

    key: str
    op: CompareOperator
    value: str


@dataclass(frozen=True)
class Property:
    """Compare a user-defined property of an entry."""

    key: str
    op: CompareOperator
    value: str


@dataclass(frozen=True)
class And:
    """All sub-queries must match."""

    items: tuple[Query, ...]

    def __init__(self, items: Iterable[Query]) -> None:
        object.__setattr__(self, "items", tuple(items))


@dataclass(frozen=True)
class Or:
    """At least one sub-query must match."""

    items: tuple[Query, ...]

    def __init__(self, items: Iterable[Query]) -> None:
        object.__setattr__(self, "items", tuple(items))


@dataclass(frozen=True)
class Not:
    """The sub-query must not match."""

    query: Query


Query = Union[Keyword, Filter, Property, And, Or, Not]