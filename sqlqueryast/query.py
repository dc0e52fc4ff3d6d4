"""Full query expressions: CTEs, set operations, ordering and limits.

Bodies, expressions and identifiers are held as arbitrary objects and
rendered with ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .clauses import Fetch, Offset
from .display import comma_separated, separated


def _freeze(obj: object, name: str) -> None:
    object.__setattr__(obj, name, tuple(getattr(obj, name)))


class SetOperator(Enum):
    """The operator joining two query bodies."""

    UNION = "UNION"
    EXCEPT = "EXCEPT"
    INTERSECT = "INTERSECT"

    def __str__(self) -> str:
        return self.value


class SetQuantifier(Enum):
    """A quantifier for a set operator."""

    ALL = "ALL"
    DISTINCT = "DISTINCT"
    BY_NAME = "BY NAME"
    ALL_BY_NAME = "ALL BY NAME"
    DISTINCT_BY_NAME = "DISTINCT BY NAME"
    NONE = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SetOperation:
    """``left {UNION|EXCEPT|INTERSECT} [quantifier] right``."""

    left: Any
    op: SetOperator
    right: Any
    set_quantifier: SetQuantifier = SetQuantifier.NONE

    def __str__(self) -> str:
        quantifier = (
            "" if self.set_quantifier is SetQuantifier.NONE else f" {self.set_quantifier}"
        )
        return f"{self.left} {self.op}{quantifier} {self.right}"


@dataclass(frozen=True)
class NestedQuery:
    """A parenthesized query used as a query body."""

    query: Any

    def __str__(self) -> str:
        return f"({self.query})"


@dataclass(frozen=True)
class TableCommand:
    """The ``TABLE [schema.]name`` command."""

    table_name: str
    schema_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.table_name is None:
            raise ValueError("TABLE command needs a table name")

    def __str__(self) -> str:
        if self.schema_name is None:
            return f"TABLE {self.table_name}"
        return f"TABLE {self.schema_name}.{self.table_name}"


@dataclass(frozen=True)
class Cte:
    """A common table expression: ``alias AS (query) [FROM ident]``."""

    alias: Any
    query: Any
    from_: Any = None

    def __str__(self) -> str:
        text = f"{self.alias} AS ({self.query})"
        if self.from_ is not None:
            text += f" FROM {self.from_}"
        return text


@dataclass(frozen=True)
class With:
    """``WITH [RECURSIVE] cte, ...``."""

    cte_tables: tuple
    recursive: bool = False

    def __post_init__(self) -> None:
        _freeze(self, "cte_tables")

    def __str__(self) -> str:
        recursive = "RECURSIVE " if self.recursive else ""
        return f"WITH {recursive}{comma_separated(self.cte_tables)}"


@dataclass(frozen=True)
class Query:
    """A complete query expression around a body."""

    body: Any
    with_: Optional[With] = None
    order_by: tuple = ()
    limit: Any = None
    limit_by: tuple = ()
    offset: Optional[Offset] = None
    fetch: Optional[Fetch] = None
    locks: tuple = ()
    for_clause: Any = None

    def __post_init__(self) -> None:
        for name in ("order_by", "limit_by", "locks"):
            _freeze(self, name)

    def __str__(self) -> str:
        parts = []
        if self.with_ is not None:
            parts.append(f"{self.with_} ")
        parts.append(str(self.body))
        if self.order_by:
            parts.append(f" ORDER BY {comma_separated(self.order_by)}")
        if self.limit is not None:
            parts.append(f" LIMIT {self.limit}")
        if self.offset is not None:
            parts.append(f" {self.offset}")
        if self.limit_by:
            parts.append(f" BY {comma_separated(self.limit_by)}")
        if self.fetch is not None:
            parts.append(f" {self.fetch}")
        if self.locks:
            parts.append(f" {separated(self.locks, ' ')}")
        if self.for_clause is not None:
            parts.append(f" {self.for_clause}")
        return "".join(parts)