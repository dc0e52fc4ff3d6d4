"""Table factors, aliases and joins that appear in a ``FROM`` clause.

Names, identifiers, expressions, subqueries and literal values are held as
arbitrary objects and rendered with ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .clauses import JsonTableColumn, _clause, _flag, _KeywordEnum, _node, _require_all
from .display import comma_separated, compound_identifier


@_node("columns")
class TableAlias:
    """``name [(col1, col2, ...)]``."""

    name: Any
    columns: tuple = ()

    def __str__(self) -> str:
        if not self.columns:
            return str(self.name)
        return f"{self.name} ({comma_separated(self.columns)})"


@dataclass(frozen=True)
class ForSystemTimeAsOf:
    """Table time travel: ``FOR SYSTEM_TIME AS OF <expr>``."""

    expr: Any

    def __str__(self) -> str:
        return f" FOR SYSTEM_TIME AS OF {self.expr}"


@_node("args", "with_hints", "partitions")
class TableName:
    """A named table, or a table-valued function call when ``args`` is set.

    ``args`` is ``None`` for a plain table and a (possibly empty) sequence of
    arguments for a function call.
    """

    name: Any
    alias: Optional[TableAlias] = None
    args: Optional[tuple] = None
    with_hints: tuple = ()
    version: Optional[ForSystemTimeAsOf] = None
    partitions: tuple = ()

    def __str__(self) -> str:
        text = str(self.name)
        if self.partitions:
            text += f"PARTITION ({comma_separated(self.partitions)})"
        if self.args is not None:
            text += f"({comma_separated(self.args)})"
        text += _clause("AS", self.alias)
        if self.with_hints:
            text += f" WITH ({comma_separated(self.with_hints)})"
        if self.version is not None:
            text += str(self.version)
        return text


@dataclass(frozen=True)
class DerivedTable:
    """A parenthesized subquery, optionally ``LATERAL``."""

    subquery: Any
    alias: Optional[TableAlias] = None
    lateral: bool = False

    def __str__(self) -> str:
        lateral = _flag(self.lateral, "LATERAL ")
        return f"{lateral}({self.subquery}){_clause('AS', self.alias)}"


@dataclass(frozen=True)
class TableFunction:
    """``TABLE(<expr>) [AS alias]``."""

    expr: Any
    alias: Optional[TableAlias] = None

    def __str__(self) -> str:
        return f"TABLE({self.expr}){_clause('AS', self.alias)}"


@_node("args")
class FunctionTable:
    """A function used as a table, e.g. ``LATERAL FLATTEN(<args>)``."""

    name: Any
    args: tuple = ()
    alias: Optional[TableAlias] = None
    lateral: bool = False

    def __str__(self) -> str:
        lateral = _flag(self.lateral, "LATERAL ")
        return (
            f"{lateral}{self.name}({comma_separated(self.args)})"
            f"{_clause('AS', self.alias)}"
        )


@_node("array_exprs")
class UnnestTable:
    """``UNNEST(<exprs>) [AS alias] [WITH OFFSET [AS alias]]``."""

    array_exprs: tuple
    alias: Optional[TableAlias] = None
    with_offset: bool = False
    with_offset_alias: Any = None

    def __str__(self) -> str:
        return (
            f"UNNEST({comma_separated(self.array_exprs)})"
            + _clause("AS", self.alias)
            + _flag(self.with_offset, " WITH OFFSET")
            + _clause("AS", self.with_offset_alias)
        )


@_node("columns")
class JsonTable:
    """The ``JSON_TABLE(<expr>, <path> COLUMNS(...))`` table function."""

    json_expr: Any
    json_path: Any
    columns: tuple
    alias: Optional[TableAlias] = None

    def __post_init__(self) -> None:
        _require_all(
            self.columns, JsonTableColumn, "JSON_TABLE columns must be JsonTableColumn"
        )

    def __str__(self) -> str:
        return (
            f"JSON_TABLE({self.json_expr}, {self.json_path} "
            f"COLUMNS({comma_separated(self.columns)}))"
            f"{_clause('AS', self.alias)}"
        )


@dataclass(frozen=True)
class NestedJoin:
    """A parenthesized join expression: ``(a JOIN b ...)``."""

    table_with_joins: "TableWithJoins"
    alias: Optional[TableAlias] = None

    def __str__(self) -> str:
        return f"({self.table_with_joins}){_clause('AS', self.alias)}"


@_node("value_column", "pivot_values")
class Pivot:
    """``table PIVOT(<agg> FOR <column> IN (<values>)) [AS alias]``."""

    table: Any
    aggregate_function: Any
    value_column: tuple
    pivot_values: tuple
    alias: Optional[TableAlias] = None

    def __str__(self) -> str:
        return (
            f"{self.table} PIVOT({self.aggregate_function} FOR "
            f"{compound_identifier(self.value_column)} IN "
            f"({comma_separated(self.pivot_values)}))"
            f"{_clause('AS', self.alias)}"
        )


@_node("columns")
class Unpivot:
    """``table UNPIVOT(value FOR name IN (columns)) [AS alias]``."""

    table: Any
    value: Any
    name: Any
    columns: tuple
    alias: Optional[TableAlias] = None

    def __str__(self) -> str:
        return (
            f"{self.table} UNPIVOT({self.value} FOR {self.name} IN "
            f"({comma_separated(self.columns)}))"
            f"{_clause('AS', self.alias)}"
        )


class _ConstraintKind(Enum):
    ON = "ON"
    USING = "USING"
    NATURAL = "NATURAL"
    NONE = "NONE"


@_node("columns")
class JoinConstraint:
    """The condition of a join: ``ON``, ``USING``, ``NATURAL`` or none."""

    kind: _ConstraintKind = _ConstraintKind.NONE
    expr: Any = None
    columns: tuple = ()

    def __post_init__(self) -> None:
        if (self.kind is _ConstraintKind.ON) != (self.expr is not None):
            raise ValueError("only an ON constraint carries an expression")
        if self.kind is not _ConstraintKind.USING and self.columns:
            raise ValueError("only a USING constraint carries columns")

    @classmethod
    def on(cls, expr: Any) -> "JoinConstraint":
        return cls(_ConstraintKind.ON, expr=expr)

    @classmethod
    def using(cls, columns: Any) -> "JoinConstraint":
        return cls(_ConstraintKind.USING, columns=tuple(columns))

    @classmethod
    def natural(cls) -> "JoinConstraint":
        return cls(_ConstraintKind.NATURAL)

    @classmethod
    def none(cls) -> "JoinConstraint":
        return cls(_ConstraintKind.NONE)

    @property
    def prefix(self) -> str:
        """Text placed before the join keyword."""
        return _flag(self.kind is _ConstraintKind.NATURAL, "NATURAL ")

    @property
    def suffix(self) -> str:
        """Text placed after the joined relation."""
        if self.kind is _ConstraintKind.ON:
            return f" ON {self.expr}"
        if self.kind is _ConstraintKind.USING:
            return f" USING({comma_separated(self.columns)})"
        return ""


class JoinKind(_KeywordEnum):
    """The join operator, valued by its SQL keywords."""

    INNER = "JOIN"
    LEFT_OUTER = "LEFT JOIN"
    RIGHT_OUTER = "RIGHT JOIN"
    FULL_OUTER = "FULL JOIN"
    CROSS_JOIN = "CROSS JOIN"
    LEFT_SEMI = "LEFT SEMI JOIN"
    RIGHT_SEMI = "RIGHT SEMI JOIN"
    LEFT_ANTI = "LEFT ANTI JOIN"
    RIGHT_ANTI = "RIGHT ANTI JOIN"
    CROSS_APPLY = "CROSS APPLY"
    OUTER_APPLY = "OUTER APPLY"

    @property
    def takes_constraint(self) -> bool:
        return self not in _UNCONSTRAINED_JOINS


_UNCONSTRAINED_JOINS = frozenset(
    {JoinKind.CROSS_JOIN, JoinKind.CROSS_APPLY, JoinKind.OUTER_APPLY}
)


@dataclass(frozen=True)
class Join:
    """A join of ``relation`` onto the preceding table."""

    relation: Any
    kind: JoinKind = JoinKind.INNER
    constraint: Optional[JoinConstraint] = None

    def __post_init__(self) -> None:
        if self.kind.takes_constraint:
            if self.constraint is None:
                object.__setattr__(self, "constraint", JoinConstraint.none())
        elif self.constraint is not None:
            raise ValueError(f"{self.kind.value} takes no join constraint")

    def __str__(self) -> str:
        if self.constraint is None:
            return f" {self.kind} {self.relation}"
        return (
            f" {self.constraint.prefix}{self.kind} "
            f"{self.relation}{self.constraint.suffix}"
        )


@_node("joins")
class TableWithJoins:
    """A table factor followed by any number of joins."""

    relation: Any
    joins: tuple = ()

    def __str__(self) -> str:
        return str(self.relation) + "".join(map(str, self.joins))