"""The projection list, wildcard options and the ``SELECT`` body itself.

Expressions, identifiers, names and window specifications are held as
arbitrary objects and rendered with ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .clauses import (
    Distinct,
    GroupByExpr,
    SelectInto,
    Top,
    _clause,
    _flag,
    _listed,
    _node,
    _require_all,
)
from .display import comma_separated


def _single_or_list(keyword: str, items: tuple, parenthesized: bool) -> str:
    if parenthesized:
        return f"{keyword} ({comma_separated(items)})"
    return f"{keyword} {items[0]}"


def _check_single(keyword: str, items: tuple, parenthesized: bool, noun: str) -> None:
    if not parenthesized and len(items) != 1:
        raise ValueError(f"{keyword} without parentheses takes exactly one {noun}")


@dataclass(frozen=True)
class IdentWithAlias:
    """``<ident> AS <alias>``."""

    ident: Any
    alias: Any

    def __str__(self) -> str:
        return f"{self.ident} AS {self.alias}"


@_node("columns")
class ExcludeSelectItem:
    """Snowflake ``EXCLUDE``: one bare column, or a parenthesized list."""

    columns: tuple
    parenthesized: bool = True

    def __post_init__(self) -> None:
        _check_single("EXCLUDE", self.columns, self.parenthesized, "column")

    def __str__(self) -> str:
        return _single_or_list("EXCLUDE", self.columns, self.parenthesized)


@_node("items")
class RenameSelectItem:
    """Snowflake ``RENAME``: one bare rename, or a parenthesized list."""

    items: tuple
    parenthesized: bool = True

    def __post_init__(self) -> None:
        _require_all(self.items, IdentWithAlias, "RENAME items must be IdentWithAlias")
        _check_single("RENAME", self.items, self.parenthesized, "item")

    def __str__(self) -> str:
        return _single_or_list("RENAME", self.items, self.parenthesized)


@_node("additional_elements")
class ExceptSelectItem:
    """BigQuery ``EXCEPT (<col> [, ...])`` with at least one column."""

    first_element: Any
    additional_elements: tuple = ()

    def __str__(self) -> str:
        columns = (self.first_element, *self.additional_elements)
        return f"EXCEPT ({comma_separated(columns)})"


@dataclass(frozen=True)
class ReplaceSelectElement:
    """``<expr> [AS] <column_name>`` inside ``REPLACE (...)``."""

    expr: Any
    column_name: Any
    as_keyword: bool = False

    def __str__(self) -> str:
        keyword = " AS " if self.as_keyword else " "
        return f"{self.expr}{keyword}{self.column_name}"


@_node("items")
class ReplaceSelectItem:
    """``REPLACE (<element>, ...)``."""

    items: tuple

    def __post_init__(self) -> None:
        _require_all(
            self.items, ReplaceSelectElement, "REPLACE items must be ReplaceSelectElement"
        )

    def __str__(self) -> str:
        return f"REPLACE ({comma_separated(self.items)})"


@dataclass(frozen=True)
class WildcardAdditionalOptions:
    """Options that may follow a wildcard: EXCLUDE, EXCEPT, RENAME, REPLACE."""

    opt_exclude: Optional[ExcludeSelectItem] = None
    opt_except: Optional[ExceptSelectItem] = None
    opt_rename: Optional[RenameSelectItem] = None
    opt_replace: Optional[ReplaceSelectItem] = None

    def __str__(self) -> str:
        options = (self.opt_exclude, self.opt_except, self.opt_rename, self.opt_replace)
        return "".join(_clause("", option) for option in options)


@dataclass(frozen=True)
class UnnamedExpr:
    """A projection expression without an alias."""

    expr: Any

    def __str__(self) -> str:
        return str(self.expr)


@dataclass(frozen=True)
class ExprWithAlias:
    """A projection expression followed by ``AS <alias>``."""

    expr: Any
    alias: Any

    def __str__(self) -> str:
        return f"{self.expr} AS {self.alias}"


@dataclass(frozen=True)
class QualifiedWildcard:
    """``prefix.*`` such as ``alias.*`` or ``schema.table.*``."""

    prefix: Any
    options: WildcardAdditionalOptions = field(default_factory=WildcardAdditionalOptions)

    def __str__(self) -> str:
        return f"{self.prefix}.*{self.options}"


@dataclass(frozen=True)
class Wildcard:
    """An unqualified ``*``."""

    options: WildcardAdditionalOptions = field(default_factory=WildcardAdditionalOptions)

    def __str__(self) -> str:
        return f"*{self.options}"


@_node("lateral_col_alias")
class LateralView:
    """A Hive ``LATERAL VIEW [OUTER] <expr> <name> [AS cols]``."""

    lateral_view: Any
    lateral_view_name: Any
    lateral_col_alias: tuple = ()
    outer: bool = False

    def __str__(self) -> str:
        outer = _flag(self.outer, " OUTER")
        return (
            f" LATERAL VIEW{outer} {self.lateral_view} {self.lateral_view_name}"
            + _listed("AS", self.lateral_col_alias)
        )


@dataclass(frozen=True)
class NamedWindowDefinition:
    """``<name> AS (<window spec>)`` in a ``WINDOW`` clause."""

    name: Any
    window_spec: Any

    def __str__(self) -> str:
        return f"{self.name} AS ({self.window_spec})"


@_node(
    "projection",
    "from_",
    "lateral_views",
    "cluster_by",
    "distribute_by",
    "sort_by",
    "named_window",
)
class Select:
    """A restricted ``SELECT`` without CTEs or ``ORDER BY``."""

    projection: tuple
    distinct: Optional[Distinct] = None
    top: Optional[Top] = None
    into: Optional[SelectInto] = None
    from_: tuple = ()
    lateral_views: tuple = ()
    selection: Any = None
    group_by: GroupByExpr = field(default_factory=GroupByExpr)
    cluster_by: tuple = ()
    distribute_by: tuple = ()
    sort_by: tuple = ()
    having: Any = None
    named_window: tuple = ()
    qualify: Any = None

    def _group_by_text(self) -> str:
        if self.group_by.all_columns:
            return " GROUP BY ALL"
        return _listed("GROUP BY", self.group_by.expressions)

    def __str__(self) -> str:
        return "".join(
            (
                "SELECT",
                _clause("", self.distinct),
                _clause("", self.top),
                f" {comma_separated(self.projection)}",
                _clause("", self.into),
                _listed("FROM", self.from_),
                *map(str, self.lateral_views),
                _clause("WHERE", self.selection),
                self._group_by_text(),
                _listed("CLUSTER BY", self.cluster_by),
                _listed("DISTRIBUTE BY", self.distribute_by),
                _listed("SORT BY", self.sort_by),
                _clause("HAVING", self.having),
                _listed("WINDOW", self.named_window),
                _clause("QUALIFY", self.qualify),
            )
        )