"""Clauses that make up parts of a query: ordering, limits, locks and more.

Expressions, identifiers, names, data types and literal values are held as
arbitrary objects and rendered with ``str``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, TypeVar

from .display import comma_separated

_T = TypeVar("_T")


def _node(*sequence_fields: str) -> Callable[[type[_T]], type[_T]]:
    """Make a frozen dataclass whose named fields are stored as tuples.

    A field holding ``None`` stays ``None``. Any ``__post_init__`` written in
    the class body runs after the conversion.
    """

    def wrap(cls: type[_T]) -> type[_T]:
        validate = cls.__dict__.get("__post_init__")

        def __post_init__(self: Any) -> None:
            for name in sequence_fields:
                value = getattr(self, name)
                if value is not None:
                    object.__setattr__(self, name, tuple(value))
            if validate is not None:
                validate(self)

        cls.__post_init__ = __post_init__  # type: ignore[attr-defined]
        return dataclass(frozen=True)(cls)

    return wrap


def _require_all(items: Iterable[Any], kind: type, message: str) -> None:
    if not all(isinstance(item, kind) for item in items):
        raise TypeError(message)


def _clause(keyword: str, value: Any) -> str:
    """``" KEYWORD value"`` (or ``" value"``), or nothing when value is None."""
    if value is None:
        return ""
    return f" {keyword} {value}" if keyword else f" {value}"


def _listed(keyword: str, items: tuple) -> str:
    """``" KEYWORD a, b"``, or nothing when there are no items."""
    return f" {keyword} {comma_separated(items)}" if items else ""


def _flag(enabled: bool, text: str) -> str:
    return text if enabled else ""


class _KeywordEnum(Enum):
    """An enum whose value is the SQL text it renders as."""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OrderByExpr:
    """An ``ORDER BY`` item with optional direction and null placement."""

    expr: Any
    asc: Optional[bool] = None
    nulls_first: Optional[bool] = None

    def __str__(self) -> str:
        parts = [str(self.expr)]
        if self.asc is not None:
            parts.append("ASC" if self.asc else "DESC")
        if self.nulls_first is not None:
            parts.append("NULLS FIRST" if self.nulls_first else "NULLS LAST")
        return " ".join(parts)


class OffsetRows(_KeywordEnum):
    """The keyword after ``OFFSET <n>``; omitting it is a MySQL quirk."""

    NONE = ""
    ROW = " ROW"
    ROWS = " ROWS"


@dataclass(frozen=True)
class Offset:
    """``OFFSET <n> [ ROW | ROWS ]``."""

    value: Any
    rows: OffsetRows = OffsetRows.NONE

    def __str__(self) -> str:
        return f"OFFSET {self.value}{self.rows}"


@dataclass(frozen=True)
class Fetch:
    """``FETCH FIRST [<n> [PERCENT]] ROWS { ONLY | WITH TIES }``."""

    with_ties: bool = False
    percent: bool = False
    quantity: Any = None

    def __str__(self) -> str:
        extension = "WITH TIES" if self.with_ties else "ONLY"
        if self.quantity is None:
            return f"FETCH FIRST ROWS {extension}"
        percent = _flag(self.percent, " PERCENT")
        return f"FETCH FIRST {self.quantity}{percent} ROWS {extension}"


class LockType(_KeywordEnum):
    """Lock strength of a ``FOR ...`` clause."""

    SHARE = "SHARE"
    UPDATE = "UPDATE"


class NonBlock(_KeywordEnum):
    """What a locking clause does when a row is already locked."""

    NOWAIT = "NOWAIT"
    SKIP_LOCKED = "SKIP LOCKED"


@dataclass(frozen=True)
class LockClause:
    """``FOR { UPDATE | SHARE } [ OF name ] [ SKIP LOCKED | NOWAIT ]``."""

    lock_type: LockType
    of: Any = None
    nonblock: Optional[NonBlock] = None

    def __str__(self) -> str:
        return f"FOR {self.lock_type}{_clause('OF', self.of)}{_clause('', self.nonblock)}"


@_node("on")
class Distinct:
    """``DISTINCT``, or ``DISTINCT ON (...)`` when ``on`` is given."""

    on: Optional[tuple] = None

    def __str__(self) -> str:
        if self.on is None:
            return "DISTINCT"
        return f"DISTINCT ON ({comma_separated(self.on)})"


@dataclass(frozen=True)
class Top:
    """MSSQL ``TOP``: an int quantity is a bare constant, anything else is
    rendered in parentheses."""

    with_ties: bool = False
    percent: bool = False
    quantity: Any = None

    def __post_init__(self) -> None:
        if self._is_constant() and self.quantity < 0:
            raise ValueError("TOP constant must not be negative")

    def _is_constant(self) -> bool:
        return isinstance(self.quantity, int) and not isinstance(self.quantity, bool)

    def __str__(self) -> str:
        extension = _flag(self.with_ties, " WITH TIES")
        if self.quantity is None:
            return f"TOP{extension}"
        percent = _flag(self.percent, " PERCENT")
        quantity = self.quantity if self._is_constant() else f"({self.quantity})"
        return f"TOP {quantity}{percent}{extension}"


@dataclass(frozen=True)
class Values:
    """A ``VALUES`` list; ``explicit_row`` adds MySQL's ``ROW`` keyword."""

    rows: tuple = ()
    explicit_row: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", tuple(tuple(row) for row in self.rows))

    def __str__(self) -> str:
        prefix = _flag(self.explicit_row, "ROW")
        rendered = ", ".join(f"{prefix}({comma_separated(row)})" for row in self.rows)
        return f"VALUES {rendered}"


@dataclass(frozen=True)
class SelectInto:
    """``INTO [TEMPORARY] [UNLOGGED] [TABLE] name``."""

    name: Any
    temporary: bool = False
    unlogged: bool = False
    table: bool = False

    def __str__(self) -> str:
        modifiers = (
            _flag(self.temporary, " TEMPORARY")
            + _flag(self.unlogged, " UNLOGGED")
            + _flag(self.table, " TABLE")
        )
        return f"INTO{modifiers} {self.name}"


@_node("expressions")
class GroupByExpr:
    """``GROUP BY`` either a list of expressions or ``ALL``."""

    expressions: tuple = ()
    all_columns: bool = False

    def __post_init__(self) -> None:
        if self.all_columns and self.expressions:
            raise ValueError("GROUP BY ALL takes no expressions")

    @classmethod
    def all(cls) -> "GroupByExpr":
        """The ``GROUP BY ALL`` form."""
        return cls(all_columns=True)

    def __str__(self) -> str:
        if self.all_columns:
            return "GROUP BY ALL"
        return f"GROUP BY ({comma_separated(self.expressions)})"


class ForJson(_KeywordEnum):
    """Mode of a ``FOR JSON`` clause."""

    AUTO = "AUTO"
    PATH = "PATH"


class ForXmlMode(Enum):
    """Mode of a ``FOR XML`` clause."""

    RAW = "RAW"
    AUTO = "AUTO"
    EXPLICIT = "EXPLICIT"
    PATH = "PATH"


_XML_MODES_WITH_ROOT = frozenset({ForXmlMode.RAW, ForXmlMode.PATH})


def _root(root: Optional[str], template: str) -> str:
    return "" if root is None else template.format(root)


@dataclass(frozen=True)
class ForXml:
    """A ``FOR XML`` mode; ``RAW`` and ``PATH`` may name an element."""

    mode: ForXmlMode
    root: Optional[str] = None

    def __post_init__(self) -> None:
        if self.root is not None and self.mode not in _XML_MODES_WITH_ROOT:
            raise ValueError(f"FOR XML {self.mode.value} takes no element name")

    def __str__(self) -> str:
        return self.mode.value + _root(self.root, "('{}')")


@dataclass(frozen=True)
class ForBrowse:
    """MSSQL ``FOR BROWSE``."""

    def __str__(self) -> str:
        return "FOR BROWSE"


@dataclass(frozen=True)
class ForJsonClause:
    """MSSQL ``FOR JSON`` with its options."""

    for_json: ForJson
    root: Optional[str] = None
    include_null_values: bool = False
    without_array_wrapper: bool = False

    def __str__(self) -> str:
        return (
            f"FOR JSON {self.for_json}"
            + _root(self.root, ", ROOT('{}')")
            + _flag(self.include_null_values, ", INCLUDE_NULL_VALUES")
            + _flag(self.without_array_wrapper, ", WITHOUT_ARRAY_WRAPPER")
        )


@dataclass(frozen=True)
class ForXmlClause:
    """MSSQL ``FOR XML`` with its options."""

    for_xml: ForXml
    elements: bool = False
    binary_base64: bool = False
    root: Optional[str] = None
    type_directive: bool = False

    def __str__(self) -> str:
        return (
            f"FOR XML {self.for_xml}"
            + _flag(self.binary_base64, ", BINARY BASE64")
            + _flag(self.type_directive, ", TYPE")
            + _root(self.root, ", ROOT('{}')")
            + _flag(self.elements, ", ELEMENTS")
        )


class ErrorHandlingKind(Enum):
    """How a ``JSON_TABLE`` column handles an empty or failing path."""

    NULL = "NULL"
    DEFAULT = "DEFAULT"
    ERROR = "ERROR"


@dataclass(frozen=True)
class JsonTableColumnErrorHandling:
    """``NULL``, ``DEFAULT <value>`` or ``ERROR``."""

    kind: ErrorHandlingKind
    value: Any = None

    def __post_init__(self) -> None:
        takes_value = self.kind is ErrorHandlingKind.DEFAULT
        if takes_value and self.value is None:
            raise ValueError("DEFAULT handling needs a value")
        if not takes_value and self.value is not None:
            raise ValueError(f"{self.kind.value} handling takes no value")

    @classmethod
    def null(cls) -> "JsonTableColumnErrorHandling":
        return cls(ErrorHandlingKind.NULL)

    @classmethod
    def error(cls) -> "JsonTableColumnErrorHandling":
        return cls(ErrorHandlingKind.ERROR)

    @classmethod
    def default(cls, value: Any) -> "JsonTableColumnErrorHandling":
        return cls(ErrorHandlingKind.DEFAULT, value)

    def __str__(self) -> str:
        return self.kind.value + _clause("", self.value)


@dataclass(frozen=True)
class JsonTableColumn:
    """A column definition inside ``JSON_TABLE(... COLUMNS(...))``."""

    name: Any
    data_type: Any
    path: Any
    exists: bool = False
    on_empty: Optional[JsonTableColumnErrorHandling] = None
    on_error: Optional[JsonTableColumnErrorHandling] = None

    def __str__(self) -> str:
        exists = _flag(self.exists, " EXISTS")
        text = f"{self.name} {self.data_type}{exists} PATH {self.path}"
        for handling, event in ((self.on_empty, "EMPTY"), (self.on_error, "ERROR")):
            if handling is not None:
                text += f" {handling} ON {event}"
        return text