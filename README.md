# sqlqueryast

Immutable Python objects that describe a SQL query expression: `WITH` and
common table expressions, `SELECT` blocks, set operations, `ORDER BY`,
`LIMIT`, `OFFSET`, `FETCH`, locking clauses, MSSQL `FOR` clauses and the
table factors and joins of a `FROM` clause. Calling `str()` on any node gives
its SQL text.

The package has no runtime dependencies.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `sqlqueryast.display` — rendering helpers: `separated(items, sep)`,
  `comma_separated(items)` (joins with `", "`) and `compound_identifier(parts)`
  (joins with `"."`).
- `sqlqueryast.clauses` — the smaller clauses: `OrderByExpr`, `Offset` with
  `OffsetRows`, `Fetch`, `LockClause` with `LockType` and `NonBlock`, `Distinct`,
  `Top`, `Values`, `SelectInto`, `GroupByExpr` (with `GroupByExpr.all()` for
  `GROUP BY ALL`), the MSSQL clauses `ForBrowse`, `ForJsonClause` and
  `ForXmlClause` (with `ForJson`, `ForXml` and `ForXmlMode`), and the
  `JSON_TABLE` column nodes `JsonTableColumn` and `JsonTableColumnErrorHandling`
  (built with `.null()`, `.error()` or `.default(value)`; the kinds are listed in
  `ErrorHandlingKind`).
- `sqlqueryast.tables` — the `FROM` side: `TableName`, `DerivedTable`,
  `TableFunction`, `FunctionTable`, `UnnestTable`, `JsonTable`, `NestedJoin`,
  `Pivot`, `Unpivot`, `TableAlias`, `ForSystemTimeAsOf`, and joins with `Join`,
  `JoinKind`, `JoinConstraint` (`.on(expr)`, `.using(columns)`, `.natural()`,
  `.none()`) and `TableWithJoins`.
- `sqlqueryast.select` — the `SELECT` block and its projection items:
  `Select`, `UnnamedExpr`, `ExprWithAlias`, `Wildcard`, `QualifiedWildcard`,
  the wildcard options (`WildcardAdditionalOptions`, `ExcludeSelectItem`,
  `ExceptSelectItem`, `RenameSelectItem`, `ReplaceSelectItem`,
  `ReplaceSelectElement`, `IdentWithAlias`), `LateralView` and
  `NamedWindowDefinition`.
- `sqlqueryast.query` — the top of the tree: `Query`, `With`, `Cte`,
  `SetOperation` with `SetOperator` and `SetQuantifier`, `NestedQuery` and
  `TableCommand`.

Field names that would clash with Python keywords carry a trailing underscore:
`Query.with_`, `Select.from_` and `Cte.from_`.

## Example

```python
from sqlqueryast.clauses import OrderByExpr, Offset, OffsetRows
from sqlqueryast.query import Query
from sqlqueryast.select import Select, UnnamedExpr
from sqlqueryast.tables import TableName, TableWithJoins

select = Select(
    projection=[UnnamedExpr("id"), UnnamedExpr("name")],
    from_=[TableWithJoins(TableName("customer"))],
)
query = Query(
    body=select,
    order_by=[OrderByExpr("id", asc=False)],
    limit="10",
    offset=Offset("5", OffsetRows.NONE),
)
print(query)
# SELECT id, name FROM customer ORDER BY id DESC LIMIT 10 OFFSET 5
```

## How nodes behave

- Nodes are frozen dataclasses. Lists passed to them are stored as tuples, so
  nodes compare by value and can be hashed when their contents can.
- Within a `Select` or `Query`, an empty list leaves its clause out and `None`
  leaves an optional part out; clauses always come out in a fixed order,
  whatever order they were given in.
- `Top` renders an `int` quantity bare (`TOP 10`) and any other quantity in
  parentheses (`TOP (expr)`).
- Inconsistent nodes are refused when built: for example a negative `TOP`
  constant, `GROUP BY ALL` with expressions, a `DEFAULT` handling without a
  value, a constraint on a `CROSS JOIN`, or a bare `EXCLUDE` with more than one
  column raise `ValueError`; items of the wrong node type in `JsonTable`,
  `RenameSelectItem` or `ReplaceSelectItem` raise `TypeError`.

## What it does not do

The package only builds and renders trees. It does not read SQL text: there
is no tokenizer or parser. Expressions, identifiers, object names, data types,
literal values and window specifications have no node classes of their own;
they are taken as-is, and anything whose `str()` is the SQL text you want will
do, so plain strings are enough for simple trees.