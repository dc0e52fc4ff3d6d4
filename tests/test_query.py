import dataclasses

import pytest

from sqlqueryast.clauses import (
    Fetch,
    ForBrowse,
    ForJson,
    ForJsonClause,
    LockClause,
    LockType,
    NonBlock,
    Offset,
    OffsetRows,
    OrderByExpr,
    Values,
)
from sqlqueryast.query import (
    Cte,
    NestedQuery,
    Query,
    SetOperation,
    SetOperator,
    SetQuantifier,
    TableCommand,
    With,
)
from sqlqueryast.select import Select, UnnamedExpr, Wildcard
from sqlqueryast.tables import TableAlias, TableName, TableWithJoins


def _from(name):
    return (TableWithJoins(TableName(name)),)


def _select(*exprs):
    return Select([UnnamedExpr(e) for e in exprs])


def test_limit_and_offset_placeholders():
    query = Query(
        Select([Wildcard()], from_=_from("user")), limit="?", offset=Offset("?")
    )
    assert str(query) == "SELECT * FROM user LIMIT ? OFFSET ?"


def test_limit_and_offset_numbers():
    query = Query(
        Select(
            [UnnamedExpr("id"), UnnamedExpr("fname"), UnnamedExpr("lname")],
            from_=_from("customer"),
        ),
        limit="10",
        offset=Offset("5"),
    )
    assert str(query) == "SELECT id, fname, lname FROM customer LIMIT 10 OFFSET 5"


def test_values_with_row_keyword():
    query = Query(Values([["1", "true", "'a'"]], explicit_row=True))
    assert str(query) == "VALUES ROW(1, true, 'a')"


def test_values_with_empty_rows():
    assert str(Query(Values([(), ()]))) == "VALUES (), ()"


def test_bare_query_renders_as_body():
    body = Select([UnnamedExpr("foo")], from_=_from("bar"))
    assert str(Query(body)) == str(body)


def test_clause_order():
    query = Query(
        _select("a"),
        order_by=[OrderByExpr("a", asc=False)],
        limit="10",
        offset=Offset("5", OffsetRows.ROWS),
        limit_by=["a", "b"],
        fetch=Fetch(quantity="3"),
        locks=[
            LockClause(LockType.UPDATE),
            LockClause(LockType.SHARE, nonblock=NonBlock.NOWAIT),
        ],
        for_clause=ForBrowse(),
    )
    text = str(query)
    markers = [
        " ORDER BY a DESC",
        " LIMIT 10",
        " OFFSET 5 ROWS",
        " BY a, b",
        " FETCH FIRST 3 ROWS ONLY",
        " FOR UPDATE FOR SHARE NOWAIT",
        " FOR BROWSE",
    ]
    positions = [text.index(marker) for marker in markers]
    assert positions == sorted(positions)
    assert text.endswith(" FOR BROWSE")


def test_for_json_clause_is_last():
    clause = ForJsonClause(ForJson.PATH, root="r", include_null_values=True)
    query = Query(_select("a"), limit="1", for_clause=clause)
    assert str(query).endswith(" " + str(clause))


def test_with_clause_precedes_body():
    cte = Cte(TableAlias("cte"), Query(_select("1")))
    with_clause = With([cte], recursive=True)
    body = Select([Wildcard()], from_=_from("cte"))
    query = Query(body, with_=with_clause)
    assert str(query) == f"{with_clause} {body}"
    assert str(with_clause).startswith("WITH RECURSIVE ")


def test_non_recursive_with():
    with_clause = With([Cte(TableAlias("a"), Query(_select("1")))])
    assert str(with_clause).startswith("WITH ")
    assert "RECURSIVE" not in str(with_clause)


def test_cte_with_from():
    cte = Cte(TableAlias("cte"), Query(_select("1")), from_="src")
    text = str(cte)
    assert text.startswith("cte AS (")
    assert text.endswith(" FROM src")


def test_union_all():
    operation = SetOperation(
        _select("1"), SetOperator.UNION, _select("2"), SetQuantifier.ALL
    )
    assert str(operation) == "SELECT 1 UNION ALL SELECT 2"


def test_missing_quantifier_adds_no_space():
    left, right = _select("1"), _select("2")
    with_all = SetOperation(left, SetOperator.EXCEPT, right, SetQuantifier.ALL)
    without = SetOperation(left, SetOperator.EXCEPT, right)
    assert str(without) == str(with_all).replace(" ALL", "")


def test_nested_set_operations():
    inner = SetOperation(_select("1"), SetOperator.UNION, _select("2"))
    outer = SetOperation(inner, SetOperator.UNION, NestedQuery(Query(_select("3"))))
    text = str(outer)
    assert text.count("UNION") == 2
    assert text.startswith(str(inner))


def test_nested_query_is_parenthesized():
    query = Query(_select("1"), limit="1")
    assert str(NestedQuery(query)) == f"({query})"


@pytest.mark.parametrize(
    "quantifier, text",
    [
        (SetQuantifier.ALL, "ALL"),
        (SetQuantifier.DISTINCT, "DISTINCT"),
        (SetQuantifier.BY_NAME, "BY NAME"),
        (SetQuantifier.ALL_BY_NAME, "ALL BY NAME"),
        (SetQuantifier.DISTINCT_BY_NAME, "DISTINCT BY NAME"),
        (SetQuantifier.NONE, ""),
    ],
)
def test_set_quantifier_text(quantifier, text):
    assert str(quantifier) == text


@pytest.mark.parametrize(
    "operator, text",
    [
        (SetOperator.UNION, "UNION"),
        (SetOperator.EXCEPT, "EXCEPT"),
        (SetOperator.INTERSECT, "INTERSECT"),
    ],
)
def test_set_operator_text(operator, text):
    assert str(operator) == text


def test_table_command_with_schema():
    assert str(TableCommand("t", "s")) == "TABLE s.t"


def test_table_command_without_schema():
    assert str(TableCommand("t")) == "TABLE t"


def test_table_command_needs_name():
    with pytest.raises(ValueError):
        TableCommand(None)


def test_lists_and_tuples_compare_equal():
    body = _select("a")
    assert Query(body, order_by=[OrderByExpr("a")], limit_by=["a"]) == Query(
        body, order_by=(OrderByExpr("a"),), limit_by=("a",)
    )


def test_query_is_immutable():
    query = Query(_select("a"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        query.limit = "1"
    assert str(query) == "SELECT a"