"""Tests for the $select / $expand parser."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata.clauses import OrderByDirection
from cqrs_ddd_odata.context import QueryContext
from cqrs_ddd_odata.exceptions import (
    FieldNotFoundError,
    GrammarSyntaxError,
    NegativeValueError,
)
from cqrs_ddd_odata.grammar import ODataExpressionGrammar


@pytest.fixture
def grammar() -> ODataExpressionGrammar:
    return ODataExpressionGrammar()


# -- $select -----------------------------------------------------------------


def test_no_select_means_all(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(None, None, context)
    assert clause.all_selected
    assert clause.selected == ()
    assert clause.expanded == ()
    assert clause.depth == 0


def test_select_list(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(" name , age,name", None, context)
    assert not clause.all_selected
    assert clause.selected == ("name", "age")
    assert clause.to_dict() == {"select": ["name", "age"]}


def test_select_star_wins(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand("name,*", None, context)
    assert clause.all_selected
    assert clause.selected == ()


def test_blank_select_means_all(grammar, context: QueryContext) -> None:
    assert grammar.parse_select_and_expand("  ", None, context).all_selected


def test_select_unknown_property(grammar, context: QueryContext) -> None:
    with pytest.raises(FieldNotFoundError) as exc_info:
        grammar.parse_select_and_expand("nmae", None, context)
    assert exc_info.value.option == "$select"
    assert "name" in exc_info.value.suggestions


@pytest.mark.parametrize("raw", ["orders", "name,", "name/first", "a b"])
def test_select_rejects(grammar, context: QueryContext, raw: str) -> None:
    with pytest.raises(GrammarSyntaxError) as exc_info:
        grammar.parse_select_and_expand(raw, None, context)
    assert exc_info.value.option == "$select"


# -- $expand -----------------------------------------------------------------


def test_expand_single(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(None, "orders", context)
    assert clause.all_selected
    (item,) = clause.expanded
    assert item.navigation.name == "orders"
    assert item.context.element_type.name == "Order"
    assert item.select_expand.all_selected
    assert clause.depth == 1


def test_expand_with_nested_options(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(
        "name",
        "orders($select=amount;$filter=amount gt 50;$orderby=amount desc;"
        "$top=1;$skip=0),manager",
        context,
    )
    assert clause.selected == ("name",)
    orders, manager = clause.expanded
    assert orders.select_expand.selected == ("amount",)
    assert orders.filter is not None
    assert orders.filter.is_satisfied_by({"amount": 60})
    assert not orders.filter.is_satisfied_by({"amount": 10})
    assert orders.orderby is not None
    assert orders.orderby.nodes[0].direction is OrderByDirection.DESCENDING
    assert orders.top == 1
    assert orders.skip == 0
    assert manager.navigation.name == "manager"
    assert manager.filter is None


def test_nested_expand_depth(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(
        None, "orders($expand=product($select=title))", context
    )
    assert clause.depth == 2
    assert [i.navigation.name for i in clause.walk_expanded()] == [
        "orders",
        "product",
    ]
    assert clause.to_dict() == {
        "expand": [
            {
                "navigation": "orders",
                "expand": [{"navigation": "product", "select": ["title"]}],
            }
        ]
    }


def test_nested_option_names_ignore_case(grammar, context: QueryContext) -> None:
    clause = grammar.parse_select_and_expand(None, "orders($TOP=2)", context)
    assert clause.expanded[0].top == 2


def test_levels_on_recursive_navigation(
    grammar, employee_context: QueryContext
) -> None:
    clause = grammar.parse_select_and_expand(
        None, "manager($levels=3;$select=name)", employee_context
    )
    assert clause.depth == 3
    names = [i.navigation.name for i in clause.walk_expanded()]
    assert names == ["manager", "manager", "manager"]
    assert clause.expanded[0].select_expand.selected == ("name",)


@pytest.mark.parametrize(
    "raw",
    [
        "name",  # structural property
        "*",  # wildcard
        "orders,orders",  # duplicate
        "orders(",  # unbalanced
        "orders($foo=1)",  # unknown nested option
        "orders($top)",  # missing '='
        "orders()",  # empty nested options
        "orders($top=1;$top=2)",  # duplicate nested option
        "orders($filter=)",  # empty nested filter
        "orders($levels=2)",  # not recursive
        "orders,",  # empty item
    ],
)
def test_expand_rejects(grammar, context: QueryContext, raw: str) -> None:
    with pytest.raises(GrammarSyntaxError) as exc_info:
        grammar.parse_select_and_expand(None, raw, context)
    assert exc_info.value.option == "$expand"


@pytest.mark.parametrize("raw", ["manager($levels=max)", "manager($levels=0)"])
def test_levels_rejects(grammar, employee_context: QueryContext, raw: str) -> None:
    with pytest.raises(GrammarSyntaxError):
        grammar.parse_select_and_expand(None, raw, employee_context)


def test_nested_errors_report_expand(grammar, context: QueryContext) -> None:
    with pytest.raises(FieldNotFoundError) as exc_info:
        grammar.parse_select_and_expand(None, "orders($filter=nope eq 1)", context)
    assert exc_info.value.option == "$expand"
    assert exc_info.value.type_name == "Order"

    with pytest.raises(NegativeValueError) as neg_info:
        grammar.parse_select_and_expand(None, "orders($top=-1)", context)
    assert neg_info.value.option == "$expand"


def test_unknown_expand_property(grammar, context: QueryContext) -> None:
    with pytest.raises(FieldNotFoundError) as exc_info:
        grammar.parse_select_and_expand(None, "ordres", context)
    assert "orders" in exc_info.value.suggestions
