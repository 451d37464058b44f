"""Tests for SelectExpandProjector."""

from __future__ import annotations

from dataclasses import dataclass

from cqrs_ddd_odata import SelectExpandProjector


def _projector(parse, query: dict[str, str]) -> SelectExpandProjector:
    options = parse(query)
    assert options.select_expand is not None
    return SelectExpandProjector(
        options.select_expand.select_expand_clause, options.context
    )


def test_select_copies_only_selected(parse, customers) -> None:
    project = _projector(parse, {"$select": "name,age"})
    assert project(customers[0]) == {"name": "Carol", "age": 41}


def test_star_selects_all_structural(parse, customers) -> None:
    project = _projector(parse, {"$select": "*"})
    assert project(customers[1]) == {
        "id": 1,
        "name": "Alice",
        "age": 30,
        "city": "Berlin",
        "joined": None,
    }


def test_expand_single_navigation(parse, customers) -> None:
    project = _projector(parse, {"$select": "id", "$expand": "manager($select=name)"})
    assert project(customers[1]) == {"id": 1, "manager": {"name": "Maria"}}
    assert project(customers[0]) == {"id": 3, "manager": None}


def test_expand_collection_with_nested_options(parse, customers) -> None:
    project = _projector(
        parse,
        {
            "$select": "name",
            "$expand": (
                "orders($filter=amount gt 15;$orderby=amount desc;"
                "$skip=1;$top=1;$select=id)"
            ),
        },
    )
    assert project(customers[1]) == {"name": "Alice", "orders": [{"id": 12}]}


def test_missing_collection_projects_to_empty_list(parse, customers) -> None:
    project = _projector(parse, {"$select": "id", "$expand": "orders"})
    assert project(customers[3]) == {"id": 5, "orders": []}
    assert project(customers[2]) == {"id": 2, "orders": []}


def test_nested_expand(parse, customers) -> None:
    project = _projector(
        parse,
        {
            "$select": "id",
            "$expand": "orders($select=id;$expand=product($select=title))",
        },
    )
    assert project(customers[1])["orders"] == [
        {"id": 10, "product": {"title": "Desk"}},
        {"id": 11, "product": None},
        {"id": 12, "product": {"title": "Pen"}},
    ]


def test_objects_are_read_by_attribute(parse) -> None:
    @dataclass
    class Customer:
        id: int
        name: str

    project = _projector(parse, {"$select": "name"})
    assert project(Customer(7, "Zoe")) == {"name": "Zoe"}
