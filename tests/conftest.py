"""Shared fixtures for query option tests."""

from __future__ import annotations

from typing import Any

import pytest

from cqrs_ddd_odata import (
    EntityModel,
    EntityType,
    NavigationProperty,
    QueryContext,
    QueryOptionParser,
    QueryOptions,
    QueryRequest,
    StructuralProperty,
)
from cqrs_ddd_odata.operators_memory import build_default_registry


@pytest.fixture
def registry():
    """Default in-memory operator registry."""
    return build_default_registry()


@pytest.fixture
def model() -> EntityModel:
    customer = EntityType(
        "Customer",
        properties=[
            StructuralProperty("id", "int", nullable=False),
            StructuralProperty("name"),
            StructuralProperty("age", "int"),
            StructuralProperty("city"),
            StructuralProperty("joined", "date"),
        ],
        navigation_properties=[
            NavigationProperty("orders", "Order", collection=True),
            NavigationProperty("manager", "Employee"),
        ],
        key=["id"],
    )
    order = EntityType(
        "Order",
        properties=[
            StructuralProperty("id", "int", nullable=False),
            StructuralProperty("amount", "decimal"),
        ],
        navigation_properties=[NavigationProperty("product", "Product")],
        key=["id"],
    )
    product = EntityType(
        "Product",
        properties=[
            StructuralProperty("id", "int", nullable=False),
            StructuralProperty("title"),
        ],
        key=["id"],
    )
    employee = EntityType(
        "Employee",
        properties=[
            StructuralProperty("id", "int", nullable=False),
            StructuralProperty("name"),
        ],
        navigation_properties=[
            NavigationProperty("manager", "Employee"),
            NavigationProperty("reports", "Employee", collection=True),
        ],
        key=["id"],
    )
    log_entry = EntityType("LogEntry", properties=[StructuralProperty("message")])
    return EntityModel(
        [customer, order, product, employee, log_entry],
        entity_sets={
            "Customers": "Customer",
            "Employees": "Employee",
            "Logs": "LogEntry",
        },
    )


@pytest.fixture
def context(model: EntityModel) -> QueryContext:
    return QueryContext.for_entity_set(model, "Customers")


@pytest.fixture
def employee_context(model: EntityModel) -> QueryContext:
    return QueryContext.for_entity_set(model, "Employees")


@pytest.fixture
def parser(context: QueryContext) -> QueryOptionParser:
    return QueryOptionParser(context)


@pytest.fixture
def parse(parser: QueryOptionParser):
    """Parse a raw parameter map (or query string) against the Customer set."""

    def _parse(query: dict[str, str] | str, path: str = "") -> QueryOptions:
        if isinstance(query, str):
            request = QueryRequest.from_url(query)
        else:
            request = QueryRequest(query=query, path=path)
        return parser.parse(request)

    return _parse


@pytest.fixture
def customers() -> list[dict[str, Any]]:
    return [
        {
            "id": 3,
            "name": "Carol",
            "age": 41,
            "city": "Athens",
            "orders": [
                {"id": 30, "amount": 15.0, "product": {"id": 1, "title": "Pen"}},
            ],
            "manager": None,
        },
        {
            "id": 1,
            "name": "Alice",
            "age": 30,
            "city": "Berlin",
            "orders": [
                {"id": 10, "amount": 120.0, "product": {"id": 2, "title": "Desk"}},
                {"id": 11, "amount": 20.0, "product": None},
                {"id": 12, "amount": 75.5, "product": {"id": 1, "title": "Pen"}},
            ],
            "manager": {"id": 100, "name": "Maria", "manager": None, "reports": []},
        },
        {
            "id": 2,
            "name": "Bob",
            "age": 25,
            "city": "Athens",
            "orders": [],
            "manager": None,
        },
        {
            "id": 5,
            "name": "Eve",
            "age": None,
            "city": None,
            "orders": None,
            "manager": None,
        },
        {
            "id": 4,
            "name": "Dave",
            "age": 52,
            "city": "Paris",
            "orders": [
                {"id": 40, "amount": 60.0, "product": {"id": 3, "title": "Lamp"}},
            ],
            "manager": {"id": 101, "name": "Nikos", "manager": None, "reports": []},
        },
    ]
