"""Tests for the in-memory entity model and QueryContext."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata import (
    ArgumentNullError,
    EntityModel,
    EntityType,
    NavigationProperty,
    PrimitiveKind,
    QueryContext,
    StructuralProperty,
    primitive_kind,
)
from cqrs_ddd_odata.ports import IEntityModel, IEntityType


def test_entity_type_lookup(model: EntityModel) -> None:
    customer = model.find_type("Customer")
    assert customer is not None
    assert isinstance(customer, IEntityType)
    assert customer.find_property("name") == StructuralProperty("name")
    assert customer.find_property("orders") is None
    assert customer.find_navigation_property("orders") == NavigationProperty(
        "orders", "Order", collection=True
    )
    assert customer.property_names() == ["id", "name", "age", "city", "joined"]
    assert "orders" in customer.member_names()
    assert customer.key == ("id",)


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("str", PrimitiveKind.STRING),
        ("Integer", PrimitiveKind.NUMBER),
        ("decimal", PrimitiveKind.NUMBER),
        ("date", PrimitiveKind.DATE),
        ("uuid", PrimitiveKind.GUID),
        ("json", None),
    ],
)
def test_primitive_kind(type_name: str, expected: PrimitiveKind | None) -> None:
    assert primitive_kind(type_name) is expected
    assert StructuralProperty("p", type_name).kind is expected


def test_model_satisfies_port(model: EntityModel) -> None:
    assert isinstance(model, IEntityModel)
    assert model.find_type("Missing") is None
    assert model.find_entity_set("Customers") is not None


def test_duplicate_member_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate member"):
        EntityType(
            "T",
            properties=[StructuralProperty("a")],
            navigation_properties=[NavigationProperty("a", "T")],
        )


def test_key_must_be_structural() -> None:
    with pytest.raises(ValueError, match="Key 'missing'"):
        EntityType("T", properties=[StructuralProperty("a")], key=["missing"])


def test_unknown_navigation_target_rejected() -> None:
    with pytest.raises(ValueError, match="unknown type"):
        EntityModel(
            [EntityType("T", navigation_properties=[NavigationProperty("x", "U")])]
        )


def test_unknown_entity_set_type_rejected() -> None:
    with pytest.raises(ValueError, match="unknown type"):
        EntityModel([EntityType("T")], entity_sets={"Ts": "U"})


# -- QueryContext ------------------------------------------------------------


def test_context_for_entity_set(model: EntityModel) -> None:
    context = QueryContext.for_entity_set(model, "Customers")
    assert context.element_type.name == "Customer"
    assert context.navigation_source is not None
    assert context.navigation_source.name == "Customers"


def test_context_resolves_type_name(model: EntityModel) -> None:
    context = QueryContext(model, "Order")  # type: ignore[arg-type]
    assert context.element_type.name == "Order"


def test_context_requires_model_and_type(model: EntityModel) -> None:
    customer = model.find_type("Customer")
    with pytest.raises(ArgumentNullError):
        QueryContext(None, customer)  # type: ignore[arg-type]
    with pytest.raises(ArgumentNullError):
        QueryContext(model, None)  # type: ignore[arg-type]


def test_context_unknown_set(model: EntityModel) -> None:
    with pytest.raises(ValueError, match="Unknown entity set"):
        QueryContext.for_entity_set(model, "Nope")


def test_context_for_navigation(context: QueryContext) -> None:
    nav = context.element_type.find_navigation_property("orders")
    assert nav is not None
    assert context.for_navigation(nav).element_type.name == "Order"


def test_context_is_immutable(context: QueryContext) -> None:
    with pytest.raises(AttributeError):
        context.model = None  # type: ignore[misc]
