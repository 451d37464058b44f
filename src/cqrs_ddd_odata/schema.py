"""
In-memory entity model.

Default implementation of :class:`~cqrs_ddd_odata.ports.IEntityModel`::

    customer = EntityType(
        "Customer",
        properties=[StructuralProperty("id", "int"), StructuralProperty("name")],
        navigation_properties=[NavigationProperty("orders", "Order", collection=True)],
        key=["id"],
    )
    model = EntityModel([customer, order], entity_sets={"Customers": "Customer"})
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class PrimitiveKind(str, Enum):
    """Operand categories the expression grammar type-checks against."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    TIME = "time"
    GUID = "guid"


_PRIMITIVE_KINDS: dict[str, PrimitiveKind] = {
    **dict.fromkeys(("str", "string", "text"), PrimitiveKind.STRING),
    **dict.fromkeys(
        (
            "int",
            "integer",
            "smallinteger",
            "biginteger",
            "float",
            "double",
            "decimal",
            "numeric",
        ),
        PrimitiveKind.NUMBER,
    ),
    **dict.fromkeys(("bool", "boolean"), PrimitiveKind.BOOLEAN),
    "date": PrimitiveKind.DATE,
    "datetime": PrimitiveKind.DATETIME,
    "time": PrimitiveKind.TIME,
    **dict.fromkeys(("uuid", "guid"), PrimitiveKind.GUID),
}


def primitive_kind(type_name: str) -> PrimitiveKind | None:
    """
    Classify a declared property type name (case-insensitive).

    Returns ``None`` for names outside the known set (``json``, enums,
    custom types); such operands are not type-checked.
    """
    return _PRIMITIVE_KINDS.get(type_name.lower())


@dataclass(frozen=True)
class StructuralProperty:
    """
    A primitive-valued property (column).

    ``type_name`` drives operand type checks in expressions (see
    :func:`primitive_kind`). A property with ``nullable=False`` cannot be
    compared with the ``null`` literal.
    """

    name: str
    type_name: str = "str"
    nullable: bool = True

    @property
    def kind(self) -> PrimitiveKind | None:
        return primitive_kind(self.type_name)


@dataclass(frozen=True)
class NavigationProperty:
    """A relationship to another entity type, single- or collection-valued."""

    name: str
    target: str
    collection: bool = False


@dataclass(frozen=True)
class EntityType:
    """Structural and navigation properties of one entity type."""

    name: str
    properties: tuple[StructuralProperty, ...] = ()
    navigation_properties: tuple[NavigationProperty, ...] = ()
    key: tuple[str, ...] = ()
    _members: dict[str, StructuralProperty | NavigationProperty] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", tuple(self.properties))
        object.__setattr__(
            self, "navigation_properties", tuple(self.navigation_properties)
        )
        object.__setattr__(self, "key", tuple(self.key))

        for member in (*self.properties, *self.navigation_properties):
            if member.name in self._members:
                raise ValueError(
                    f"Duplicate member '{member.name}' on entity type '{self.name}'"
                )
            self._members[member.name] = member

        for key_name in self.key:
            if not isinstance(self._members.get(key_name), StructuralProperty):
                raise ValueError(
                    f"Key '{key_name}' is not a structural property of '{self.name}'"
                )

    def find_property(self, name: str) -> StructuralProperty | None:
        member = self._members.get(name)
        return member if isinstance(member, StructuralProperty) else None

    def find_navigation_property(self, name: str) -> NavigationProperty | None:
        member = self._members.get(name)
        return member if isinstance(member, NavigationProperty) else None

    def property_names(self) -> list[str]:
        """Structural property names in declaration order."""
        return [p.name for p in self.properties]

    def member_names(self) -> list[str]:
        """Structural and navigation property names in declaration order."""
        return list(self._members)


@dataclass(frozen=True)
class EntitySet:
    """A named collection of entities of one type (the navigation source)."""

    name: str
    entity_type: str


class EntityModel:
    """Registry of entity types and entity sets, read-only after construction."""

    def __init__(
        self,
        entity_types: Iterable[EntityType],
        entity_sets: Mapping[str, str] | None = None,
    ) -> None:
        self._types: dict[str, EntityType] = {}
        for entity_type in entity_types:
            if entity_type.name in self._types:
                raise ValueError(f"Duplicate entity type '{entity_type.name}'")
            self._types[entity_type.name] = entity_type

        for entity_type in self._types.values():
            for nav in entity_type.navigation_properties:
                if nav.target not in self._types:
                    raise ValueError(
                        f"Navigation property '{entity_type.name}.{nav.name}' "
                        f"targets unknown type '{nav.target}'"
                    )

        self._sets: dict[str, EntitySet] = {}
        for set_name, type_name in (entity_sets or {}).items():
            if type_name not in self._types:
                raise ValueError(
                    f"Entity set '{set_name}' refers to unknown type '{type_name}'"
                )
            self._sets[set_name] = EntitySet(set_name, type_name)

    def find_type(self, name: str) -> EntityType | None:
        return self._types.get(name)

    def find_entity_set(self, name: str) -> EntitySet | None:
        return self._sets.get(name)

    @property
    def entity_types(self) -> list[EntityType]:
        return list(self._types.values())

    def __repr__(self) -> str:
        return f"EntityModel(types={sorted(self._types)}, sets={sorted(self._sets)})"
