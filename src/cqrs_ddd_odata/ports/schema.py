"""IEntityModel / IEntityType — schema provider protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..schema import EntitySet, NavigationProperty, StructuralProperty


@runtime_checkable
class IEntityType(Protocol):
    """
    Read-only view of an entity type.

    Filter, order-by and select/expand expressions are bound against it.
    """

    @property
    def name(self) -> str: ...

    @property
    def key(self) -> tuple[str, ...]: ...

    def find_property(self, name: str) -> StructuralProperty | None: ...

    def find_navigation_property(self, name: str) -> NavigationProperty | None: ...

    def property_names(self) -> list[str]: ...

    def member_names(self) -> list[str]: ...


@runtime_checkable
class IEntityModel(Protocol):
    """
    Process-wide entity model.

    Constructed once at startup and shared read-only by every request.
    """

    def find_type(self, name: str) -> IEntityType | None: ...

    def find_entity_set(self, name: str) -> EntitySet | None: ...
