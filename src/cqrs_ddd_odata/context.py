"""QueryContext — the schema context every option is parsed against."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .exceptions import ArgumentNullError

if TYPE_CHECKING:
    from .ports.schema import IEntityModel, IEntityType
    from .schema import EntitySet, NavigationProperty


@dataclass(frozen=True)
class QueryContext:
    """
    Entity model, target element type and navigation source of a query.

    A context is immutable and may be shared by any number of concurrent
    requests against the same endpoint.

    Attributes:
        model: The entity model used to resolve types and relationships.
        element_type: The entity type of the queried collection.
        navigation_source: The entity set being queried, if any.
        element_clr_type: Optional Python class of the collection elements.
    """

    model: IEntityModel
    element_type: IEntityType
    navigation_source: EntitySet | None = None
    element_clr_type: type[Any] | None = None

    def __post_init__(self) -> None:
        if self.model is None:
            raise ArgumentNullError("model")
        if self.element_type is None:
            raise ArgumentNullError("element_type")
        if isinstance(self.element_type, str):
            resolved = self.model.find_type(self.element_type)
            if resolved is None:
                raise ValueError(f"Unknown entity type '{self.element_type}'")
            object.__setattr__(self, "element_type", resolved)

    @classmethod
    def for_entity_set(
        cls,
        model: IEntityModel,
        entity_set: str,
        element_clr_type: type[Any] | None = None,
    ) -> QueryContext:
        """Build a context targeting the entity set named *entity_set*."""
        if model is None:
            raise ArgumentNullError("model")
        source = model.find_entity_set(entity_set)
        if source is None:
            raise ValueError(f"Unknown entity set '{entity_set}'")
        element_type = model.find_type(source.entity_type)
        if element_type is None:
            raise ValueError(f"Unknown entity type '{source.entity_type}'")
        return cls(model, element_type, source, element_clr_type)

    def for_navigation(self, navigation: NavigationProperty) -> QueryContext:
        """Context for the target of *navigation* (nested expand options)."""
        target = self.model.find_type(navigation.target)
        if target is None:
            raise ValueError(f"Unknown entity type '{navigation.target}'")
        return QueryContext(self.model, target)
