"""SelectExpandProjector — shape entities according to ``$select`` / ``$expand``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .expressions import resolve_path
from .queryable import MemoryQueryable

if TYPE_CHECKING:
    from .clauses import ExpandItem, SelectExpandClause
    from .context import QueryContext


class SelectExpandProjector:
    """
    Callable turning one entity (mapping or object) into a ``dict``.

    Selected structural properties are copied (every structural property
    when nothing is selected or ``*`` is used). Each expanded navigation
    property is projected recursively; collection-valued ones also get
    their nested ``$filter``, ``$orderby``, ``$skip`` and ``$top``. A missing
    navigation value projects to ``None`` (single) or ``[]`` (collection).
    """

    def __init__(self, clause: SelectExpandClause, context: QueryContext) -> None:
        self._clause = clause
        self._properties: tuple[str, ...] = (
            tuple(context.element_type.property_names())
            if clause.all_selected
            else clause.selected
        )
        self._expanded: list[tuple[ExpandItem, SelectExpandProjector]] = [
            (item, SelectExpandProjector(item.select_expand, item.context))
            for item in clause.expanded
        ]

    def __call__(self, entity: Any) -> dict[str, Any]:
        result = {name: resolve_path(entity, (name,)) for name in self._properties}
        for item, projector in self._expanded:
            value = resolve_path(entity, (item.navigation.name,))
            if item.navigation.collection:
                result[item.navigation.name] = self._project_collection(
                    item, projector, value
                )
            else:
                result[item.navigation.name] = (
                    None if value is None else projector(value)
                )
        return result

    @staticmethod
    def _project_collection(
        item: ExpandItem, projector: SelectExpandProjector, value: Any
    ) -> list[dict[str, Any]]:
        query: MemoryQueryable[Any] = MemoryQueryable(value or ())
        if item.filter is not None:
            query = query.where(item.filter.is_satisfied_by)
        if item.orderby is not None:
            query = query.order_by(item.orderby.sort_keys())
        if item.skip is not None:
            query = query.skip(item.skip)
        if item.top is not None:
            query = query.take(item.top)
        return list(query.select(projector))
