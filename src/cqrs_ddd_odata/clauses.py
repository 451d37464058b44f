"""
Parsed clauses handed from the grammar to the option wrappers.

``FilterClause`` follows the specification pattern (``is_satisfied_by`` /
``to_dict``) so it can be combined with other predicates or serialised
across process boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from .exceptions import ArgumentNullError
from .expressions import PropertyAccessNode

if TYPE_CHECKING:
    from collections.abc import Callable

    from .context import QueryContext
    from .evaluator import MemoryOperatorRegistry
    from .expressions import ExpressionNode
    from .schema import NavigationProperty


@dataclass(frozen=True)
class FilterClause:
    """A boolean expression evaluated against each candidate."""

    expression: ExpressionNode
    registry: MemoryOperatorRegistry = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.registry is None:
            raise ArgumentNullError("registry")

    def is_satisfied_by(self, candidate: Any) -> bool:
        """``True`` only when the expression evaluates to ``True`` (not null)."""
        return self.expression.evaluate(candidate, self.registry) is True

    @property
    def node_count(self) -> int:
        return self.expression.node_count

    def to_dict(self) -> dict[str, Any]:
        return self.expression.to_dict()


class OrderByDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class OrderByNode:
    expression: ExpressionNode
    direction: OrderByDirection = OrderByDirection.ASCENDING

    def to_dict(self) -> dict[str, Any]:
        return {"expression": self.expression.to_dict(), "dir": self.direction.value}


def _nulls_first(value: Any) -> tuple[int, Any]:
    return (0, 0) if value is None else (1, value)


@dataclass(frozen=True)
class OrderByClause:
    """Ordered list of sort expressions (first node = primary key)."""

    nodes: tuple[OrderByNode, ...]
    registry: MemoryOperatorRegistry = field(compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.registry is None:
            raise ArgumentNullError("registry")

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def property_paths(self) -> list[str]:
        """Every property path referenced by any sort expression."""
        return [
            node.dotted_path
            for order_node in self.nodes
            for node in order_node.expression.walk()
            if isinstance(node, PropertyAccessNode)
        ]

    def sort_keys(self) -> list[tuple[Callable[[Any], Any], bool]]:
        """
        ``(key_function, descending)`` pairs, primary key first.

        Nulls sort before any value in ascending order and after any value
        in descending order.
        """
        descending = OrderByDirection.DESCENDING
        return [
            (self._key_for(node.expression), node.direction is descending)
            for node in self.nodes
        ]

    def _key_for(self, expression: ExpressionNode) -> Callable[[Any], Any]:
        registry = self.registry

        def key(item: Any) -> tuple[int, Any]:
            return _nulls_first(expression.evaluate(item, registry))

        return key

    def to_dict(self) -> dict[str, Any]:
        return {"orderby": [node.to_dict() for node in self.nodes]}


@dataclass(frozen=True)
class ExpandItem:
    """One expanded navigation property with its nested query options."""

    navigation: NavigationProperty
    context: QueryContext = field(compare=False, repr=False)
    select_expand: SelectExpandClause
    filter: FilterClause | None = None
    orderby: OrderByClause | None = None
    top: int | None = None
    skip: int | None = None

    @property
    def depth(self) -> int:
        return 1 + self.select_expand.depth

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"navigation": self.navigation.name}
        nested = self.select_expand.to_dict()
        if nested:
            data.update(nested)
        if self.filter is not None:
            data["filter"] = self.filter.to_dict()
        if self.orderby is not None:
            data["orderby"] = self.orderby.to_dict()["orderby"]
        if self.top is not None:
            data["top"] = self.top
        if self.skip is not None:
            data["skip"] = self.skip
        return data


@dataclass(frozen=True)
class SelectExpandClause:
    """
    Projection/expansion tree parsed from ``$select`` and ``$expand``.

    Attributes:
        selected: Structural properties named in ``$select``.
        all_selected: ``True`` when ``$select`` is absent or contains ``*``.
        expanded: Expanded navigation properties, in request order.
    """

    selected: tuple[str, ...] = ()
    all_selected: bool = True
    expanded: tuple[ExpandItem, ...] = ()

    @property
    def depth(self) -> int:
        """Deepest chain of nested expansions (0 when nothing is expanded)."""
        return max((item.depth for item in self.expanded), default=0)

    def walk_expanded(self) -> list[ExpandItem]:
        """Every expand item at any nesting level, parents before children."""
        items: list[ExpandItem] = []
        for item in self.expanded:
            items.append(item)
            items.extend(item.select_expand.walk_expanded())
        return items

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if not self.all_selected:
            data["select"] = list(self.selected)
        if self.expanded:
            data["expand"] = [item.to_dict() for item in self.expanded]
        return data
