"""Default :class:`~cqrs_ddd_odata.ports.IExpressionGrammar` implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..clauses import FilterClause, OrderByClause
from ..operators_memory import build_default_registry
from .expression import ExpressionParser
from .select_expand import SelectExpandParser

if TYPE_CHECKING:
    from ..clauses import SelectExpandClause
    from ..context import QueryContext
    from ..evaluator import MemoryOperatorRegistry


class ODataExpressionGrammar:
    """
    Recursive-descent grammar for a practical subset of OData v4 expressions.

    Stateless apart from its operator registry, so one instance can serve
    every request. Clauses it produces evaluate through the same registry.

    Args:
        registry: Operator and function strategies. Defaults to
            :func:`~cqrs_ddd_odata.operators_memory.build_default_registry`.
    """

    def __init__(self, registry: MemoryOperatorRegistry | None = None) -> None:
        self._registry = registry if registry is not None else build_default_registry()

    @property
    def registry(self) -> MemoryOperatorRegistry:
        return self._registry

    def parse_filter(self, raw: str, context: QueryContext) -> FilterClause:
        node = ExpressionParser(raw, context, self._registry, "$filter").parse_filter()
        return FilterClause(node, self._registry)

    def parse_orderby(self, raw: str, context: QueryContext) -> OrderByClause:
        parser = ExpressionParser(raw, context, self._registry, "$orderby")
        return OrderByClause(tuple(parser.parse_orderby()), self._registry)

    def parse_select_and_expand(
        self,
        raw_select: str | None,
        raw_expand: str | None,
        context: QueryContext,
    ) -> SelectExpandClause:
        return SelectExpandParser(context, self._registry).parse(raw_select, raw_expand)
