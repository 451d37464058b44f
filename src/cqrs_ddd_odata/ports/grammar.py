"""IExpressionGrammar — protocol for the expression parsing collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..clauses import FilterClause, OrderByClause, SelectExpandClause
    from ..context import QueryContext


@runtime_checkable
class IExpressionGrammar(Protocol):
    """
    Turn raw ``$filter`` / ``$orderby`` / ``$select`` / ``$expand`` text
    into clauses bound to a :class:`QueryContext`.

    Implementations raise
    :class:`~cqrs_ddd_odata.exceptions.GrammarSyntaxError` (or a subclass)
    naming the owning option when the text is rejected.
    """

    def parse_filter(self, raw: str, context: QueryContext) -> FilterClause: ...

    def parse_orderby(self, raw: str, context: QueryContext) -> OrderByClause: ...

    def parse_select_and_expand(
        self,
        raw_select: str | None,
        raw_expand: str | None,
        context: QueryContext,
    ) -> SelectExpandClause: ...
