"""
QueryOptions — the parsed, typed view of one request's query options.

Built only by :class:`~cqrs_ddd_odata.QueryOptionParser` after every option
parsed successfully; immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .allowed import QUERY_OPTION_KINDS
from .raw import RawQueryOptions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .context import QueryContext
    from .options import (
        ApplyOption,
        CountOption,
        FilterOption,
        OrderByOption,
        QueryOption,
        SelectExpandOption,
        SkipOption,
        TopOption,
    )
    from .ports.queryable import IQueryable
    from .request import QueryRequest
    from .settings import QuerySettings, ValidationSettings
    from .validator import QueryValidator


@dataclass(frozen=True)
class QueryOptions:
    """
    Immutable aggregate of the query options present in a request.

    Attributes:
        context: Schema context every option was parsed against.
        request: The request the options were read from.
        raw_values: Verbatim values of every recognised option.
        filter: Parsed ``$filter``, if present.
        orderby: Parsed ``$orderby``, if present.
        top: Parsed ``$top``, if present.
        skip: Parsed ``$skip``, if present.
        select_expand: Combined ``$select`` / ``$expand``, if either is present.
        count: ``$count``, if present.
        apply: ``$apply``, if present.
    """

    context: QueryContext = field(repr=False)
    request: QueryRequest = field(repr=False, compare=False)
    raw_values: RawQueryOptions = field(default_factory=RawQueryOptions)
    filter: FilterOption | None = None
    orderby: OrderByOption | None = None
    top: TopOption | None = None
    skip: SkipOption | None = None
    select_expand: SelectExpandOption | None = None
    count: CountOption | None = None
    apply: ApplyOption | None = None

    @property
    def options(self) -> list[QueryOption]:
        """Every parsed option wrapper, in application order."""
        candidates = (
            self.apply,
            self.filter,
            self.orderby,
            self.select_expand,
            self.skip,
            self.top,
            self.count,
        )
        return [option for option in candidates if option is not None]

    def validate(
        self,
        settings: ValidationSettings,
        validator: QueryValidator | None = None,
    ) -> None:
        """Validate against *settings*; raises on the first violation."""
        from .validator import QueryValidator

        (validator or QueryValidator()).validate(self, settings)

    def apply_to(
        self,
        query: IQueryable[Any] | Iterable[Any],
        settings: QuerySettings,
    ) -> IQueryable[Any]:
        """Apply the options to *query*; see :class:`QueryApplier`."""
        from .applier import QueryApplier

        return QueryApplier().apply(self, query, settings)

    @staticmethod
    def is_supported_query_option(name: str) -> bool:
        """``True`` for a recognised ``$``-prefixed option name, in any casing."""
        return name is not None and name.lower() in QUERY_OPTION_KINDS
