"""
QueryApplier — compose validated query options onto a collection.

Options are applied in a fixed order::

    $filter -> $orderby -> $select/$expand -> $skip -> take

where *take* is the smaller of the caller's ``$top`` and the server page
size. Validation is a precondition and is not repeated here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import ArgumentNullError, UnsupportedQueryOptionError
from .expressions import resolve_path
from .ports.queryable import IQueryable
from .projection import SelectExpandProjector
from .query_string import QueryStringBuilder
from .queryable import MemoryQueryable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .query_options import QueryOptions
    from .settings import QuerySettings

logger = logging.getLogger("cqrs_ddd.odata.applier")


def effective_take(top: int | None, page_size: int | None) -> int | None:
    """
    Reconcile the caller's ``$top`` with the server page size.

    Returns the smaller of the two when both are set, whichever one is set
    otherwise, and ``None`` (unlimited) when neither is.
    """
    if top is None:
        return page_size
    if page_size is None:
        return top
    return min(top, page_size)


def _key_getter(name: str) -> Callable[[Any], tuple[bool, Any]]:
    def key(item: Any) -> tuple[bool, Any]:
        value = resolve_path(item, (name,))
        return (value is not None, value)

    return key


class QueryApplier:
    """Apply a :class:`QueryOptions` to an :class:`IQueryable`."""

    def apply(
        self,
        options: QueryOptions,
        query: IQueryable[Any] | Iterable[Any],
        settings: QuerySettings,
    ) -> IQueryable[Any]:
        """
        Return *query* with every present option composed onto it.

        A plain iterable is wrapped in :class:`MemoryQueryable`. Nothing is
        evaluated until the result is iterated.

        Raises:
            ArgumentNullError: *options*, *query* or *settings* is ``None``.
            UnsupportedQueryOptionError: ``$apply`` is present.
        """
        if options is None:
            raise ArgumentNullError("options")
        if query is None:
            raise ArgumentNullError("query")
        if settings is None:
            raise ArgumentNullError("settings")
        if options.apply is not None:
            raise UnsupportedQueryOptionError("$apply")

        result: IQueryable[Any] = (
            query if isinstance(query, IQueryable) else MemoryQueryable(query)
        )

        top = options.top.value if options.top is not None else None
        skip = options.skip.value if options.skip is not None else None
        take = effective_take(top, settings.page_size)

        if options.filter is not None:
            result = result.where(options.filter.filter_clause.is_satisfied_by)

        if options.orderby is not None:
            result = result.order_by(options.orderby.orderby_clause.sort_keys())
        elif settings.ensure_stable_ordering and (
            skip is not None or take is not None
        ):
            result = self._order_by_key(options, result)

        if options.select_expand is not None:
            projector = SelectExpandProjector(
                options.select_expand.select_expand_clause, options.context
            )
            result = result.select(projector)

        if skip is not None:
            result = result.skip(skip)

        if take is not None:
            result = result.take(take)

        logger.debug(
            "Applied query options to %s: skip=%s take=%s (top=%s, page_size=%s)",
            options.context.element_type.name,
            skip,
            take,
            top,
            settings.page_size,
        )
        return result

    @staticmethod
    def _order_by_key(
        options: QueryOptions, query: IQueryable[Any]
    ) -> IQueryable[Any]:
        element_type = options.context.element_type
        if not element_type.key:
            logger.warning(
                "Paging %s without $orderby and the type has no key; "
                "results keep source order",
                element_type.name,
            )
            return query
        logger.debug(
            "Ordering %s by key %s for stable paging",
            element_type.name,
            ", ".join(element_type.key),
        )
        keys = [(_key_getter(name), False) for name in element_type.key]
        return query.order_by(keys)

    def next_page_link(
        self,
        options: QueryOptions,
        base_url: str,
        settings: QuerySettings,
        result_count: int | None = None,
    ) -> str | None:
        """
        URL of the page after the one produced by :meth:`apply`.

        ``$skip`` advances by the page size and ``$top`` shrinks by the
        same amount. Returns ``None`` when paging is off, when the caller's
        ``$top`` is used up, or when *result_count* shows a short last page.
        """
        if options is None:
            raise ArgumentNullError("options")
        if settings is None:
            raise ArgumentNullError("settings")
        page_size = settings.page_size
        if page_size is None:
            return None
        if result_count is not None and result_count < page_size:
            return None

        top = options.top.value if options.top is not None else None
        if top is not None and top <= page_size:
            return None
        skip = options.skip.value if options.skip is not None else 0
        next_top = top - page_size if top is not None else None
        return QueryStringBuilder().build_url(
            base_url, options=options, top=next_top, skip=skip + page_size
        )
