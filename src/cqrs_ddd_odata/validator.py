"""QueryValidator — policy gate and per-option self-checks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .allowed import AllowedQueryOptions, is_allowed
from .exceptions import (
    ArgumentNullError,
    DisallowedQueryOptionError,
    QueryOptionError,
)
from .request import is_count_request

if TYPE_CHECKING:
    from collections.abc import Callable

    from .query_options import QueryOptions
    from .request import QueryRequest
    from .settings import ValidationSettings

logger = logging.getLogger("cqrs_ddd.odata.validator")


class QueryValidator:
    """
    Validate :class:`QueryOptions` against :class:`ValidationSettings`.

    For every option present in the request, in a fixed order, the option
    kind is first checked against ``allowed_query_options`` and then the
    option checks its own value. The first failure is raised; the options
    and settings are never modified, so validating twice gives the same
    result.

    Args:
        count_request: Predicate deciding whether the request addresses
            ``/$count``, which counts as ``$count`` being present.
    """

    def __init__(
        self,
        count_request: Callable[[QueryRequest], bool] = is_count_request,
    ) -> None:
        self._count_request = count_request

    def validate(self, options: QueryOptions, settings: ValidationSettings) -> None:
        if options is None:
            raise ArgumentNullError("options")
        if settings is None:
            raise ArgumentNullError("settings")

        try:
            self._validate(options, settings)
        except QueryOptionError as exc:
            logger.warning("Rejected query option %s: %s", exc.option, exc.message)
            raise
        logger.debug("Query options validated: %s", options.raw_values.to_dict())

    def _validate(self, options: QueryOptions, settings: ValidationSettings) -> None:
        allowed = settings.allowed_query_options
        raw = options.raw_values

        if options.apply is not None:
            self._gate(AllowedQueryOptions.APPLY, "$apply", allowed)
            options.apply.validate(settings)

        if options.skip is not None:
            self._gate(AllowedQueryOptions.SKIP, "$skip", allowed)
            options.skip.validate(settings)

        if options.top is not None:
            self._gate(AllowedQueryOptions.TOP, "$top", allowed)
            options.top.validate(settings)

        if options.orderby is not None:
            self._gate(AllowedQueryOptions.ORDERBY, "$orderby", allowed)
            options.orderby.validate(settings)

        if options.filter is not None:
            self._gate(AllowedQueryOptions.FILTER, "$filter", allowed)
            options.filter.validate(settings)

        if options.count is not None or self._count_request(options.request):
            self._gate(AllowedQueryOptions.COUNT, "$count", allowed)
            if options.count is not None:
                options.count.validate(settings)

        if raw.expand is not None:
            self._gate(AllowedQueryOptions.EXPAND, "$expand", allowed)

        if raw.select is not None:
            self._gate(AllowedQueryOptions.SELECT, "$select", allowed)

        if options.select_expand is not None:
            options.select_expand.validate(settings)

        if raw.format is not None:
            self._gate(AllowedQueryOptions.FORMAT, "$format", allowed)

        if raw.skiptoken is not None:
            self._gate(AllowedQueryOptions.SKIPTOKEN, "$skiptoken", allowed)

        if raw.deltatoken is not None:
            self._gate(AllowedQueryOptions.DELTATOKEN, "$deltatoken", allowed)

    @staticmethod
    def _gate(
        kind: AllowedQueryOptions, option: str, allowed: AllowedQueryOptions
    ) -> None:
        if not is_allowed(kind, allowed):
            raise DisallowedQueryOptionError(kind, option)
