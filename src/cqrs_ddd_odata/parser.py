"""QueryOptionParser — raw request parameters -> QueryOptions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .allowed import QUERY_OPTION_KINDS
from .exceptions import (
    ArgumentNullError,
    DuplicateQueryOptionError,
    EmptyQueryOptionError,
)
from .grammar import ODataExpressionGrammar
from .options import (
    ApplyOption,
    CountOption,
    FilterOption,
    OrderByOption,
    SelectExpandOption,
    SkipOption,
    TopOption,
)
from .query_options import QueryOptions
from .raw import RawQueryOptions
from .utils import is_blank, parse_non_negative_integer

if TYPE_CHECKING:
    from .context import QueryContext
    from .ports.grammar import IExpressionGrammar
    from .request import QueryRequest

logger = logging.getLogger("cqrs_ddd.odata.parser")

# Options whose value must be non-empty and non-whitespace.
REQUIRES_VALUE = frozenset({"$filter", "$orderby", "$top", "$skip", "$count"})


class _QueryOptionsBuilder:
    """Accumulates parsed options; only ``build()`` yields a QueryOptions."""

    def __init__(self, context: QueryContext, request: QueryRequest) -> None:
        self.context = context
        self.request = request
        self.raw: dict[str, str] = {}
        self.blank: set[str] = set()
        self.filter: FilterOption | None = None
        self.orderby: OrderByOption | None = None
        self.top: TopOption | None = None
        self.skip: SkipOption | None = None
        self.select_expand: SelectExpandOption | None = None
        self.count: CountOption | None = None
        self.apply: ApplyOption | None = None

    def record(self, name: str, value: str) -> None:
        if name in self.raw:
            raise DuplicateQueryOptionError(name)
        self.raw[name] = value
        if is_blank(value):
            self.blank.add(name)

    def build(self) -> QueryOptions:
        raw_values = RawQueryOptions(
            **{name[1:]: value for name, value in self.raw.items()},
            blank_options=frozenset(self.blank),
        )
        return QueryOptions(
            context=self.context,
            request=self.request,
            raw_values=raw_values,
            filter=self.filter,
            orderby=self.orderby,
            top=self.top,
            skip=self.skip,
            select_expand=self.select_expand,
            count=self.count,
            apply=self.apply,
        )


class QueryOptionParser:
    """
    Parse the query parameters of a request into :class:`QueryOptions`.

    Option names are matched case-insensitively; parameters that are not
    recognised query options are ignored. The first invalid option aborts
    the parse and nothing partial is returned.

    ``$select`` and ``$expand`` are parsed together once every parameter
    has been read, and the resulting clause is stored in
    ``request.properties.select_expand_clause`` for later stages.

    Args:
        context: Schema context the options are bound to.
        grammar: Expression grammar; defaults to
            :class:`~cqrs_ddd_odata.grammar.ODataExpressionGrammar`.
    """

    def __init__(
        self,
        context: QueryContext,
        grammar: IExpressionGrammar | None = None,
    ) -> None:
        if context is None:
            raise ArgumentNullError("context")
        self._context = context
        self._grammar: IExpressionGrammar = (
            grammar if grammar is not None else ODataExpressionGrammar()
        )

    @property
    def context(self) -> QueryContext:
        return self._context

    def parse(self, request: QueryRequest) -> QueryOptions:
        if request is None:
            raise ArgumentNullError("request")

        builder = _QueryOptionsBuilder(self._context, request)
        for key, value in request.query.items():
            name = key.lower()
            if name not in QUERY_OPTION_KINDS:
                logger.debug("Ignoring unrecognised query parameter %r", key)
                continue
            self._parse_option(builder, name, "" if value is None else value)

        if "$select" in builder.raw or "$expand" in builder.raw:
            self._parse_select_expand(builder)

        options = builder.build()
        if options.select_expand is not None:
            request.properties.select_expand_clause = (
                options.select_expand.select_expand_clause
            )
        return options

    # ------------------------------------------------------------------ #

    def _parse_option(
        self, builder: _QueryOptionsBuilder, name: str, value: str
    ) -> None:
        builder.record(name, value)
        if name in REQUIRES_VALUE and is_blank(value):
            raise EmptyQueryOptionError(name)

        context = self._context
        if name == "$filter":
            clause = self._grammar.parse_filter(value, context)
            builder.filter = FilterOption(value, context, clause)
        elif name == "$orderby":
            orderby = self._grammar.parse_orderby(value, context)
            builder.orderby = OrderByOption(value, context, orderby)
        elif name == "$top":
            top = parse_non_negative_integer(name, value)
            builder.top = TopOption(value, context, top)
        elif name == "$skip":
            skip = parse_non_negative_integer(name, value)
            builder.skip = SkipOption(value, context, skip)
        elif name == "$count":
            builder.count = CountOption(value, context)
        elif name == "$apply":
            builder.apply = ApplyOption(value, context)
        # $select / $expand are parsed together afterwards; $format,
        # $skiptoken and $deltatoken are kept raw only.
        logger.debug("Parsed query option %s=%r", name, value)

    def _parse_select_expand(self, builder: _QueryOptionsBuilder) -> None:
        raw_select = builder.raw.get("$select")
        raw_expand = builder.raw.get("$expand")
        clause = self._grammar.parse_select_and_expand(
            raw_select, raw_expand, self._context
        )
        builder.select_expand = SelectExpandOption(
            raw_select, raw_expand, self._context, clause
        )
