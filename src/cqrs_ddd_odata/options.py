"""
Typed wrappers for individual query options.

Each wrapper is a frozen dataclass holding the raw value, its parsed
representation and the shared :class:`QueryContext`. The ``kind`` tag ties
it to its :class:`AllowedQueryOptions` bit and ``validate(settings)`` runs
the option's own rules from :mod:`cqrs_ddd_odata.validators`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar

from . import validators
from .allowed import AllowedQueryOptions
from .exceptions import GrammarSyntaxError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .clauses import FilterClause, OrderByClause, SelectExpandClause
    from .context import QueryContext
    from .settings import ValidationSettings


@dataclass(frozen=True)
class FilterOption:
    """``$filter``: a predicate evaluated against each element."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.FILTER
    name: ClassVar[str] = "$filter"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)
    filter_clause: FilterClause

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_filter(self, settings)


@dataclass(frozen=True)
class OrderByOption:
    """``$orderby``: sort expressions, primary key first."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.ORDERBY
    name: ClassVar[str] = "$orderby"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)
    orderby_clause: OrderByClause

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_orderby(self, settings)


@dataclass(frozen=True)
class TopOption:
    """``$top``: the most elements the caller wants."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.TOP
    name: ClassVar[str] = "$top"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)
    value: int

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_top(self, settings)


@dataclass(frozen=True)
class SkipOption:
    """``$skip``: how many leading elements to drop."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.SKIP
    name: ClassVar[str] = "$skip"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)
    value: int

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_skip(self, settings)


@dataclass(frozen=True)
class SelectExpandOption:
    """``$select`` and ``$expand`` parsed together into one projection tree."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.EXPAND
    name: ClassVar[str] = "$expand"

    raw_select: str | None
    raw_expand: str | None
    context: QueryContext = field(repr=False, compare=False)
    select_expand_clause: SelectExpandClause

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_select_expand(self, settings)


_COUNT_LITERALS = {"true": True, "false": False}


@dataclass(frozen=True)
class CountOption:
    """
    ``$count``: whether the response should carry the total element count.

    The boolean is parsed on first access so an invalid literal surfaces
    from validation (or from whoever reads ``value``) rather than from
    parsing.
    """

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.COUNT
    name: ClassVar[str] = "$count"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)

    @property
    def value(self) -> bool:
        parsed = _COUNT_LITERALS.get(self.raw_value.strip().lower())
        if parsed is None:
            raise GrammarSyntaxError(
                f"'{self.raw_value}' is not a valid count option", "$count"
            )
        return parsed

    def get_entity_count(self, query: Iterable[Any]) -> int | None:
        """
        Count the elements of *query* when ``$count=true``.

        *query* should already have ``$filter`` applied and nothing else, so
        the count is independent of paging.
        """
        if not self.value:
            return None
        return sum(1 for _ in query)

    def validate(self, settings: ValidationSettings) -> None:
        validators.validate_count(self, settings)


@dataclass(frozen=True)
class ApplyOption:
    """``$apply``: aggregation transformations, recorded but not executed."""

    kind: ClassVar[AllowedQueryOptions] = AllowedQueryOptions.APPLY
    name: ClassVar[str] = "$apply"

    raw_value: str
    context: QueryContext = field(repr=False, compare=False)

    def validate(self, settings: ValidationSettings) -> None:
        return None


QueryOption = (
    FilterOption
    | OrderByOption
    | TopOption
    | SkipOption
    | SelectExpandOption
    | CountOption
    | ApplyOption
)
