"""
Validation and composition settings.

Both settings objects are frozen pydantic models so a single instance can be
shared by every request handled by an endpoint. Flag-typed fields accept a
flag instance, an ``int``, a ``"TOP|SKIP"`` string or a list of member names,
which lets them be loaded straight from configuration files::

    settings = ValidationSettings.model_validate(
        {"allowed_query_options": ["TOP", "SKIP"], "max_top": 100}
    )
"""

from __future__ import annotations

from enum import Flag
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .allowed import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
)


def _coerce_flag(flag_type: type[Flag], value: Any) -> Any:
    if isinstance(value, flag_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return flag_type(value)
    if isinstance(value, str):
        value = value.replace(",", "|").split("|")
    if isinstance(value, list | tuple | set | frozenset):
        result = flag_type(0)
        for name in value:
            member_name = str(name).strip().upper()
            if not member_name:
                continue
            try:
                result |= flag_type[member_name]
            except KeyError as exc:
                raise ValueError(
                    f"Unknown {flag_type.__name__} member: {name!r}"
                ) from exc
        return result
    return value


class ValidationSettings(BaseModel):
    """
    Limits and allow-lists enforced by :class:`~cqrs_ddd_odata.QueryValidator`.

    Attributes:
        allowed_query_options: Option kinds a request may carry.
        max_top: Largest permitted ``$top`` (``None`` = unlimited).
        max_skip: Largest permitted ``$skip`` (``None`` = unlimited).
        max_expansion_depth: Deepest permitted ``$expand`` nesting
            (``0`` = unlimited).
        max_orderby_node_count: Most ``$orderby`` clauses allowed.
        max_node_count: Most expression nodes allowed in a ``$filter``.
        allowed_logical_operators: Logical/comparison operators permitted.
        allowed_arithmetic_operators: Arithmetic operators permitted.
        allowed_functions: Built-in functions permitted.
        allowed_orderby_properties: Properties ``$orderby`` may reference
            (empty = any property).
    """

    model_config = ConfigDict(frozen=True)

    allowed_query_options: AllowedQueryOptions = AllowedQueryOptions.SUPPORTED
    max_top: int | None = Field(default=None, ge=0)
    max_skip: int | None = Field(default=None, ge=0)
    max_expansion_depth: int = Field(default=2, ge=0)
    max_orderby_node_count: int = Field(default=5, ge=1)
    max_node_count: int = Field(default=100, ge=1)
    allowed_logical_operators: AllowedLogicalOperators = AllowedLogicalOperators.ALL
    allowed_arithmetic_operators: AllowedArithmeticOperators = (
        AllowedArithmeticOperators.ALL
    )
    allowed_functions: AllowedFunctions = AllowedFunctions.ALL_FUNCTIONS
    allowed_orderby_properties: frozenset[str] = frozenset()

    @field_validator("allowed_query_options", mode="before")
    @classmethod
    def _query_options(cls, value: Any) -> Any:
        return _coerce_flag(AllowedQueryOptions, value)

    @field_validator("allowed_logical_operators", mode="before")
    @classmethod
    def _logical_operators(cls, value: Any) -> Any:
        return _coerce_flag(AllowedLogicalOperators, value)

    @field_validator("allowed_arithmetic_operators", mode="before")
    @classmethod
    def _arithmetic_operators(cls, value: Any) -> Any:
        return _coerce_flag(AllowedArithmeticOperators, value)

    @field_validator("allowed_functions", mode="before")
    @classmethod
    def _functions(cls, value: Any) -> Any:
        return _coerce_flag(AllowedFunctions, value)


class QuerySettings(BaseModel):
    """
    Composition settings used when applying options to a collection.

    Attributes:
        page_size: Server-side ceiling on items per response. A caller's
            ``$top`` can shrink the page but never widen it.
        ensure_stable_ordering: Order by the entity key when paging without
            an explicit ``$orderby``.
    """

    model_config = ConfigDict(frozen=True)

    page_size: int | None = Field(default=None, gt=0)
    ensure_stable_ordering: bool = True
