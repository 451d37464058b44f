"""Tests for ValidationSettings and QuerySettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cqrs_ddd_odata.allowed import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
)
from cqrs_ddd_odata.settings import QuerySettings, ValidationSettings


def test_validation_defaults() -> None:
    settings = ValidationSettings()
    assert settings.allowed_query_options == AllowedQueryOptions.SUPPORTED
    assert settings.max_top is None
    assert settings.max_skip is None
    assert settings.max_expansion_depth == 2
    assert settings.max_orderby_node_count == 5
    assert settings.max_node_count == 100
    assert settings.allowed_logical_operators == AllowedLogicalOperators.ALL
    assert settings.allowed_arithmetic_operators == AllowedArithmeticOperators.ALL
    assert settings.allowed_functions == AllowedFunctions.ALL_FUNCTIONS
    assert settings.allowed_orderby_properties == frozenset()


def test_flag_fields_accept_names() -> None:
    settings = ValidationSettings.model_validate(
        {
            "allowed_query_options": ["TOP", "skip"],
            "allowed_functions": "contains|tolower",
            "allowed_logical_operators": "AND, EQUAL",
        }
    )
    assert settings.allowed_query_options == (
        AllowedQueryOptions.TOP | AllowedQueryOptions.SKIP
    )
    assert settings.allowed_functions == (
        AllowedFunctions.CONTAINS | AllowedFunctions.TOLOWER
    )
    assert settings.allowed_logical_operators == (
        AllowedLogicalOperators.AND | AllowedLogicalOperators.EQUAL
    )


def test_flag_fields_accept_instances_and_ints() -> None:
    policy = AllowedQueryOptions.FILTER | AllowedQueryOptions.TOP
    assert ValidationSettings(allowed_query_options=policy).allowed_query_options == (
        policy
    )
    from_int = ValidationSettings(allowed_query_options=policy.value)
    assert from_int.allowed_query_options == policy


def test_unknown_flag_name_rejected() -> None:
    with pytest.raises(ValidationError):
        ValidationSettings(allowed_query_options=["TOP", "SEARCH"])


@pytest.mark.parametrize(
    "field",
    ["max_top", "max_skip", "max_expansion_depth"],
)
def test_negative_limits_rejected(field: str) -> None:
    with pytest.raises(ValidationError):
        ValidationSettings(**{field: -1})


def test_node_counts_must_be_positive() -> None:
    with pytest.raises(ValidationError):
        ValidationSettings(max_node_count=0)
    with pytest.raises(ValidationError):
        ValidationSettings(max_orderby_node_count=0)


def test_settings_are_frozen() -> None:
    settings = ValidationSettings(max_top=10)
    with pytest.raises(ValidationError):
        settings.max_top = 20  # type: ignore[misc]


def test_query_settings() -> None:
    assert QuerySettings().page_size is None
    assert QuerySettings().ensure_stable_ordering is True
    assert QuerySettings(page_size=50).page_size == 50
    with pytest.raises(ValidationError):
        QuerySettings(page_size=0)
