"""Tests for the policy flags and option-name helpers."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata.allowed import (
    QUERY_OPTION_KINDS,
    AllowedFunctions,
    AllowedLogicalOperators,
    AllowedQueryOptions,
    canonical_option_name,
    is_allowed,
    option_kind,
)


def test_all_contains_every_kind() -> None:
    for kind in QUERY_OPTION_KINDS.values():
        assert kind in AllowedQueryOptions.ALL


def test_supported_leaves_out_apply() -> None:
    assert AllowedQueryOptions.APPLY not in AllowedQueryOptions.SUPPORTED
    assert AllowedQueryOptions.ALL == (
        AllowedQueryOptions.SUPPORTED | AllowedQueryOptions.APPLY
    )
    for name, kind in QUERY_OPTION_KINDS.items():
        if name != "$apply":
            assert kind in AllowedQueryOptions.SUPPORTED


def test_flags_combine() -> None:
    policy = AllowedQueryOptions.TOP | AllowedQueryOptions.SKIP
    assert is_allowed(AllowedQueryOptions.TOP, policy)
    assert is_allowed(AllowedQueryOptions.SKIP, policy)
    assert not is_allowed(AllowedQueryOptions.FILTER, policy)
    assert not is_allowed(AllowedQueryOptions.FILTER, AllowedQueryOptions.NONE)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("$filter", "$filter"),
        ("$FILTER", "$filter"),
        ("Filter", "$filter"),
        (" $top ", "$top"),
        ("$search", None),
        ("foo", None),
    ],
)
def test_canonical_option_name(name: str, expected: str | None) -> None:
    assert canonical_option_name(name) == expected


def test_option_kind() -> None:
    assert option_kind("$orderby") is AllowedQueryOptions.ORDERBY
    assert option_kind("$SkipToken") is AllowedQueryOptions.SKIPTOKEN
    assert option_kind("$custom") is AllowedQueryOptions.NONE


def test_function_groups() -> None:
    assert AllowedFunctions.CONTAINS in AllowedFunctions.ALL_STRING_FUNCTIONS
    assert AllowedFunctions.YEAR in AllowedFunctions.ALL_DATE_TIME_FUNCTIONS
    assert AllowedFunctions.ROUND in AllowedFunctions.ALL_MATH_FUNCTIONS
    assert AllowedFunctions.ROUND not in AllowedFunctions.ALL_STRING_FUNCTIONS
    assert AllowedLogicalOperators.HAS in AllowedLogicalOperators.ALL
