"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata.allowed import AllowedQueryOptions
from cqrs_ddd_odata.exceptions import (
    ArgumentNullError,
    DisallowedQueryOptionError,
    DuplicateQueryOptionError,
    EmptyQueryOptionError,
    FieldNotFoundError,
    GrammarSyntaxError,
    InvalidIntegerError,
    LimitExceededError,
    NegativeValueError,
    QueryOptionError,
    QueryOptionParseError,
    QueryValidationError,
    UnsupportedQueryOptionError,
)

# -- hierarchy ---------------------------------------------------------------


@pytest.mark.parametrize(
    ("error", "base"),
    [
        (EmptyQueryOptionError("$filter"), QueryOptionParseError),
        (InvalidIntegerError("$top", "abc"), QueryOptionParseError),
        (NegativeValueError("$skip", -1), QueryOptionParseError),
        (DuplicateQueryOptionError("$top"), QueryOptionParseError),
        (GrammarSyntaxError("bad"), QueryOptionParseError),
        (FieldNotFoundError("x", "T", []), GrammarSyntaxError),
        (
            DisallowedQueryOptionError(AllowedQueryOptions.FILTER, "$filter"),
            QueryValidationError,
        ),
        (LimitExceededError("$top", "max_top", "too big"), QueryValidationError),
        (UnsupportedQueryOptionError("$apply"), QueryOptionError),
    ],
)
def test_error_hierarchy(error: QueryOptionError, base: type) -> None:
    assert isinstance(error, base)
    assert isinstance(error, QueryOptionError)


def test_argument_null_is_value_error() -> None:
    err = ArgumentNullError("context")
    assert isinstance(err, ValueError)
    assert err.argument == "context"
    assert "context" in str(err)


# -- messages and to_dict ----------------------------------------------------


def test_empty_option_message_names_option() -> None:
    err = EmptyQueryOptionError("$filter")
    assert err.option == "$filter"
    assert str(err) == "Query '$filter' cannot be empty."
    assert err.to_dict() == {
        "error": "EMPTY_QUERY_OPTION",
        "message": "Query '$filter' cannot be empty.",
        "option": "$filter",
    }


def test_negative_value_keeps_value() -> None:
    err = NegativeValueError("$top", -3)
    assert err.value == -3
    assert "-3" in str(err)


def test_grammar_error_position_in_message_and_dict() -> None:
    err = GrammarSyntaxError("Unexpected token", "$filter", 7)
    assert "position 7" in str(err)
    assert "'$filter'" in str(err)
    assert err.to_dict()["position"] == 7


def test_field_not_found_fuzzy() -> None:
    err = FieldNotFoundError("nme", "Customer", ["name", "age", "city"], "$filter")
    assert "nme" in str(err)
    assert "name" in err.suggestions
    data = err.to_dict()
    assert data["error"] == "FIELD_NOT_FOUND"
    assert data["field"] == "nme"
    assert data["type"] == "Customer"
    assert data["available_fields"] == ["age", "city", "name"]


def test_field_not_found_no_suggestions() -> None:
    err = FieldNotFoundError("zzzz", "Customer", ["name", "age"])
    assert err.suggestions == []
    assert "Did you mean" not in str(err)


def test_disallowed_option_to_dict_names_kind() -> None:
    err = DisallowedQueryOptionError(AllowedQueryOptions.FILTER, "$filter")
    assert err.to_dict()["kind"] == "FILTER"
    assert err.kind is AllowedQueryOptions.FILTER


def test_limit_exceeded_to_dict() -> None:
    err = LimitExceededError("$top", "max_top", "too big", limit=10, actual=50)
    assert err.to_dict() == {
        "error": "LIMIT_EXCEEDED",
        "message": "too big",
        "option": "$top",
        "setting": "max_top",
        "limit": 10,
        "actual": 50,
    }
