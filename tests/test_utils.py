"""Tests for the shared parsing helpers."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata.exceptions import InvalidIntegerError, NegativeValueError
from cqrs_ddd_odata.utils import (
    MAX_INTEGER_VALUE,
    is_blank,
    parse_non_negative_integer,
    split_top_level,
)

# -- parse_non_negative_integer ----------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("0", 0), ("5", 5), ("+5", 5), (" 42 ", 42), ("007", 7)],
)
def test_parses_non_negative(raw: str, expected: int) -> None:
    assert parse_non_negative_integer("$top", raw) == expected


@pytest.mark.parametrize("raw", ["abc", "1.5", "1,000", "1e3", "", "٣", "0x10"])
def test_rejects_non_integers(raw: str) -> None:
    with pytest.raises(InvalidIntegerError) as exc_info:
        parse_non_negative_integer("$top", raw)
    assert exc_info.value.option == "$top"


def test_rejects_negative() -> None:
    with pytest.raises(NegativeValueError) as exc_info:
        parse_non_negative_integer("$skip", "-1")
    assert exc_info.value.value == -1
    assert exc_info.value.option == "$skip"


def test_rejects_out_of_range() -> None:
    limit = str(MAX_INTEGER_VALUE)
    assert parse_non_negative_integer("$top", limit) == MAX_INTEGER_VALUE
    with pytest.raises(InvalidIntegerError):
        parse_non_negative_integer("$top", str(MAX_INTEGER_VALUE + 1))


# -- is_blank / split_top_level ----------------------------------------------


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank("")
    assert is_blank("  \t")
    assert not is_blank(" x ")


def test_split_respects_parentheses_and_strings() -> None:
    text = "orders($select=id,amount),manager,name eq 'a,b'"
    assert split_top_level(text, ",") == [
        "orders($select=id,amount)",
        "manager",
        "name eq 'a,b'",
    ]


def test_split_handles_escaped_quotes() -> None:
    assert split_top_level("'it''s;x';y", ";") == ["'it''s;x'", "y"]


@pytest.mark.parametrize("text", ["a(b", "a)b", "'open"])
def test_split_rejects_unbalanced(text: str) -> None:
    with pytest.raises(ValueError):
        split_top_level(text, ",")
