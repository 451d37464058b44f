"""Allow-list flags for query options, operators and functions."""

from __future__ import annotations

from enum import Flag


class AllowedQueryOptions(Flag):
    """Query option kinds a validation policy may permit."""

    NONE = 0
    FILTER = 1 << 0
    EXPAND = 1 << 1
    SELECT = 1 << 2
    ORDERBY = 1 << 3
    TOP = 1 << 4
    SKIP = 1 << 5
    COUNT = 1 << 6
    FORMAT = 1 << 7
    SKIPTOKEN = 1 << 8
    DELTATOKEN = 1 << 9
    APPLY = 1 << 10

    SUPPORTED = (
        FILTER
        | EXPAND
        | SELECT
        | ORDERBY
        | TOP
        | SKIP
        | COUNT
        | FORMAT
        | SKIPTOKEN
        | DELTATOKEN
    )
    # $apply is recognised but not executed; only ALL admits it.
    ALL = SUPPORTED | APPLY


class AllowedLogicalOperators(Flag):
    """Logical and comparison operators usable in ``$filter``."""

    NONE = 0
    OR = 1 << 0
    AND = 1 << 1
    NOT = 1 << 2
    EQUAL = 1 << 3
    NOT_EQUAL = 1 << 4
    GREATER_THAN = 1 << 5
    GREATER_THAN_OR_EQUAL = 1 << 6
    LESS_THAN = 1 << 7
    LESS_THAN_OR_EQUAL = 1 << 8
    HAS = 1 << 9

    ALL = (
        OR
        | AND
        | NOT
        | EQUAL
        | NOT_EQUAL
        | GREATER_THAN
        | GREATER_THAN_OR_EQUAL
        | LESS_THAN
        | LESS_THAN_OR_EQUAL
        | HAS
    )


class AllowedArithmeticOperators(Flag):
    """Arithmetic operators usable in ``$filter`` and ``$orderby``."""

    NONE = 0
    ADD = 1 << 0
    SUBTRACT = 1 << 1
    MULTIPLY = 1 << 2
    DIVIDE = 1 << 3
    MODULO = 1 << 4

    ALL = ADD | SUBTRACT | MULTIPLY | DIVIDE | MODULO


class AllowedFunctions(Flag):
    """Built-in functions usable in ``$filter`` and ``$orderby``."""

    NONE = 0
    # String functions
    CONTAINS = 1 << 0
    STARTSWITH = 1 << 1
    ENDSWITH = 1 << 2
    LENGTH = 1 << 3
    INDEXOF = 1 << 4
    SUBSTRING = 1 << 5
    TOLOWER = 1 << 6
    TOUPPER = 1 << 7
    TRIM = 1 << 8
    CONCAT = 1 << 9
    # Date/time functions
    YEAR = 1 << 10
    MONTH = 1 << 11
    DAY = 1 << 12
    HOUR = 1 << 13
    MINUTE = 1 << 14
    SECOND = 1 << 15
    # Math functions
    ROUND = 1 << 16
    FLOOR = 1 << 17
    CEILING = 1 << 18

    ALL_STRING_FUNCTIONS = (
        CONTAINS
        | STARTSWITH
        | ENDSWITH
        | LENGTH
        | INDEXOF
        | SUBSTRING
        | TOLOWER
        | TOUPPER
        | TRIM
        | CONCAT
    )
    ALL_DATE_TIME_FUNCTIONS = YEAR | MONTH | DAY | HOUR | MINUTE | SECOND
    ALL_MATH_FUNCTIONS = ROUND | FLOOR | CEILING
    ALL_FUNCTIONS = ALL_STRING_FUNCTIONS | ALL_DATE_TIME_FUNCTIONS | ALL_MATH_FUNCTIONS


# Canonical option name -> policy bit.
QUERY_OPTION_KINDS: dict[str, AllowedQueryOptions] = {
    "$filter": AllowedQueryOptions.FILTER,
    "$orderby": AllowedQueryOptions.ORDERBY,
    "$top": AllowedQueryOptions.TOP,
    "$skip": AllowedQueryOptions.SKIP,
    "$select": AllowedQueryOptions.SELECT,
    "$count": AllowedQueryOptions.COUNT,
    "$expand": AllowedQueryOptions.EXPAND,
    "$format": AllowedQueryOptions.FORMAT,
    "$skiptoken": AllowedQueryOptions.SKIPTOKEN,
    "$deltatoken": AllowedQueryOptions.DELTATOKEN,
    "$apply": AllowedQueryOptions.APPLY,
}


def canonical_option_name(name: str) -> str | None:
    """Return ``"$filter"`` for ``"$Filter"`` / ``"filter"``; ``None`` if unknown."""
    key = name.strip().lower()
    if not key.startswith("$"):
        key = "$" + key
    return key if key in QUERY_OPTION_KINDS else None


def option_kind(name: str) -> AllowedQueryOptions:
    """Map a recognised option name to its policy bit (``NONE`` if unknown)."""
    canonical = canonical_option_name(name)
    if canonical is None:
        return AllowedQueryOptions.NONE
    return QUERY_OPTION_KINDS[canonical]


def is_allowed(kind: AllowedQueryOptions, allowed: AllowedQueryOptions) -> bool:
    return (kind & allowed) != AllowedQueryOptions.NONE
