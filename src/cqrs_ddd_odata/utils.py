"""
Shared parsing helpers.

These are pure-Python helpers with no dependency on the parser, validator
or applier.
"""

from __future__ import annotations

import re

from .exceptions import InvalidIntegerError, NegativeValueError

# Signed 32-bit ceiling, matching the range clients and stores agree on.
MAX_INTEGER_VALUE = 2**31 - 1

_INTEGER_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_non_negative_integer(option: str, raw: str) -> int:
    """
    Parse *raw* as a culture-invariant, base-10, non-negative integer.

    Surrounding whitespace and a leading sign are accepted; grouping
    separators, decimals and non-ASCII digits are not.

    Raises:
        InvalidIntegerError: *raw* is not an integer or does not fit the
            signed 32-bit range.
        NegativeValueError: *raw* is a negative integer.
    """
    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidIntegerError(option, raw)
    value = int(text)
    if value > MAX_INTEGER_VALUE or value < -MAX_INTEGER_VALUE - 1:
        raise InvalidIntegerError(option, raw)
    if value < 0:
        raise NegativeValueError(option, value)
    return value


def is_blank(value: str | None) -> bool:
    """``True`` for ``None``, ``""`` and whitespace-only strings."""
    return value is None or not value.strip()


def split_top_level(text: str, separator: str) -> list[str]:
    """
    Split *text* on *separator* outside parentheses and quoted strings.

    Raises:
        ValueError: Parentheses are unbalanced or a string is unterminated.
    """
    parts: list[str] = []
    depth = 0
    in_string = False
    current: list[str] = []
    i = 0
    while i < len(text):
        char = text[i]
        if in_string:
            current.append(char)
            if char == "'":
                if i + 1 < len(text) and text[i + 1] == "'":
                    current.append("'")
                    i += 1
                else:
                    in_string = False
        elif char == "'":
            in_string = True
            current.append(char)
        elif char == "(":
            depth += 1
            current.append(char)
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced ')' at position {i}")
            current.append(char)
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    if in_string:
        raise ValueError("Unterminated string literal")
    if depth != 0:
        raise ValueError("Unbalanced '('")
    parts.append("".join(current))
    return parts
