"""Tests for the expression tokenizer."""

from __future__ import annotations

import datetime
import uuid

import pytest

from cqrs_ddd_odata.exceptions import GrammarSyntaxError
from cqrs_ddd_odata.grammar import Lexer, TokenKind


def kinds(text: str) -> list[TokenKind]:
    return [token.kind for token in Lexer(text).tokenize()]


def test_simple_comparison() -> None:
    assert kinds("age gt 30") == [
        TokenKind.IDENTIFIER,
        TokenKind.IDENTIFIER,
        TokenKind.INTEGER,
        TokenKind.END,
    ]


def test_string_with_escaped_quote() -> None:
    tokens = Lexer("name eq 'O''Brien'").tokenize()
    assert tokens[2].kind is TokenKind.STRING
    assert tokens[2].value == "O'Brien"


def test_numeric_literals() -> None:
    tokens = Lexer("1.5 -3 2e2").tokenize()
    assert tokens[0].kind is TokenKind.DECIMAL
    assert tokens[0].value == 1.5
    assert tokens[1].kind is TokenKind.INTEGER
    assert tokens[1].value == -3
    assert tokens[2].kind is TokenKind.DECIMAL
    assert tokens[2].value == 200.0


def test_temporal_literals() -> None:
    tokens = Lexer("2024-01-31 2024-01-31T10:15:00Z").tokenize()
    assert tokens[0].kind is TokenKind.DATE
    assert tokens[0].value == datetime.date(2024, 1, 31)
    assert tokens[1].kind is TokenKind.DATETIME
    assert tokens[1].value == datetime.datetime(
        2024, 1, 31, 10, 15, tzinfo=datetime.timezone.utc
    )


def test_guid_literal() -> None:
    guid = uuid.uuid4()
    tokens = Lexer(f"id eq {guid}").tokenize()
    assert tokens[2].kind is TokenKind.GUID
    assert tokens[2].value == guid


def test_punctuation() -> None:
    assert kinds("a/b(c,d);e=*") == [
        TokenKind.IDENTIFIER,
        TokenKind.SLASH,
        TokenKind.IDENTIFIER,
        TokenKind.OPEN_PAREN,
        TokenKind.IDENTIFIER,
        TokenKind.COMMA,
        TokenKind.IDENTIFIER,
        TokenKind.CLOSE_PAREN,
        TokenKind.SEMICOLON,
        TokenKind.IDENTIFIER,
        TokenKind.EQUALS,
        TokenKind.STAR,
        TokenKind.END,
    ]


@pytest.mark.parametrize(
    ("text", "position"),
    [("name eq 'open", 8), ("age gt 12abc", 7), ("age # 1", 4), ("2024-13-01", 0)],
)
def test_lexer_errors_carry_position(text: str, position: int) -> None:
    with pytest.raises(GrammarSyntaxError) as exc_info:
        Lexer(text, "$filter").tokenize()
    assert exc_info.value.position == position
    assert exc_info.value.option == "$filter"
