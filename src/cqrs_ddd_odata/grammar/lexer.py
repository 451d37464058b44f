"""Tokenizer for the expression grammar."""

from __future__ import annotations

import datetime
import re
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..exceptions import GrammarSyntaxError


class TokenKind(str, Enum):
    IDENTIFIER = "identifier"
    STRING = "string"
    INTEGER = "integer"
    DECIMAL = "decimal"
    DATE = "date"
    DATETIME = "datetime"
    GUID = "guid"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"
    COMMA = ","
    SLASH = "/"
    SEMICOLON = ";"
    EQUALS = "="
    STAR = "*"
    MINUS = "-"
    END = "end"


LITERAL_KINDS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.STRING,
        TokenKind.INTEGER,
        TokenKind.DECIMAL,
        TokenKind.DATE,
        TokenKind.DATETIME,
        TokenKind.GUID,
    }
)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    position: int
    value: Any = None


_GUID_RE = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
    r"(?![\w-])"
)
_DATETIME_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?(?:Z|[+-]\d{2}:\d{2})?"
)
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}(?![\w:])")
_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?([eE][+-]?\d+)?")
_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_]*")

_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    ",": TokenKind.COMMA,
    "/": TokenKind.SLASH,
    ";": TokenKind.SEMICOLON,
    "=": TokenKind.EQUALS,
    "*": TokenKind.STAR,
    "-": TokenKind.MINUS,
}


class Lexer:
    """Split an expression string into tokens, ending with ``TokenKind.END``."""

    def __init__(self, text: str, option: str | None = None) -> None:
        self._text = text
        self._option = option
        self._pos = 0

    def tokenize(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self._next_token()
            tokens.append(token)
            if token.kind is TokenKind.END:
                return tokens

    # ------------------------------------------------------------------ #

    def _error(self, message: str, position: int) -> GrammarSyntaxError:
        return GrammarSyntaxError(message, self._option, position)

    def _next_token(self) -> Token:
        text = self._text
        while self._pos < len(text) and text[self._pos].isspace():
            self._pos += 1
        start = self._pos
        if start >= len(text):
            return Token(TokenKind.END, "", start)

        char = text[start]
        if char == "'":
            return self._read_string(start)

        for scanner in (self._read_guid, self._read_temporal, self._read_number):
            token = scanner(start)
            if token is not None:
                return token

        match = _IDENTIFIER_RE.match(text, start)
        if match:
            self._pos = match.end()
            return Token(TokenKind.IDENTIFIER, match.group(), start, match.group())

        if char in _PUNCTUATION:
            self._pos += 1
            return Token(_PUNCTUATION[char], char, start)

        raise self._error(f"Unexpected character {char!r}", start)

    def _read_string(self, start: int) -> Token:
        text = self._text
        chars: list[str] = []
        pos = start + 1
        while pos < len(text):
            if text[pos] == "'":
                if pos + 1 < len(text) and text[pos + 1] == "'":
                    chars.append("'")
                    pos += 2
                    continue
                self._pos = pos + 1
                literal = text[start : pos + 1]
                return Token(TokenKind.STRING, literal, start, "".join(chars))
            chars.append(text[pos])
            pos += 1
        raise self._error("Unterminated string literal", start)

    def _read_guid(self, start: int) -> Token | None:
        match = _GUID_RE.match(self._text, start)
        if not match:
            return None
        self._pos = match.end()
        return Token(TokenKind.GUID, match.group(), start, uuid.UUID(match.group()))

    def _read_temporal(self, start: int) -> Token | None:
        match = _DATETIME_RE.match(self._text, start)
        if match:
            raw = match.group()
            iso = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
            try:
                value: Any = datetime.datetime.fromisoformat(iso)
            except ValueError as exc:
                raise self._error(f"Invalid date-time literal {raw!r}", start) from exc
            self._pos = match.end()
            return Token(TokenKind.DATETIME, raw, start, value)

        match = _DATE_RE.match(self._text, start)
        if match:
            raw = match.group()
            try:
                value = datetime.date.fromisoformat(raw)
            except ValueError as exc:
                raise self._error(f"Invalid date literal {raw!r}", start) from exc
            self._pos = match.end()
            return Token(TokenKind.DATE, raw, start, value)
        return None

    def _read_number(self, start: int) -> Token | None:
        match = _NUMBER_RE.match(self._text, start)
        if not match:
            return None
        raw = match.group()
        end = match.end()
        if end < len(self._text) and (
            self._text[end].isalpha() or self._text[end] == "_"
        ):
            literal = self._text[start : end + 1]
            raise self._error(f"Invalid numeric literal {literal!r}", start)
        self._pos = end
        if match.group(1) or match.group(2):
            return Token(TokenKind.DECIMAL, raw, start, float(raw))
        return Token(TokenKind.INTEGER, raw, start, int(raw))
