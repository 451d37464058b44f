"""
Query option exception hierarchy.

All exceptions inherit from ``QueryOptionError``, carry the canonical name
of the offending option (``"$filter"``, ``"$top"``, ...) and provide
``to_dict()`` for API-friendly error responses.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .allowed import AllowedQueryOptions


class QueryOptionError(Exception):
    """Base exception for all query option errors."""

    code = "QUERY_OPTION_ERROR"

    def __init__(self, message: str, option: str | None = None) -> None:
        self.message = message
        self.option = option
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "option": self.option,
        }


class ArgumentNullError(QueryOptionError, ValueError):
    """A required argument was ``None``."""

    code = "ARGUMENT_NULL"

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(f"Value cannot be null. Parameter name: {argument}", argument)


# ── Parse errors ─────────────────────────────────────────────────────


class QueryOptionParseError(QueryOptionError):
    """A raw query option value could not be turned into a typed option."""

    code = "QUERY_OPTION_PARSE_ERROR"


class EmptyQueryOptionError(QueryOptionParseError):
    """A query option that requires a value was present but blank."""

    code = "EMPTY_QUERY_OPTION"

    def __init__(self, option: str) -> None:
        super().__init__(f"Query '{option}' cannot be empty.", option)


class InvalidIntegerError(QueryOptionParseError):
    """``$top`` / ``$skip`` value is not a base-10 integer."""

    code = "INVALID_INTEGER"

    def __init__(self, option: str, value: str) -> None:
        self.value = value
        super().__init__(
            f"Query '{option}' must be an integer, got {value!r}.", option
        )


class NegativeValueError(QueryOptionParseError):
    """``$top`` / ``$skip`` value parsed to a negative integer."""

    code = "NEGATIVE_VALUE"

    def __init__(self, option: str, value: int) -> None:
        self.value = value
        super().__init__(
            f"Query '{option}' must be a non-negative integer, got {value}.",
            option,
        )


class DuplicateQueryOptionError(QueryOptionParseError):
    """The same query option was supplied more than once."""

    code = "DUPLICATE_QUERY_OPTION"

    def __init__(self, option: str) -> None:
        super().__init__(
            f"Query option '{option}' was specified more than once.", option
        )


class GrammarSyntaxError(QueryOptionParseError):
    """The expression grammar rejected a filter/orderby/select/expand string."""

    code = "SYNTAX_ERROR"

    def __init__(
        self,
        message: str,
        option: str | None = None,
        position: int | None = None,
    ) -> None:
        self.position = position
        if position is not None:
            message = f"{message} at position {position}"
        if option is not None:
            message = f"{message} in '{option}'"
        super().__init__(message + ".", option)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["position"] = self.position
        return data


class FieldNotFoundError(GrammarSyntaxError):
    """
    Unknown property on an entity type, with fuzzy-matched suggestions.

    Example error message::

        Could not find a property named 'nme' on type 'Customer'.
        Did you mean: name? in '$filter'.
    """

    code = "FIELD_NOT_FOUND"

    def __init__(
        self,
        invalid_field: str,
        type_name: str,
        available_fields: list[str],
        option: str | None = None,
        cutoff: float = 0.6,
    ) -> None:
        self.invalid_field = invalid_field
        self.type_name = type_name
        self.available_fields = available_fields
        self.suggestions = get_close_matches(
            invalid_field, available_fields, n=3, cutoff=cutoff
        )

        message = (
            f"Could not find a property named '{invalid_field}' "
            f"on type '{type_name}'"
        )
        if self.suggestions:
            message += f". Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(message, option)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "option": self.option,
            "field": self.invalid_field,
            "type": self.type_name,
            "suggestions": self.suggestions,
            "available_fields": sorted(self.available_fields),
        }


# ── Validation errors ────────────────────────────────────────────────


class QueryValidationError(QueryOptionError):
    """A parsed query violates the configured validation settings."""

    code = "QUERY_VALIDATION_ERROR"


class DisallowedQueryOptionError(QueryValidationError):
    """A query option is present but not permitted by ``AllowedQueryOptions``."""

    code = "QUERY_OPTION_NOT_ALLOWED"

    def __init__(self, kind: AllowedQueryOptions, option: str) -> None:
        self.kind = kind
        super().__init__(
            f"Query option '{option}' is not allowed. To allow it, set the "
            f"'allowed_query_options' property on ValidationSettings.",
            option,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.name
        return data


class LimitExceededError(QueryValidationError):
    """A present, allowed option exceeds a configured ceiling or allow-list."""

    code = "LIMIT_EXCEEDED"

    def __init__(
        self,
        option: str,
        setting: str,
        message: str,
        *,
        limit: Any = None,
        actual: Any = None,
    ) -> None:
        self.setting = setting
        self.limit = limit
        self.actual = actual
        super().__init__(message, option)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            {
                "setting": self.setting,
                "limit": self.limit,
                "actual": self.actual,
            }
        )
        return data


class UnsupportedQueryOptionError(QueryOptionError):
    """A recognised option cannot be composed by this engine."""

    code = "QUERY_OPTION_NOT_SUPPORTED"

    def __init__(self, option: str) -> None:
        super().__init__(
            f"Query option '{option}' is recognised but cannot be applied.",
            option,
        )
