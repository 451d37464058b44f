"""
Recursive-descent parser for ``$filter`` and ``$orderby`` expressions.

Operator precedence, lowest first::

    or
    and
    eq ne gt ge lt le has
    add sub
    mul div mod
    - not          (unary)
    primary        (literal, property path, function call, parentheses)

Property paths are bound against the :class:`QueryContext` while parsing,
so an unknown property is reported with the option that referenced it.
Operands are type-checked against the declared property types and the
function signatures, so ``name gt 5`` fails here rather than when the
result is iterated.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from ..clauses import OrderByDirection, OrderByNode
from ..exceptions import FieldNotFoundError, GrammarSyntaxError
from ..expressions import (
    BinaryOperatorNode,
    ConstantNode,
    ExpressionNode,
    FunctionCallNode,
    PropertyAccessNode,
    UnaryOperatorNode,
)
from ..operators import (
    ARITHMETIC_OPERATORS,
    LOGICAL_OPERATORS,
    BinaryOperatorKind,
    UnaryOperatorKind,
)
from ..schema import PrimitiveKind
from .lexer import LITERAL_KINDS, Lexer, Token, TokenKind

if TYPE_CHECKING:
    from ..context import QueryContext
    from ..evaluator import MemoryOperatorRegistry
    from ..ports.schema import IEntityType

_COMPARISON_KEYWORDS: dict[str, BinaryOperatorKind] = {
    "eq": BinaryOperatorKind.EQ,
    "ne": BinaryOperatorKind.NE,
    "gt": BinaryOperatorKind.GT,
    "ge": BinaryOperatorKind.GE,
    "lt": BinaryOperatorKind.LT,
    "le": BinaryOperatorKind.LE,
    "has": BinaryOperatorKind.HAS,
}
_ADDITIVE_KEYWORDS: dict[str, BinaryOperatorKind] = {
    "add": BinaryOperatorKind.ADD,
    "sub": BinaryOperatorKind.SUB,
}
_MULTIPLICATIVE_KEYWORDS: dict[str, BinaryOperatorKind] = {
    "mul": BinaryOperatorKind.MUL,
    "div": BinaryOperatorKind.DIV,
    "mod": BinaryOperatorKind.MOD,
}
_RESERVED = frozenset(
    {"and", "or", "not", "asc", "desc"}
    | _COMPARISON_KEYWORDS.keys()
    | _ADDITIVE_KEYWORDS.keys()
    | _MULTIPLICATIVE_KEYWORDS.keys()
)
_CONSTANTS = {"null": None, "true": True, "false": False}

_BOOLEAN = (PrimitiveKind.BOOLEAN,)
_NUMBER = (PrimitiveKind.NUMBER,)

# Kinds that may meet on either side of a comparison.
_COMPARABLE: dict[PrimitiveKind, frozenset[PrimitiveKind]] = {
    PrimitiveKind.STRING: frozenset({PrimitiveKind.STRING, PrimitiveKind.GUID}),
    PrimitiveKind.GUID: frozenset({PrimitiveKind.GUID, PrimitiveKind.STRING}),
    PrimitiveKind.NUMBER: frozenset({PrimitiveKind.NUMBER}),
    PrimitiveKind.BOOLEAN: frozenset({PrimitiveKind.BOOLEAN}),
    PrimitiveKind.DATE: frozenset({PrimitiveKind.DATE, PrimitiveKind.DATETIME}),
    PrimitiveKind.DATETIME: frozenset({PrimitiveKind.DATE, PrimitiveKind.DATETIME}),
    PrimitiveKind.TIME: frozenset({PrimitiveKind.TIME}),
}


def _constant_kind(value: Any) -> PrimitiveKind | None:
    if isinstance(value, bool):
        return PrimitiveKind.BOOLEAN
    if isinstance(value, int | float):
        return PrimitiveKind.NUMBER
    if isinstance(value, str):
        return PrimitiveKind.STRING
    if isinstance(value, datetime.datetime):
        return PrimitiveKind.DATETIME
    if isinstance(value, datetime.date):
        return PrimitiveKind.DATE
    if isinstance(value, datetime.time):
        return PrimitiveKind.TIME
    if isinstance(value, UUID):
        return PrimitiveKind.GUID
    return None


def _describe(accepted: tuple[PrimitiveKind, ...]) -> str:
    return " or ".join(kind.value for kind in accepted)


class ExpressionParser:
    """Parse one expression string bound to *context*."""

    def __init__(
        self,
        text: str,
        context: QueryContext,
        registry: MemoryOperatorRegistry,
        option: str,
    ) -> None:
        self._context = context
        self._registry = registry
        self._option = option
        self._tokens = Lexer(text, option).tokenize()
        self._index = 0
        # Inferred operand kind per node (keyed by id); None = unchecked.
        self._kinds: dict[int, PrimitiveKind | None] = {}
        self._not_nullable: dict[int, str] = {}

    # ------------------------------------------------------------------ #
    # Public API                                                          #
    # ------------------------------------------------------------------ #

    def parse_filter(self) -> ExpressionNode:
        start = self._current
        node = self._parse_or()
        self._expect(TokenKind.END)
        self._require(node, _BOOLEAN, start, "filter expression")
        return node

    def parse_orderby(self) -> list[OrderByNode]:
        nodes: list[OrderByNode] = []
        while True:
            expression = self._parse_or()
            direction = OrderByDirection.ASCENDING
            if self._at_keyword("asc"):
                self._advance()
            elif self._at_keyword("desc"):
                self._advance()
                direction = OrderByDirection.DESCENDING
            nodes.append(OrderByNode(expression, direction))
            if self._current.kind is TokenKind.COMMA:
                self._advance()
                continue
            self._expect(TokenKind.END)
            return nodes

    # ------------------------------------------------------------------ #
    # Token helpers                                                       #
    # ------------------------------------------------------------------ #

    @property
    def _current(self) -> Token:
        return self._tokens[self._index]

    def _peek(self, offset: int = 1) -> Token:
        index = min(self._index + offset, len(self._tokens) - 1)
        return self._tokens[index]

    def _advance(self) -> Token:
        token = self._current
        if token.kind is not TokenKind.END:
            self._index += 1
        return token

    def _at_keyword(self, keyword: str) -> bool:
        token = self._current
        return token.kind is TokenKind.IDENTIFIER and token.text == keyword

    def _error(self, message: str, token: Token | None = None) -> GrammarSyntaxError:
        token = token or self._current
        return GrammarSyntaxError(message, self._option, token.position)

    def _expect(self, kind: TokenKind) -> Token:
        token = self._current
        if token.kind is not kind:
            if token.kind is TokenKind.END:
                raise self._error(f"Expected '{kind.value}' but reached the end")
            raise self._error(f"Expected '{kind.value}' but found {token.text!r}")
        return self._advance()

    # ------------------------------------------------------------------ #
    # Operand types                                                       #
    # ------------------------------------------------------------------ #

    def _typed(
        self, node: ExpressionNode, kind: PrimitiveKind | None
    ) -> ExpressionNode:
        self._kinds[id(node)] = kind
        return node

    def _kind(self, node: ExpressionNode) -> PrimitiveKind | None:
        return self._kinds.get(id(node))

    def _require(
        self,
        node: ExpressionNode,
        accepted: tuple[PrimitiveKind, ...],
        token: Token,
        role: str,
    ) -> None:
        kind = self._kind(node)
        if kind is not None and kind not in accepted:
            raise self._error(
                f"The {role} must be {_describe(accepted)}, not {kind.value}",
                token,
            )

    def _binary(
        self,
        kind: BinaryOperatorKind,
        left: ExpressionNode,
        right: ExpressionNode,
        token: Token,
    ) -> ExpressionNode:
        if kind in LOGICAL_OPERATORS:
            accepted, result = _BOOLEAN, PrimitiveKind.BOOLEAN
        elif kind in ARITHMETIC_OPERATORS:
            accepted, result = _NUMBER, PrimitiveKind.NUMBER
        else:
            self._check_comparison(kind, left, right, token)
            return self._typed(
                BinaryOperatorNode(kind, left, right), PrimitiveKind.BOOLEAN
            )
        self._require(left, accepted, token, f"left operand of '{kind.value}'")
        self._require(right, accepted, token, f"right operand of '{kind.value}'")
        return self._typed(BinaryOperatorNode(kind, left, right), result)

    def _check_comparison(
        self,
        kind: BinaryOperatorKind,
        left: ExpressionNode,
        right: ExpressionNode,
        token: Token,
    ) -> None:
        left_kind, right_kind = self._kind(left), self._kind(right)
        if (
            left_kind is not None
            and right_kind is not None
            and right_kind not in _COMPARABLE[left_kind]
        ):
            raise self._error(
                f"Cannot compare {left_kind.value} with {right_kind.value} "
                f"using '{kind.value}'",
                token,
            )
        for operand, other in ((left, right), (right, left)):
            name = self._not_nullable.get(id(operand))
            if (
                name is not None
                and isinstance(other, ConstantNode)
                and other.value is None
            ):
                raise self._error(
                    f"Property {name!r} is not nullable and cannot be compared "
                    f"with null",
                    token,
                )

    # ------------------------------------------------------------------ #
    # Precedence levels                                                   #
    # ------------------------------------------------------------------ #

    def _parse_or(self) -> ExpressionNode:
        left = self._parse_and()
        while self._at_keyword("or"):
            token = self._advance()
            left = self._binary(BinaryOperatorKind.OR, left, self._parse_and(), token)
        return left

    def _parse_and(self) -> ExpressionNode:
        left = self._parse_comparison()
        while self._at_keyword("and"):
            token = self._advance()
            left = self._binary(
                BinaryOperatorKind.AND, left, self._parse_comparison(), token
            )
        return left

    def _parse_comparison(self) -> ExpressionNode:
        left = self._parse_additive()
        while (
            self._current.kind is TokenKind.IDENTIFIER
            and self._current.text in _COMPARISON_KEYWORDS
        ):
            token = self._advance()
            kind = _COMPARISON_KEYWORDS[token.text]
            left = self._binary(kind, left, self._parse_additive(), token)
        return left

    def _parse_additive(self) -> ExpressionNode:
        left = self._parse_multiplicative()
        while (
            self._current.kind is TokenKind.IDENTIFIER
            and self._current.text in _ADDITIVE_KEYWORDS
        ):
            token = self._advance()
            kind = _ADDITIVE_KEYWORDS[token.text]
            left = self._binary(kind, left, self._parse_multiplicative(), token)
        return left

    def _parse_multiplicative(self) -> ExpressionNode:
        left = self._parse_unary()
        while (
            self._current.kind is TokenKind.IDENTIFIER
            and self._current.text in _MULTIPLICATIVE_KEYWORDS
        ):
            token = self._advance()
            kind = _MULTIPLICATIVE_KEYWORDS[token.text]
            left = self._binary(kind, left, self._parse_unary(), token)
        return left

    def _parse_unary(self) -> ExpressionNode:
        if self._current.kind is TokenKind.MINUS:
            token = self._advance()
            operand = self._parse_unary()
            self._require(operand, _NUMBER, token, "operand of '-'")
            return self._typed(
                UnaryOperatorNode(UnaryOperatorKind.NEGATE, operand),
                PrimitiveKind.NUMBER,
            )
        if self._at_keyword("not"):
            token = self._advance()
            operand = self._parse_unary()
            self._require(operand, _BOOLEAN, token, "operand of 'not'")
            return self._typed(
                UnaryOperatorNode(UnaryOperatorKind.NOT, operand),
                PrimitiveKind.BOOLEAN,
            )
        return self._parse_primary()

    def _parse_primary(self) -> ExpressionNode:
        token = self._current
        if token.kind is TokenKind.OPEN_PAREN:
            self._advance()
            node = self._parse_or()
            self._expect(TokenKind.CLOSE_PAREN)
            return node
        if token.kind in LITERAL_KINDS:
            self._advance()
            return self._typed(ConstantNode(token.value), _constant_kind(token.value))
        if token.kind is TokenKind.IDENTIFIER:
            if token.text in _CONSTANTS:
                self._advance()
                value = _CONSTANTS[token.text]
                return self._typed(ConstantNode(value), _constant_kind(value))
            if self._peek().kind is TokenKind.OPEN_PAREN:
                return self._parse_function_call()
            if token.text in _RESERVED:
                raise self._error(f"Unexpected keyword {token.text!r}")
            return self._parse_property_path()
        if token.kind is TokenKind.END:
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token {token.text!r}")

    # ------------------------------------------------------------------ #
    # Primaries                                                           #
    # ------------------------------------------------------------------ #

    def _parse_function_call(self) -> ExpressionNode:
        name_token = self._advance()
        function = self._registry.get_function(name_token.text)
        if function is None:
            raise self._error(f"Unknown function {name_token.text!r}", name_token)
        self._expect(TokenKind.OPEN_PAREN)
        arguments: list[ExpressionNode] = []
        if self._current.kind is not TokenKind.CLOSE_PAREN:
            arguments.append(self._parse_or())
            while self._current.kind is TokenKind.COMMA:
                self._advance()
                arguments.append(self._parse_or())
        self._expect(TokenKind.CLOSE_PAREN)
        if not function.min_args <= len(arguments) <= function.max_args:
            expected = (
                str(function.min_args)
                if function.min_args == function.max_args
                else f"{function.min_args} to {function.max_args}"
            )
            raise self._error(
                f"Function {function.name!r} expects {expected} argument(s), "
                f"got {len(arguments)}",
                name_token,
            )
        for position, (argument, accepted) in enumerate(
            zip(arguments, function.parameter_kinds), start=1
        ):
            self._require(
                argument,
                accepted,
                name_token,
                f"argument {position} of {function.name}()",
            )
        return self._typed(
            FunctionCallNode(function.name, tuple(arguments)), function.return_kind
        )

    def _parse_property_path(self) -> ExpressionNode:
        current_type: IEntityType = self._context.element_type
        segments: list[str] = []
        while True:
            token = self._expect(TokenKind.IDENTIFIER)
            segments.append(token.text)
            is_last = self._current.kind is not TokenKind.SLASH
            prop = current_type.find_property(token.text)
            if prop is not None:
                if not is_last:
                    raise self._error(
                        f"Property {token.text!r} on type {current_type.name!r} "
                        f"is not a navigation property",
                        token,
                    )
                node = self._typed(PropertyAccessNode(tuple(segments)), prop.kind)
                # Only a top-level path is guaranteed non-null; a navigation
                # on the way may itself be missing.
                if not prop.nullable and len(segments) == 1:
                    self._not_nullable[id(node)] = token.text
                return node

            navigation = current_type.find_navigation_property(token.text)
            if navigation is None:
                raise FieldNotFoundError(
                    token.text,
                    current_type.name,
                    current_type.member_names(),
                    option=self._option,
                )
            if navigation.collection:
                raise self._error(
                    f"Collection navigation property {token.text!r} cannot be "
                    f"used in an expression",
                    token,
                )
            if is_last:
                raise self._error(
                    f"Navigation property {token.text!r} cannot be used as a value",
                    token,
                )
            target = self._context.model.find_type(navigation.target)
            if target is None:
                raise self._error(f"Unknown entity type {navigation.target!r}", token)
            current_type = target
            self._advance()  # '/'
