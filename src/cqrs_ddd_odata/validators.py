"""
Self-check rules for each option kind.

Every option wrapper delegates its ``validate(settings)`` here; the
:class:`~cqrs_ddd_odata.QueryValidator` only decides *whether* an option
is allowed and then asks the option to check its own value.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .allowed import (
    AllowedArithmeticOperators,
    AllowedFunctions,
    AllowedLogicalOperators,
)
from .exceptions import LimitExceededError
from .expressions import BinaryOperatorNode, FunctionCallNode, UnaryOperatorNode
from .operators import BinaryOperatorKind, UnaryOperatorKind

if TYPE_CHECKING:
    from .clauses import FilterClause, OrderByClause
    from .options import (
        CountOption,
        FilterOption,
        OrderByOption,
        SelectExpandOption,
        SkipOption,
        TopOption,
    )
    from .settings import ValidationSettings

_LOGICAL_FLAGS: dict[BinaryOperatorKind, AllowedLogicalOperators] = {
    BinaryOperatorKind.OR: AllowedLogicalOperators.OR,
    BinaryOperatorKind.AND: AllowedLogicalOperators.AND,
    BinaryOperatorKind.EQ: AllowedLogicalOperators.EQUAL,
    BinaryOperatorKind.NE: AllowedLogicalOperators.NOT_EQUAL,
    BinaryOperatorKind.GT: AllowedLogicalOperators.GREATER_THAN,
    BinaryOperatorKind.GE: AllowedLogicalOperators.GREATER_THAN_OR_EQUAL,
    BinaryOperatorKind.LT: AllowedLogicalOperators.LESS_THAN,
    BinaryOperatorKind.LE: AllowedLogicalOperators.LESS_THAN_OR_EQUAL,
    BinaryOperatorKind.HAS: AllowedLogicalOperators.HAS,
}
_ARITHMETIC_FLAGS: dict[BinaryOperatorKind, AllowedArithmeticOperators] = {
    BinaryOperatorKind.ADD: AllowedArithmeticOperators.ADD,
    BinaryOperatorKind.SUB: AllowedArithmeticOperators.SUBTRACT,
    BinaryOperatorKind.MUL: AllowedArithmeticOperators.MULTIPLY,
    BinaryOperatorKind.DIV: AllowedArithmeticOperators.DIVIDE,
    BinaryOperatorKind.MOD: AllowedArithmeticOperators.MODULO,
}


# -- paging ------------------------------------------------------------------


def _check_top(option: str, value: int, settings: ValidationSettings) -> None:
    max_top = settings.max_top
    if max_top is not None and value > max_top:
        raise LimitExceededError(
            option,
            "max_top",
            f"The limit of '{max_top}' for Top query has been exceeded. "
            f"The value from the incoming request is '{value}'.",
            limit=max_top,
            actual=value,
        )


def validate_top(option: TopOption, settings: ValidationSettings) -> None:
    _check_top("$top", option.value, settings)


def validate_skip(option: SkipOption, settings: ValidationSettings) -> None:
    max_skip = settings.max_skip
    if max_skip is not None and option.value > max_skip:
        raise LimitExceededError(
            "$skip",
            "max_skip",
            f"The limit of '{max_skip}' for Skip query has been exceeded. "
            f"The value from the incoming request is '{option.value}'.",
            limit=max_skip,
            actual=option.value,
        )


# -- expressions -------------------------------------------------------------


def validate_filter_clause(
    clause: FilterClause, settings: ValidationSettings, option: str = "$filter"
) -> None:
    """Check node count and every operator/function against the allow-lists."""
    node_count = clause.node_count
    if node_count > settings.max_node_count:
        raise LimitExceededError(
            option,
            "max_node_count",
            f"The node count limit of '{settings.max_node_count}' has been "
            f"exceeded. To increase the limit, set the 'max_node_count' "
            f"property on ValidationSettings.",
            limit=settings.max_node_count,
            actual=node_count,
        )

    for node in clause.expression.walk():
        if isinstance(node, BinaryOperatorNode):
            _check_binary_operator(node.kind, settings, option)
        elif isinstance(node, UnaryOperatorNode):
            if node.kind is UnaryOperatorKind.NOT and not (
                AllowedLogicalOperators.NOT & settings.allowed_logical_operators
            ):
                raise _not_allowed(option, "allowed_logical_operators", "Not")
        elif isinstance(node, FunctionCallNode):
            # Functions registered outside the built-in set have no flag.
            flag = AllowedFunctions.__members__.get(node.name.upper())
            if flag is not None and not (flag & settings.allowed_functions):
                raise _not_allowed(option, "allowed_functions", node.name)


def _check_binary_operator(
    kind: BinaryOperatorKind, settings: ValidationSettings, option: str
) -> None:
    logical = _LOGICAL_FLAGS.get(kind)
    if logical is not None:
        if not (logical & settings.allowed_logical_operators):
            raise _not_allowed(option, "allowed_logical_operators", kind.value)
        return
    arithmetic = _ARITHMETIC_FLAGS[kind]
    if not (arithmetic & settings.allowed_arithmetic_operators):
        raise _not_allowed(option, "allowed_arithmetic_operators", kind.value)


def _not_allowed(option: str, setting: str, name: str) -> LimitExceededError:
    return LimitExceededError(
        option,
        setting,
        f"'{name}' is not allowed. To allow it, set the '{setting}' property "
        f"on ValidationSettings.",
        actual=name,
    )


def validate_orderby_clause(
    clause: OrderByClause, settings: ValidationSettings, option: str = "$orderby"
) -> None:
    """Check the clause count and, when restricted, each referenced property."""
    if clause.node_count > settings.max_orderby_node_count:
        raise LimitExceededError(
            option,
            "max_orderby_node_count",
            f"The number of clauses in $orderby query option exceeded the "
            f"maximum number allowed. The maximum number of $orderby clauses "
            f"allowed is {settings.max_orderby_node_count}.",
            limit=settings.max_orderby_node_count,
            actual=clause.node_count,
        )
    allowed = settings.allowed_orderby_properties
    if not allowed:
        return
    for path in clause.property_paths():
        if path not in allowed:
            raise LimitExceededError(
                option,
                "allowed_orderby_properties",
                f"Order by '{path}' is not allowed. To allow it, set the "
                f"'allowed_orderby_properties' property on ValidationSettings.",
                limit=sorted(allowed),
                actual=path,
            )


def validate_filter(option: FilterOption, settings: ValidationSettings) -> None:
    validate_filter_clause(option.filter_clause, settings)


def validate_orderby(option: OrderByOption, settings: ValidationSettings) -> None:
    validate_orderby_clause(option.orderby_clause, settings)


# -- select / expand ---------------------------------------------------------


def validate_select_expand(
    option: SelectExpandOption, settings: ValidationSettings
) -> None:
    """Check expansion depth and the nested options of every expanded item."""
    clause = option.select_expand_clause
    max_depth = settings.max_expansion_depth
    depth = clause.depth
    if max_depth > 0 and depth > max_depth:
        raise LimitExceededError(
            "$expand",
            "max_expansion_depth",
            f"The request includes a $expand path which is too deep. The "
            f"maximum depth allowed is {max_depth}. To increase the limit, set "
            f"the 'max_expansion_depth' property on ValidationSettings.",
            limit=max_depth,
            actual=depth,
        )
    for item in clause.walk_expanded():
        if item.filter is not None:
            validate_filter_clause(item.filter, settings, "$expand")
        if item.orderby is not None:
            validate_orderby_clause(item.orderby, settings, "$expand")
        if item.top is not None:
            _check_top("$expand", item.top, settings)


# -- count -------------------------------------------------------------------


def validate_count(option: CountOption, settings: ValidationSettings) -> None:
    # Reading the value parses the literal and raises on anything but a bool.
    _ = option.value
