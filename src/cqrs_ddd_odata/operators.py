from enum import Enum


class BinaryOperatorKind(str, Enum):
    """Binary operators of the filter/order-by expression language."""

    # Logical
    OR = "or"
    AND = "and"

    # Comparison
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"
    HAS = "has"

    # Arithmetic
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"


class UnaryOperatorKind(str, Enum):
    """Unary operators of the filter/order-by expression language."""

    NOT = "not"
    NEGATE = "-"


LOGICAL_OPERATORS: frozenset[BinaryOperatorKind] = frozenset(
    {BinaryOperatorKind.OR, BinaryOperatorKind.AND}
)
COMPARISON_OPERATORS: frozenset[BinaryOperatorKind] = frozenset(
    {
        BinaryOperatorKind.EQ,
        BinaryOperatorKind.NE,
        BinaryOperatorKind.GT,
        BinaryOperatorKind.GE,
        BinaryOperatorKind.LT,
        BinaryOperatorKind.LE,
        BinaryOperatorKind.HAS,
    }
)
ARITHMETIC_OPERATORS: frozenset[BinaryOperatorKind] = frozenset(
    {
        BinaryOperatorKind.ADD,
        BinaryOperatorKind.SUB,
        BinaryOperatorKind.MUL,
        BinaryOperatorKind.DIV,
        BinaryOperatorKind.MOD,
    }
)
