"""
In-memory operator and function implementations.

Usage::

    from cqrs_ddd_odata.operators_memory import build_default_registry

    registry = build_default_registry()
    registry.evaluate(BinaryOperatorKind.EQ, actual, expected)
    registry.call("tolower", "Alice")
"""

from __future__ import annotations

from ..evaluator import MemoryOperatorRegistry
from .arithmetic import (
    AddOperator,
    DivideOperator,
    ModuloOperator,
    MultiplyOperator,
    SubtractOperator,
)
from .comparison import (
    EqualOperator,
    GreaterEqualOperator,
    GreaterThanOperator,
    HasOperator,
    LessEqualOperator,
    LessThanOperator,
    NotEqualOperator,
)
from .functions import (
    CeilingFunction,
    ConcatFunction,
    ContainsFunction,
    DayFunction,
    EndsWithFunction,
    FloorFunction,
    HourFunction,
    IndexOfFunction,
    LengthFunction,
    MinuteFunction,
    MonthFunction,
    RoundFunction,
    SecondFunction,
    StartsWithFunction,
    SubstringFunction,
    ToLowerFunction,
    ToUpperFunction,
    TrimFunction,
    YearFunction,
)


def build_default_registry() -> MemoryOperatorRegistry:
    """
    Create a registry with all built-in operators and functions.

    Returns a fresh instance each call; once built, a registry is only read
    and may be shared by every request.

    Example:
        >>> registry = build_default_registry()
        >>> registry.call("toupper", "odata")
        'ODATA'
    """
    registry = MemoryOperatorRegistry()
    registry.register_all(
        # Comparison
        EqualOperator(),
        NotEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        HasOperator(),
        # Arithmetic
        AddOperator(),
        SubtractOperator(),
        MultiplyOperator(),
        DivideOperator(),
        ModuloOperator(),
    )
    registry.register_function(
        # String
        ContainsFunction(),
        StartsWithFunction(),
        EndsWithFunction(),
        LengthFunction(),
        IndexOfFunction(),
        SubstringFunction(),
        ToLowerFunction(),
        ToUpperFunction(),
        TrimFunction(),
        ConcatFunction(),
        # Date/time
        YearFunction(),
        MonthFunction(),
        DayFunction(),
        HourFunction(),
        MinuteFunction(),
        SecondFunction(),
        # Math
        RoundFunction(),
        FloorFunction(),
        CeilingFunction(),
    )
    return registry


__all__ = [
    "MemoryOperatorRegistry",
    "build_default_registry",
]
