"""Arithmetic operators: add, sub, mul, div, mod."""

from __future__ import annotations

from typing import Any

from ..evaluator import MemoryOperator
from ..operators import BinaryOperatorKind


def _is_integral(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class AddOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.ADD

    def evaluate(self, left: Any, right: Any) -> Any:
        if left is None or right is None:
            return None
        return left + right


class SubtractOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.SUB

    def evaluate(self, left: Any, right: Any) -> Any:
        if left is None or right is None:
            return None
        return left - right


class MultiplyOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.MUL

    def evaluate(self, left: Any, right: Any) -> Any:
        if left is None or right is None:
            return None
        return left * right


class DivideOperator(MemoryOperator):
    """Integer operands divide with truncation toward zero; ``x div 0`` is null."""

    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.DIV

    def evaluate(self, left: Any, right: Any) -> Any:
        if left is None or right is None or right == 0:
            return None
        if _is_integral(left) and _is_integral(right):
            quotient = abs(left) // abs(right)
            return quotient if (left >= 0) == (right > 0) else -quotient
        return left / right


class ModuloOperator(MemoryOperator):
    """Remainder takes the sign of the dividend; ``x mod 0`` is null."""

    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.MOD

    def evaluate(self, left: Any, right: Any) -> Any:
        if left is None or right is None or right == 0:
            return None
        if _is_integral(left) and _is_integral(right):
            remainder = abs(left) % abs(right)
            return remainder if left >= 0 else -remainder
        return left % right
