"""Comparison operators: eq, ne, gt, ge, lt, le, has."""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from ..evaluator import MemoryOperator
from ..operators import BinaryOperatorKind


def _normalise(value: Any, other: Any) -> Any:
    """Bring *value* into a form comparable with *other*."""
    if isinstance(value, Enum) and not isinstance(other, Enum):
        return value.name if isinstance(other, str) else value.value
    if isinstance(value, UUID) and isinstance(other, str):
        return str(value)
    if isinstance(value, str) and isinstance(other, UUID):
        return value.lower()
    if isinstance(value, datetime.datetime) and isinstance(other, datetime.datetime):
        if value.tzinfo is None and other.tzinfo is not None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value
    if isinstance(value, datetime.date) and not isinstance(value, datetime.datetime):
        if isinstance(other, datetime.datetime):
            return datetime.datetime(
                value.year, value.month, value.day, tzinfo=other.tzinfo
            )
    return value


def coerce_operands(left: Any, right: Any) -> tuple[Any, Any]:
    """Normalise both operands of a comparison against each other."""
    if left is None or right is None:
        return left, right
    new_left = _normalise(left, right)
    new_right = _normalise(right, left)
    if isinstance(new_right, UUID) and isinstance(new_left, str):
        new_right = str(new_right)
    return new_left, new_right


class EqualOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.EQ

    def evaluate(self, left: Any, right: Any) -> bool:
        left, right = coerce_operands(left, right)
        return bool(left == right)


class NotEqualOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.NE

    def evaluate(self, left: Any, right: Any) -> bool:
        left, right = coerce_operands(left, right)
        return bool(left != right)


class GreaterThanOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.GT

    def evaluate(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        left, right = coerce_operands(left, right)
        return bool(left > right)


class GreaterEqualOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.GE

    def evaluate(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        left, right = coerce_operands(left, right)
        return bool(left >= right)


class LessThanOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.LT

    def evaluate(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        left, right = coerce_operands(left, right)
        return bool(left < right)


class LessEqualOperator(MemoryOperator):
    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.LE

    def evaluate(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        left, right = coerce_operands(left, right)
        return bool(left <= right)


class HasOperator(MemoryOperator):
    """Flag test: integer bit masks, ``Flag`` enums or comma-separated names."""

    @property
    def name(self) -> BinaryOperatorKind:
        return BinaryOperatorKind.HAS

    def evaluate(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        if isinstance(left, Enum) and isinstance(right, str):
            members = type(left).__members__
            names = {part.strip() for part in right.split(",") if part.strip()}
            if not names <= members.keys():
                return False
            return all(
                (left.value & members[n].value) == members[n].value for n in names
            )
        if isinstance(left, Enum):
            left = left.value
        if isinstance(right, Enum):
            right = right.value
        if isinstance(left, int) and isinstance(right, int):
            return (left & right) == right
        if isinstance(left, str) and isinstance(right, str):
            present = {part.strip() for part in left.split(",")}
            wanted = {part.strip() for part in right.split(",") if part.strip()}
            return wanted <= present
        return False
