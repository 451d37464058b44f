"""
Expression tree produced by the grammar for ``$filter`` and ``$orderby``.

Nodes are immutable and evaluate against a candidate record through a
:class:`~cqrs_ddd_odata.evaluator.MemoryOperatorRegistry`. Logical operators
follow three-valued logic: ``None`` stands for *unknown*.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .operators import BinaryOperatorKind, UnaryOperatorKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .evaluator import MemoryOperatorRegistry


def resolve_path(obj: Any, path: tuple[str, ...]) -> Any:
    """
    Resolve a property path on *obj*.

    Mappings are read by key, anything else by attribute. A ``None`` met
    part-way through the path resolves the whole path to ``None``.
    """
    for part in path:
        if obj is None:
            return None
        obj = obj.get(part) if isinstance(obj, Mapping) else getattr(obj, part, None)
    return obj


class ExpressionNode(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        """Evaluate this node against *candidate*."""
        ...

    @abstractmethod
    def to_dict(self) -> dict[str, Any]: ...

    def children(self) -> tuple[ExpressionNode, ...]:
        return ()

    def walk(self) -> Iterator[ExpressionNode]:
        """Depth-first, pre-order traversal including this node."""
        yield self
        for child in self.children():
            yield from child.walk()

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.walk())


@dataclass(frozen=True)
class ConstantNode(ExpressionNode):
    value: Any

    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        return {"type": "constant", "value": self.value}


@dataclass(frozen=True)
class PropertyAccessNode(ExpressionNode):
    path: tuple[str, ...]

    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        return resolve_path(candidate, self.path)

    @property
    def dotted_path(self) -> str:
        return "/".join(self.path)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "property", "path": self.dotted_path}


@dataclass(frozen=True)
class BinaryOperatorNode(ExpressionNode):
    kind: BinaryOperatorKind
    left: ExpressionNode
    right: ExpressionNode

    def children(self) -> tuple[ExpressionNode, ...]:
        return (self.left, self.right)

    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        if self.kind is BinaryOperatorKind.AND:
            left = self.left.evaluate(candidate, registry)
            if left is False:
                return False
            right = self.right.evaluate(candidate, registry)
            if right is False:
                return False
            if left is None or right is None:
                return None
            return bool(left) and bool(right)
        if self.kind is BinaryOperatorKind.OR:
            left = self.left.evaluate(candidate, registry)
            if left is True:
                return True
            right = self.right.evaluate(candidate, registry)
            if right is True:
                return True
            if left is None or right is None:
                return None
            return bool(left) or bool(right)
        return registry.evaluate(
            self.kind,
            self.left.evaluate(candidate, registry),
            self.right.evaluate(candidate, registry),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "binary",
            "op": self.kind.value,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class UnaryOperatorNode(ExpressionNode):
    kind: UnaryOperatorKind
    operand: ExpressionNode

    def children(self) -> tuple[ExpressionNode, ...]:
        return (self.operand,)

    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        value = self.operand.evaluate(candidate, registry)
        if value is None:
            return None
        if self.kind is UnaryOperatorKind.NOT:
            return not value
        return -value

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "unary",
            "op": self.kind.value,
            "operand": self.operand.to_dict(),
        }


@dataclass(frozen=True)
class FunctionCallNode(ExpressionNode):
    name: str
    arguments: tuple[ExpressionNode, ...]

    def children(self) -> tuple[ExpressionNode, ...]:
        return self.arguments

    def evaluate(self, candidate: Any, registry: MemoryOperatorRegistry) -> Any:
        args = [arg.evaluate(candidate, registry) for arg in self.arguments]
        return registry.call(self.name, *args)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "function",
            "name": self.name,
            "args": [arg.to_dict() for arg in self.arguments],
        }
