"""
In-memory operator evaluation strategy.

Provides the ``MemoryOperator`` / ``MemoryFunction`` strategy interfaces and
a registry that maps operator kinds and function names to them.

New operators are added by subclassing ``MemoryOperator`` and registering
via ``register()``; new functions by subclassing ``MemoryFunction`` and
registering via ``register_function()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .operators import BinaryOperatorKind
    from .schema import PrimitiveKind


class MemoryOperator(ABC):
    """
    Strategy interface for in-memory binary operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> BinaryOperatorKind:
        """The operator this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, left: Any, right: Any) -> Any:
        """
        Evaluate the operator against concrete operand values.

        Args:
            left: Value of the left operand.
            right: Value of the right operand.

        Returns:
            The result; ``None`` propagates null operands.
        """
        ...


class MemoryFunction(ABC):
    """
    Strategy interface for a built-in function such as ``contains``.

    ``parameter_kinds`` lists the accepted operand kinds per argument
    position and ``return_kind`` the kind of the result; the grammar uses
    them to reject mistyped calls. Leave them empty / ``None`` to skip the
    check.
    """

    min_args: int = 1
    max_args: int = 1
    parameter_kinds: tuple[tuple[PrimitiveKind, ...], ...] = ()
    return_kind: PrimitiveKind | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Lower-case function name as written in expressions."""
        ...

    @abstractmethod
    def invoke(self, *args: Any) -> Any:
        """Call the function; a ``None`` argument yields ``None``."""
        ...


class MemoryOperatorRegistry:
    """
    Registry of operator and function strategies.

    Usage::

        registry = MemoryOperatorRegistry()
        registry.register(EqualOperator())
        registry.register_function(ContainsFunction())

        registry.evaluate(BinaryOperatorKind.EQ, actual, expected)
        registry.call("contains", "Alice", "li")
    """

    def __init__(self) -> None:
        self._operators: dict[BinaryOperatorKind, MemoryOperator] = {}
        self._functions: dict[str, MemoryFunction] = {}

    # -- registration --------------------------------------------------------

    def register(self, operator: MemoryOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: MemoryOperator) -> None:
        """Register multiple operator strategy instances at once."""
        for op in operators:
            self.register(op)

    def register_function(self, *functions: MemoryFunction) -> None:
        """Register one or more function strategy instances."""
        for fn in functions:
            self._functions[fn.name] = fn

    # -- look-up -------------------------------------------------------------

    def get(self, name: BinaryOperatorKind) -> MemoryOperator | None:
        """Return the registered operator or ``None``."""
        return self._operators.get(name)

    def has(self, name: BinaryOperatorKind) -> bool:
        return name in self._operators

    def get_function(self, name: str) -> MemoryFunction | None:
        return self._functions.get(name)

    @property
    def supported_operators(self) -> set[BinaryOperatorKind]:
        return set(self._operators.keys())

    @property
    def supported_functions(self) -> set[str]:
        return set(self._functions.keys())

    # -- evaluation shortcuts ------------------------------------------------

    def evaluate(self, name: BinaryOperatorKind, left: Any, right: Any) -> Any:
        """
        Look up the operator and evaluate.

        Raises:
            ValueError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise ValueError(f"Unsupported operator for in-memory evaluation: {name}")
        return op.evaluate(left, right)

    def call(self, name: str, *args: Any) -> Any:
        """
        Look up the function and invoke it.

        Raises:
            ValueError: If the function is not registered.
        """
        fn = self.get_function(name)
        if fn is None:
            raise ValueError(f"Unsupported function for in-memory evaluation: {name}")
        return fn.invoke(*args)
