"""
MemoryQueryable — deferred operation chain over an in-memory iterable.

Default :class:`~cqrs_ddd_odata.ports.IQueryable` adapter::

    query = MemoryQueryable(customers).where(is_active).skip(10).take(5)
    query.steps     # (("where", is_active), ("skip", 10), ("take", 5))
    list(query)     # runs the chain now
"""

from __future__ import annotations

import itertools
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Sequence

T = TypeVar("T")


class MemoryQueryable(Generic[T]):
    """
    Immutable, lazy chain of ``where`` / ``order_by`` / ``select`` /
    ``skip`` / ``take`` steps.

    Each method returns a new queryable sharing the same source; nothing
    runs until iteration, and every iteration re-runs the chain.
    """

    def __init__(
        self,
        source: Iterable[Any],
        steps: tuple[tuple[str, Any], ...] = (),
    ) -> None:
        if source is None:
            raise ValueError("source must not be None")
        self._source = source
        self._steps = steps

    @property
    def steps(self) -> tuple[tuple[str, Any], ...]:
        """Recorded ``(operation, argument)`` pairs in application order."""
        return self._steps

    def _with(self, name: str, argument: Any) -> MemoryQueryable[Any]:
        return MemoryQueryable(self._source, (*self._steps, (name, argument)))

    # -- composition ---------------------------------------------------------

    def where(self, predicate: Callable[[T], bool]) -> MemoryQueryable[T]:
        return self._with("where", predicate)

    def order_by(
        self, keys: Sequence[tuple[Callable[[T], Any], bool]]
    ) -> MemoryQueryable[T]:
        """Sort by ``(key, descending)`` pairs, primary key first."""
        return self._with("order_by", tuple(keys))

    def select(self, projector: Callable[[T], Any]) -> MemoryQueryable[Any]:
        return self._with("select", projector)

    def skip(self, count: int) -> MemoryQueryable[T]:
        if count < 0:
            raise ValueError("skip count must be non-negative")
        return self._with("skip", count)

    def take(self, count: int) -> MemoryQueryable[T]:
        if count < 0:
            raise ValueError("take count must be non-negative")
        return self._with("take", count)

    # -- execution -----------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        items: Iterable[Any] = self._source
        for name, argument in self._steps:
            if name == "where":
                items = filter(argument, items)
            elif name == "order_by":
                items = sorted(items, key=_composite_key(argument))
            elif name == "select":
                items = map(argument, items)
            elif name == "skip":
                items = itertools.islice(items, argument, None)
            elif name == "take":
                items = itertools.islice(items, argument)
        return iter(items)

    def to_list(self) -> list[T]:
        return list(self)

    def count(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        names = ", ".join(name for name, _ in self._steps)
        return f"MemoryQueryable(steps=[{names}])"


def _composite_key(
    keys: tuple[tuple[Callable[[Any], Any], bool], ...],
) -> Callable[[Any], Any]:
    """Single sort key honouring a per-key direction."""

    def compare(left: Any, right: Any) -> int:
        for key, descending in keys:
            a, b = key(left), key(right)
            if a == b:
                continue
            result = -1 if a < b else 1
            return -result if descending else result
        return 0

    return cmp_to_key(compare)
