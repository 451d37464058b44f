"""IQueryable — deferred collection the applier composes operations onto."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

T = TypeVar("T")


@runtime_checkable
class IQueryable(Protocol[T]):
    """
    A collection reference that records operations instead of running them.

    Every method returns a *new* queryable; the receiver is left untouched.
    Execution is the implementation's concern and happens no earlier than
    iteration.
    """

    def where(self, predicate: Callable[[T], bool]) -> IQueryable[T]: ...

    def order_by(
        self, keys: Sequence[tuple[Callable[[T], Any], bool]]
    ) -> IQueryable[T]: ...

    def select(self, projector: Callable[[T], Any]) -> IQueryable[Any]: ...

    def skip(self, count: int) -> IQueryable[T]: ...

    def take(self, count: int) -> IQueryable[T]: ...

    def __iter__(self) -> Iterator[T]: ...
