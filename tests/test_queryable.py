"""Tests for MemoryQueryable."""

from __future__ import annotations

import pytest

from cqrs_ddd_odata import IQueryable, MemoryQueryable


def test_is_a_queryable() -> None:
    assert isinstance(MemoryQueryable([]), IQueryable)


def test_none_source_rejected() -> None:
    with pytest.raises(ValueError):
        MemoryQueryable(None)  # type: ignore[arg-type]


def test_steps_are_recorded_and_immutable() -> None:
    base = MemoryQueryable(range(10))
    query = base.where(lambda n: n % 2 == 0).skip(1).take(2)

    assert base.steps == ()
    assert [name for name, _ in query.steps] == ["where", "skip", "take"]
    assert query.to_list() == [2, 4]
    assert base.to_list() == list(range(10))


def test_iteration_is_deferred() -> None:
    calls: list[int] = []

    def predicate(n: int) -> bool:
        calls.append(n)
        return True

    query = MemoryQueryable([1, 2, 3]).where(predicate)
    assert calls == []
    assert list(query) == [1, 2, 3]
    assert calls == [1, 2, 3]


def test_rerun_on_each_iteration() -> None:
    source = [1, 2]
    query = MemoryQueryable(source).select(lambda n: n * 10)
    assert list(query) == [10, 20]
    source.append(3)
    assert list(query) == [10, 20, 30]


def test_order_by_mixed_directions() -> None:
    rows = [("b", 1), ("a", 2), ("b", 3), ("a", 1)]
    query = MemoryQueryable(rows).order_by(
        [(lambda r: r[0], False), (lambda r: r[1], True)]
    )
    assert query.to_list() == [("a", 2), ("a", 1), ("b", 3), ("b", 1)]


def test_order_by_is_stable() -> None:
    rows = [("x", 1), ("y", 0), ("z", 1), ("w", 0)]
    query = MemoryQueryable(rows).order_by([(lambda r: r[1], False)])
    assert query.to_list() == [("y", 0), ("w", 0), ("x", 1), ("z", 1)]


def test_skip_and_take_beyond_end() -> None:
    query = MemoryQueryable([1, 2, 3])
    assert query.skip(5).to_list() == []
    assert query.take(0).to_list() == []
    assert query.take(10).to_list() == [1, 2, 3]
    assert query.skip(1).count() == 2


@pytest.mark.parametrize("method", ["skip", "take"])
def test_negative_counts_rejected(method: str) -> None:
    with pytest.raises(ValueError):
        getattr(MemoryQueryable([]), method)(-1)


def test_repr_lists_steps() -> None:
    query = MemoryQueryable([]).skip(1).take(1)
    assert repr(query) == "MemoryQueryable(steps=[skip, take])"
