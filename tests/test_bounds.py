from __future__ import annotations

from iterchunks.bounds import (
    UNKNOWN,
    SizeHint,
    ceil_div,
    chunk_count_hint,
    source_size_hint,
)


class ReportingSource:
    def __init__(self, lower: int, upper: int | None) -> None:
        self._bounds = (lower, upper)

    def __iter__(self) -> "ReportingSource":
        return self

    def __next__(self) -> int:
        raise StopIteration

    def size_hint(self) -> tuple[int, int | None]:
        return self._bounds


def test_builtin_sequence_iterators_report_exact_bounds() -> None:
    items = iter([1, 2, 3])
    assert source_size_hint(items) == SizeHint(3, 3)
    next(items)
    assert source_size_hint(items) == SizeHint(2, 2)
    assert source_size_hint(iter(range(5))) == SizeHint(5, 5)
    assert source_size_hint(iter({"a": 1, "b": 2})) == SizeHint(2, 2)


def test_generators_report_unknown_bounds() -> None:
    generator = (value for value in range(3))
    assert source_size_hint(generator) == UNKNOWN


def test_size_hint_method_takes_precedence() -> None:
    assert source_size_hint(ReportingSource(2, 9)) == SizeHint(2, 9)
    assert source_size_hint(ReportingSource(4, None)) == SizeHint(4, None)


def test_ceil_div_rounds_up() -> None:
    assert ceil_div(0, 3) == 0
    assert ceil_div(6, 3) == 2
    assert ceil_div(7, 3) == 3


def test_chunk_count_hint_removes_outstanding_items() -> None:
    assert chunk_count_hint(SizeHint(5, 5), size=2) == SizeHint(3, 3)
    assert chunk_count_hint(SizeHint(5, None), size=2, outstanding=1) == SizeHint(2, None)
    assert chunk_count_hint(SizeHint(0, 3), size=3, outstanding=2) == SizeHint(0, 1)
    assert chunk_count_hint(SizeHint(1, 1), size=4, outstanding=3) == SizeHint(0, 0)
