"""Remaining-count bounds for chunked iteration.

Python iterators only advertise an estimate through `__length_hint__`, so this
module decides when that estimate can be trusted as an exact bound and how an
item bound translates into a chunk bound. Bounds are advisory: callers may use
them to pre-size buffers but never for correctness.
"""
from __future__ import annotations

import operator
from typing import Any, NamedTuple, Optional


class SizeHint(NamedTuple):
    """Lower and optional upper bound on a remaining count."""

    lower: int
    upper: Optional[int]


UNKNOWN = SizeHint(0, None)

# Built-in iterators whose length hint is the exact remaining count.
_EXACT_HINT_TYPES = (
    type(iter([])),
    type(iter(())),
    type(iter(range(0))),
    type(iter(range(1 << 64))),
    type(iter("")),
    type(iter(b"")),
    type(iter(bytearray())),
    type(reversed([])),
    type(iter({})),
    type(iter({}.values())),
    type(iter({}.items())),
)


def source_size_hint(source: Any) -> SizeHint:
    """Return the bound a source iterator reports for its remaining items.

    Sources may implement ``size_hint()`` returning ``(lower, upper)``; that
    takes precedence. Otherwise only built-in iterators over sized containers
    are trusted.
    """

    reporter = getattr(source, "size_hint", None)
    if callable(reporter):
        lower, upper = reporter()
        return SizeHint(max(int(lower), 0), None if upper is None else max(int(upper), 0))

    if isinstance(source, _EXACT_HINT_TYPES):
        remaining = operator.length_hint(source)
        return SizeHint(remaining, remaining)
    return UNKNOWN


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer division rounded up; `denominator` must be positive."""

    return -(-numerator // denominator)


def chunk_count_hint(items: SizeHint, size: int, outstanding: int = 0) -> SizeHint:
    """Convert an item bound into a bound on remaining chunks.

    `outstanding` items are discarded before the next chunk opens, so they are
    removed from both ends of the bound first.
    """

    lower = ceil_div(max(items.lower - outstanding, 0), size)
    if items.upper is None:
        return SizeHint(lower, None)
    return SizeHint(lower, ceil_div(max(items.upper - outstanding, 0), size))


__all__ = [
    "SizeHint",
    "UNKNOWN",
    "ceil_div",
    "chunk_count_hint",
    "source_size_hint",
]
