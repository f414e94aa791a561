"""Eager helpers layered on the chunk driver.

These collect each chunk into a list, trading the driver's zero-copy views for
values that can be kept around, passed to other threads, or batched into API
requests. Use `iterchunks.chunks.chunks` directly when the chunks are consumed
in place.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, TypeVar

from iterchunks.chunks import chunks

T = TypeVar("T")


def chunk_iterable(iterable: Iterable[T], size: int) -> Iterator[List[T]]:
    """Yield successive lists of `size` items from `iterable`.

    The final list may be shorter. Complexity: O(n) traversal with one list
    per chunk.
    """

    driver = chunks(iterable, size)
    while (chunk := driver.next_chunk()) is not None:
        yield list(chunk)


def take_chunks(iterable: Iterable[T], size: int, limit: int) -> List[List[T]]:
    """Collect at most `limit` chunks of `size` items from the front of `iterable`."""

    if limit < 0:
        raise ValueError("Chunk limit must be non-negative")

    driver = chunks(iterable, size)
    collected: List[List[T]] = []
    while len(collected) < limit and (chunk := driver.next_chunk()) is not None:
        collected.append(list(chunk))
    return collected


__all__ = ["chunk_iterable", "take_chunks"]
