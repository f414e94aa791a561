"""Fixed-size chunked views over any iterable.

`chunks(iterable, size)` returns a `Chunks` driver that owns the underlying
iterator. Each call to `Chunks.next_chunk()` hands out a `Chunk`, a short-lived
view that yields at most `size` items straight from the source without
buffering them. Only one view is usable at a time: requesting the next chunk
retires the previous view, and any items it left unconsumed are drained from
the source so boundaries always fall on multiples of `size`.

The driver is deliberately not an iterator. Its chunks are views onto shared
state rather than independent values, so callers loop explicitly::

    driver = chunks(records, 100)
    while (chunk := driver.next_chunk()) is not None:
        for record in chunk:
            ...

No locks are taken; a driver and its live view belong to one thread at a time
but may be handed between threads freely.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar

from iterchunks.bounds import SizeHint, chunk_count_hint, source_size_hint

logger = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D")

# Marks "no held item" and "source exhausted"; never handed to callers.
_EMPTY = object()


class ChunkSizeError(ValueError):
    """Raised when a chunk size is zero, negative, or not an integer."""


class StaleChunkError(RuntimeError):
    """Raised when a chunk view is used after the driver moved past it."""


@dataclass(frozen=True)
class ChunkingConfig:
    """Parameters fixed for the lifetime of a `Chunks` driver."""

    size: int

    def validate(self) -> None:
        """Reject sizes that cannot form a chunk boundary."""

        if isinstance(self.size, bool) or not isinstance(self.size, int):
            raise ChunkSizeError(f"Chunk size must be an int, got {type(self.size).__name__}")
        if self.size <= 0:
            raise ChunkSizeError("Chunk size must be positive")


class Chunks(Generic[T]):
    """Drive an iterator forward one fixed-size chunk at a time."""

    def __init__(self, source: Iterable[T], config: ChunkingConfig) -> None:
        config.validate()
        self._source: Iterator[T] = iter(source)
        self._size = config.size
        # Items still owed before the open chunk's boundary, excluding the held head.
        self._pending = 0
        self._head: object = _EMPTY
        self._exhausted = False
        self._view: Optional[Chunk[T]] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def exhausted(self) -> bool:
        """True once the source has reported the end; never resets."""

        return self._exhausted

    def next_chunk(self) -> Optional[Chunk[T]]:
        """Return a view over the next chunk, or None when the source is spent.

        Any part of the previous chunk the caller did not consume is pulled
        from the source and discarded first. Once None has been returned every
        later call returns None without asking the source again.
        """

        self._view = None
        if self._exhausted:
            return None

        self._drain()
        if self._exhausted:
            return None

        first = self._advance()
        if first is _EMPTY:
            return None

        self._head = first
        self._pending = self._size - 1
        self._view = Chunk(self)
        return self._view

    def size_hint(self) -> SizeHint:
        """Bound the number of chunks later `next_chunk()` calls will return.

        The currently open chunk is not counted. Bounds derive from what the
        source reports and are advisory only.
        """

        if self._exhausted:
            return SizeHint(0, 0)
        return chunk_count_hint(
            source_size_hint(self._source), self._size, outstanding=self._pending
        )

    def for_each(self, func: Callable[[Chunk[T]], object]) -> None:
        """Call `func` with every remaining chunk in order."""

        while (chunk := self.next_chunk()) is not None:
            func(chunk)

    def _drain(self) -> None:
        """Advance the source to the open chunk's boundary, discarding items."""

        skipped = self._pending + (self._head is not _EMPTY)
        self._head = _EMPTY
        if skipped:
            logger.debug("Draining %d unconsumed item(s) from abandoned chunk", skipped)
        while self._pending > 0:
            self._pending -= 1
            if self._advance() is _EMPTY:
                break

    def _advance(self) -> object:
        """Pull one item from the source, recording exhaustion when it ends."""

        try:
            return next(self._source)
        except StopIteration:
            self._pending = 0
            if not self._exhausted:
                logger.debug("Source exhausted; no further chunks")
            self._exhausted = True
            return _EMPTY


class Chunk(Generic[T]):
    """A view yielding the items of one chunk.

    Created by `Chunks.next_chunk()`. The view stores nothing but its driver;
    the remaining count lives on the driver and is updated through this view.
    Items are independent values, so a chunk is an ordinary iterator and can
    be fed to `for`, `list()` and friends.
    """

    def __init__(self, driver: Chunks[T]) -> None:
        self._driver = driver

    @property
    def active(self) -> bool:
        """Whether this view is still the driver's live chunk."""

        return self._driver._view is self

    def __iter__(self) -> Chunk[T]:
        return self

    def __next__(self) -> T:
        item = self._produce()
        if item is _EMPTY:
            raise StopIteration
        return item  # type: ignore[return-value]

    def next_item(self, default: Optional[D] = None) -> T | D | None:
        """Return the next item of this chunk, or `default` past its boundary."""

        item = self._produce()
        if item is _EMPTY:
            return default
        return item  # type: ignore[return-value]

    def size_hint(self) -> SizeHint:
        """Bound the items left in this chunk.

        Exact whenever the source reports exact bounds. With an unknown source
        upper bound the chunk's own remaining count caps the estimate.
        """

        driver = self._borrow()
        held = int(driver._head is not _EMPTY)
        pending = driver._pending
        source = SizeHint(0, 0) if driver._exhausted else source_size_hint(driver._source)
        lower = min(source.lower, pending) + held
        upper = pending if source.upper is None else min(source.upper, pending)
        return SizeHint(lower, upper + held)

    def __length_hint__(self) -> int:
        return self.size_hint().lower

    def _borrow(self) -> Chunks[T]:
        driver = self._driver
        if driver._view is not self:
            raise StaleChunkError(
                "Chunk was retired by a later next_chunk() call; consume each "
                "chunk before requesting the next one"
            )
        return driver

    def _produce(self) -> object:
        driver = self._borrow()
        if driver._head is not _EMPTY:
            item, driver._head = driver._head, _EMPTY
            return item
        if driver._pending == 0:
            return _EMPTY
        driver._pending -= 1
        return driver._advance()


def chunks(iterable: Iterable[T], size: int) -> Chunks[T]:
    """Wrap `iterable` in a driver producing chunks of `size` items.

    A non-positive `size` raises `ChunkSizeError` before the iterable is
    touched.
    """

    return Chunks(iterable, ChunkingConfig(size=size))


__all__ = [
    "Chunk",
    "ChunkSizeError",
    "ChunkingConfig",
    "Chunks",
    "StaleChunkError",
    "chunks",
]
