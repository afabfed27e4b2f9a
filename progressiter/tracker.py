"""Iterator adapter that pairs every element with a progress snapshot."""

from __future__ import annotations

import time
from collections.abc import Iterator as IteratorABC
from datetime import timedelta
from typing import Callable, Generic, Iterable, Iterator, Tuple, TypeVar

from .hints import SizeHint, as_iterator, read_size_hint
from .record import Snapshot

T = TypeVar("T")

Clock = Callable[[], float]


class Progressable:
    """Mixin giving an iterable a ``progress()`` method."""

    def progress(self, clock: Clock = time.monotonic) -> "ProgressIterator":
        return ProgressIterator(self, clock=clock)


class ProgressIterator(Progressable, IteratorABC, Generic[T]):
    """Wraps an iterable and yields ``(Snapshot, element)`` pairs.

    Elements come out in the same order and unchanged. Elapsed time is
    measured from construction with ``clock``, which defaults to
    :func:`time.monotonic`.
    """

    def __init__(self, source: Iterable[T], clock: Clock = time.monotonic) -> None:
        self._source: Iterator[T] = as_iterator(source)
        self._clock = clock
        self._count = 0
        self._exhausted = False
        self._started = clock()

    @property
    def count(self) -> int:
        return self._count

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    def __iter__(self) -> "ProgressIterator[T]":
        return self

    def __next__(self) -> Tuple[Snapshot, T]:
        if self._exhausted:
            raise StopIteration
        try:
            item = next(self._source)
        except StopIteration:
            self._exhausted = True
            raise
        return self._record(), item

    def _record(self) -> Snapshot:
        hint = self.size_hint()
        elapsed = timedelta(seconds=self._clock() - self._started)
        self._count += 1
        return Snapshot(count=self._count, elapsed=elapsed, size_hint=hint)

    def size_hint(self) -> SizeHint:
        return read_size_hint(self._source)

    def __length_hint__(self) -> int:
        return self.size_hint()[0]

    def count_remaining(self) -> int:
        """Consume the rest of the source and return how many elements were left."""
        if self._exhausted:
            return 0
        self._exhausted = True
        if isinstance(self._source, ProgressIterator):
            return self._source.count_remaining()
        return sum(1 for _ in self._source)


def progress(iterable: Iterable[T], clock: Clock = time.monotonic) -> ProgressIterator[T]:
    return ProgressIterator(iterable, clock=clock)


__all__ = ["Clock", "ProgressIterator", "Progressable", "progress"]
