"""Remaining-size estimates for arbitrary iterables."""

from __future__ import annotations

import operator
from collections.abc import Iterator as IteratorABC
from collections.abc import Sized
from typing import Iterable, Iterator, Optional, Protocol, Tuple, TypeVar, runtime_checkable

T = TypeVar("T")

SizeHint = Tuple[int, Optional[int]]

UNKNOWN: SizeHint = (0, None)


@runtime_checkable
class SizeHinted(Protocol):
    def size_hint(self) -> SizeHint:
        ...


def _check_bound(value, name: str) -> int:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got bool")
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(f"{name} must be an int, got {type(value).__name__}") from None
    if value < 0:
        raise ValueError(f"{name} must be >= 0, got {value}")
    return value


def size_hint(iterator) -> SizeHint:
    """Return ``(lower, upper)`` for the elements ``iterator`` has left.

    ``upper`` is ``None`` when no upper bound is known. A ``__length_hint__``
    is taken at face value, which holds for the builtin containers.
    """
    if isinstance(iterator, SizeHinted):
        lower, upper = iterator.size_hint()
        lower = _check_bound(lower, "lower bound")
        if upper is not None:
            upper = _check_bound(upper, "upper bound")
            if upper < lower:
                raise ValueError(f"upper bound {upper} is below lower bound {lower}")
        return lower, upper

    hint = getattr(type(iterator), "__length_hint__", None)
    if hint is None:
        return UNKNOWN
    value = hint(iterator)
    if value is NotImplemented:
        return UNKNOWN
    value = _check_bound(value, "__length_hint__()")
    return value, value


def read_size_hint(iterator) -> SizeHint:
    """Like :func:`size_hint`, but a malformed hint reads as ``UNKNOWN``."""
    try:
        return size_hint(iterator)
    except (TypeError, ValueError):
        return UNKNOWN


class SizedIterator(IteratorABC):
    """Iterator over a sized iterable that counts down its own length."""

    def __init__(self, iterable, iterator: Optional[Iterator] = None) -> None:
        self._total = len(iterable)
        self._iterator = iter(iterable) if iterator is None else iterator
        self._yielded = 0

    def __iter__(self) -> "SizedIterator":
        return self

    def __next__(self):
        item = next(self._iterator)
        self._yielded += 1
        return item

    def size_hint(self) -> SizeHint:
        remaining = max(self._total - self._yielded, 0)
        return remaining, remaining

    def __length_hint__(self) -> int:
        return self.size_hint()[0]


def _has_hint(iterator) -> bool:
    return isinstance(iterator, SizeHinted) or hasattr(type(iterator), "__length_hint__")


def as_iterator(iterable: Iterable[T]) -> Iterator[T]:
    if isinstance(iterable, IteratorABC):
        return iterable
    iterator = iter(iterable)
    if isinstance(iterable, Sized) and not _has_hint(iterator):
        # e.g. torch DataLoader: len() is known but its iterator carries no hint
        try:
            return SizedIterator(iterable, iterator)
        except TypeError:
            # DataLoader over an IterableDataset raises from __len__
            return iterator
    return iterator


__all__ = [
    "SizeHint",
    "SizeHinted",
    "SizedIterator",
    "UNKNOWN",
    "as_iterator",
    "read_size_hint",
    "size_hint",
]
