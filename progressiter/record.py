"""Progress snapshot taken at each pull from a tracked iterator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .hints import UNKNOWN, SizeHint

_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class Snapshot:
    """Where an iteration stood when one element was produced.

    ``count`` includes the element the snapshot was produced with, so the
    first snapshot of any iteration has ``count == 1``. ``size_hint`` is the
    remaining-size estimate the source reported after that element was pulled.
    """

    count: int
    elapsed: timedelta
    size_hint: SizeHint = UNKNOWN

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"count must be >= 1, got {self.count}")
        if self.size_hint[0] < 0:
            raise ValueError(f"size_hint lower bound must be >= 0, got {self.size_hint[0]}")

    def elements_done(self) -> int:
        return self.count

    def time_elapsed(self) -> timedelta:
        return self.elapsed

    def _whole_seconds(self) -> int:
        return self.elapsed // _SECOND

    def rate(self) -> float:
        """Elements per whole second elapsed; ``inf`` during the first second."""
        seconds = self._whole_seconds()
        if seconds == 0:
            return float("inf")
        return self.count / seconds

    def size_is_known(self) -> bool:
        lower, upper = self.size_hint
        return upper is not None and upper == lower

    def remaining(self) -> Optional[int]:
        if not self.size_is_known():
            return None
        return self.size_hint[0]

    def fraction(self) -> Optional[float]:
        """Fraction of the iteration done, or ``None`` if the total is unknown."""
        remaining = self.remaining()
        if remaining is None:
            return None
        return self.count / (self.count + remaining)

    def percent(self) -> Optional[float]:
        fraction = self.fraction()
        if fraction is None:
            return None
        return fraction * 100.0

    def eta(self) -> Optional[timedelta]:
        """Time left at the average pace so far."""
        remaining = self.remaining()
        if remaining is None:
            return None
        return self.elapsed / self.count * remaining

    def message(self) -> str:
        return f"Have seen {self.count} items and been iterating for {self._whole_seconds()} seconds"

    def print_message(self) -> None:
        print(self.message())

    def should_print_every(self, n: int) -> bool:
        """Whether this is a reporting point when reporting every ``n`` items.

        Reporting points are anchored at the first element: counts 1, n + 1,
        2n + 1, ...
        """
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return (self.count - 1) % n == 0

    def print_every(self, n: int, msg: str) -> None:
        if self.should_print_every(n):
            print(msg, end="")


__all__ = ["Snapshot"]
