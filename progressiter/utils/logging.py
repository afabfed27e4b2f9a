"""Lightweight progress logger."""

from __future__ import annotations

import dataclasses
import logging
import math
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Iterator, TypeVar

from progressiter.record import Snapshot
from progressiter.tracker import progress

T = TypeVar("T")


@dataclasses.dataclass
class ProgressLogger:
    log_every: int = 10
    logger: logging.Logger | None = None

    def __post_init__(self) -> None:
        if self.log_every <= 0:
            raise ValueError(f"log_every must be positive, got {self.log_every}")

    def payload(self, record: Snapshot, message: str, extra: Dict[str, Any] | None = None) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(),
            "count": record.elements_done(),
            "elapsed": record.time_elapsed().total_seconds(),
            "message": message,
        }
        rate = record.rate()
        if math.isfinite(rate):
            payload["rate"] = rate
        percent = record.percent()
        if percent is not None:
            payload["percent"] = round(percent, 2)
        if extra:
            payload.update(extra)
        return payload

    def log(self, record: Snapshot, message: str, extra: Dict[str, Any] | None = None) -> None:
        if not record.should_print_every(self.log_every):
            return
        payload = self.payload(record, message, extra)
        if self.logger is not None:
            self.logger.info(message, extra={"context": payload})
            return
        sys.stdout.write(str(payload) + "\n")
        sys.stdout.flush()

    def track(self, iterable: Iterable[T], message: str = "progress") -> Iterator[T]:
        """Yield the elements of ``iterable``, logging progress along the way."""
        for record, item in progress(iterable):
            self.log(record, message)
            yield item


__all__ = ["ProgressLogger"]
