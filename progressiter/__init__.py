"""Progress snapshots for any iterable."""
from . import hints, record, tracker, utils
from .hints import SizeHint, size_hint
from .record import Snapshot
from .tracker import ProgressIterator, Progressable, progress
from .utils import ProgressLogger

__all__ = [
    "hints",
    "record",
    "tracker",
    "utils",
    "ProgressIterator",
    "ProgressLogger",
    "Progressable",
    "SizeHint",
    "Snapshot",
    "progress",
    "size_hint",
]
