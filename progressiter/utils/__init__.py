"""Utility helpers for progressiter."""

from .logging import ProgressLogger

__all__ = [
    "ProgressLogger",
]
