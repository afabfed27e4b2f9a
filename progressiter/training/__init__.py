"""Training-loop helpers; requires PyTorch."""

from .loop import evaluate, train_epoch

__all__ = ["evaluate", "train_epoch"]
