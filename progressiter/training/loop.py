"""Epoch runners that report progress through a tracked DataLoader."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Optional

import torch

from progressiter.record import Snapshot
from progressiter.tracker import progress
from progressiter.utils import ProgressLogger

LossFn = Callable[[torch.Tensor, torch.Tensor], torch.Tensor]


def _summary(total_loss: float, last: Optional[Snapshot]) -> Dict[str, float]:
    if last is None:
        return {"loss": 0.0, "batches": 0.0, "seconds": 0.0}
    return {
        "loss": total_loss / last.elements_done(),
        "batches": float(last.elements_done()),
        "seconds": last.time_elapsed().total_seconds(),
    }


def train_epoch(
    model: torch.nn.Module,
    optimizer: torch.optim.Optimizer,
    loader: Iterable,
    loss_fn: LossFn,
    device: torch.device,
    logger: ProgressLogger,
    max_grad_norm: Optional[float] = 1.0,
) -> Dict[str, float]:
    model.train()
    total_loss = 0.0
    last: Optional[Snapshot] = None

    for record, (inputs, targets) in progress(loader):
        inputs = inputs.to(device)
        targets = targets.to(device)
        optimizer.zero_grad(set_to_none=True)
        loss = loss_fn(model(inputs), targets)
        loss.backward()
        if max_grad_norm is not None:
            torch.nn.utils.clip_grad_norm_(model.parameters(), max_norm=max_grad_norm)
        optimizer.step()

        total_loss += loss.item()
        last = record
        logger.log(record, "train", {"loss": loss.item()})

    return _summary(total_loss, last)


@torch.no_grad()
def evaluate(
    model: torch.nn.Module,
    loader: Iterable,
    loss_fn: LossFn,
    device: torch.device,
    logger: ProgressLogger,
) -> Dict[str, float]:
    model.eval()
    total_loss = 0.0
    last: Optional[Snapshot] = None

    for record, (inputs, targets) in progress(loader):
        loss = loss_fn(model(inputs.to(device)), targets.to(device))
        total_loss += loss.item()
        last = record
        logger.log(record, "eval", {"loss": loss.item()})

    return _summary(total_loss, last)


__all__ = ["evaluate", "train_epoch"]
