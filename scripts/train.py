"""Fit a linear model to synthetic data while logging progress."""
from __future__ import annotations

import argparse

import torch
from torch.utils.data import DataLoader, TensorDataset

from progressiter.training import evaluate, train_epoch
from progressiter.utils import ProgressLogger


def build_loader(samples: int, features: int, batch_size: int, seed: int) -> DataLoader:
    generator = torch.Generator().manual_seed(seed)
    inputs = torch.randn(samples, features, generator=generator)
    weights = torch.randn(features, 1, generator=generator)
    targets = inputs @ weights + 0.1 * torch.randn(samples, 1, generator=generator)
    return DataLoader(TensorDataset(inputs, targets), batch_size=batch_size, shuffle=True, generator=generator)


def train(args: argparse.Namespace) -> None:
    device = torch.device("cuda" if torch.cuda.is_available() else "cpu")
    loader = build_loader(args.samples, args.features, args.batch_size, args.seed)
    model = torch.nn.Linear(args.features, 1).to(device)
    optimizer = torch.optim.SGD(model.parameters(), lr=args.lr)
    loss_fn = torch.nn.MSELoss()
    logger = ProgressLogger(log_every=args.log_every)

    for epoch in range(1, args.epochs + 1):
        metrics = train_epoch(model, optimizer, loader, loss_fn, device, logger)
        print(f"epoch={epoch} loss={metrics['loss']:.4f} batches={int(metrics['batches'])} seconds={metrics['seconds']:.2f}")

    metrics = evaluate(model, loader, loss_fn, device, logger)
    print(f"eval loss={metrics['loss']:.4f}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Train a linear regressor on synthetic data with progress logging")
    parser.add_argument("--samples", type=int, default=512)
    parser.add_argument("--features", type=int, default=8)
    parser.add_argument("--batch-size", type=int, default=16)
    parser.add_argument("--epochs", type=int, default=3)
    parser.add_argument("--lr", type=float, default=1e-2)
    parser.add_argument("--log-every", type=int, default=8)
    parser.add_argument("--seed", type=int, default=0)
    return parser.parse_args()


if __name__ == "__main__":
    train(parse_args())
