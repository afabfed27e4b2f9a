import ast

import pytest


torch = pytest.importorskip("torch")

from torch.utils.data import DataLoader, TensorDataset

from progressiter.training import evaluate, train_epoch
from progressiter.utils import ProgressLogger


def make_loader(samples=12, features=3, batch_size=4):
    generator = torch.Generator().manual_seed(0)
    inputs = torch.randn(samples, features, generator=generator)
    targets = inputs.sum(dim=1, keepdim=True)
    return DataLoader(TensorDataset(inputs, targets), batch_size=batch_size)


def test_single_epoch_training_reports_progress(capsys):
    torch.manual_seed(3)
    model = torch.nn.Linear(3, 1)
    optimizer = torch.optim.SGD(model.parameters(), lr=0.1)

    metrics = train_epoch(
        model=model,
        optimizer=optimizer,
        loader=make_loader(),
        loss_fn=torch.nn.MSELoss(),
        device=torch.device("cpu"),
        logger=ProgressLogger(log_every=1),
    )

    assert metrics["batches"] == 3.0
    for value in metrics.values():
        assert isinstance(value, float)
        assert value == pytest.approx(value)

    lines = [ast.literal_eval(line) for line in capsys.readouterr().out.splitlines()]
    assert [line["count"] for line in lines] == [1, 2, 3]
    assert [line["percent"] for line in lines] == pytest.approx([33.33, 66.67, 100.0])
    assert all(line["message"] == "train" for line in lines)


def test_training_reduces_loss():
    torch.manual_seed(0)
    model = torch.nn.Linear(3, 1)
    optimizer = torch.optim.SGD(model.parameters(), lr=0.1)
    loader = make_loader(samples=64, batch_size=8)
    loss_fn = torch.nn.MSELoss()
    logger = ProgressLogger(log_every=1000)
    device = torch.device("cpu")

    before = evaluate(model, loader, loss_fn, device, logger)["loss"]
    for _ in range(5):
        train_epoch(model, optimizer, loader, loss_fn, device, logger, max_grad_norm=None)
    after = evaluate(model, loader, loss_fn, device, logger)["loss"]
    assert after < before


def test_empty_loader_returns_zeros():
    loader = DataLoader(TensorDataset(torch.zeros(0, 2), torch.zeros(0, 1)), batch_size=2)
    metrics = evaluate(
        torch.nn.Linear(2, 1),
        loader,
        torch.nn.MSELoss(),
        torch.device("cpu"),
        ProgressLogger(),
    )
    assert metrics == {"loss": 0.0, "batches": 0.0, "seconds": 0.0}


def test_iterable_dataset_loader_trains_with_unknown_size(capsys):
    class Stream(torch.utils.data.IterableDataset):
        def __iter__(self):
            generator = torch.Generator().manual_seed(1)
            for _ in range(6):
                inputs = torch.randn(3, generator=generator)
                yield inputs, inputs.sum(dim=0, keepdim=True)

    loader = DataLoader(Stream(), batch_size=2)
    model = torch.nn.Linear(3, 1)
    metrics = train_epoch(
        model,
        torch.optim.SGD(model.parameters(), lr=0.1),
        loader,
        torch.nn.MSELoss(),
        torch.device("cpu"),
        ProgressLogger(log_every=1),
    )

    assert metrics["batches"] == 3.0
    lines = [ast.literal_eval(line) for line in capsys.readouterr().out.splitlines()]
    assert [line["count"] for line in lines] == [1, 2, 3]
    assert all("percent" not in line for line in lines)
