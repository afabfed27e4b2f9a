import ast
import logging
from datetime import timedelta

import pytest

from progressiter.record import Snapshot
from progressiter.utils import ProgressLogger


def test_logger_writes_on_reporting_points(capsys):
    logger = ProgressLogger(log_every=2)
    for count in range(1, 5):
        record = Snapshot(count=count, elapsed=timedelta(seconds=count), size_hint=(4 - count, 4 - count))
        logger.log(record, "step", {"loss": 0.5})

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    first, second = (ast.literal_eval(line) for line in lines)
    assert first["count"] == 1
    assert second["count"] == 3
    assert second["message"] == "step"
    assert second["loss"] == 0.5
    assert second["percent"] == 75.0
    assert second["rate"] == 1.0


def test_payload_omits_unknown_metrics():
    record = Snapshot(count=1, elapsed=timedelta(seconds=0.2))
    payload = ProgressLogger().payload(record, "scan")
    assert "percent" not in payload
    assert "rate" not in payload
    assert payload["elapsed"] == pytest.approx(0.2)


def test_logger_routes_through_standard_logging(caplog):
    std_logger = logging.getLogger("progressiter.test")
    logger = ProgressLogger(log_every=1, logger=std_logger)
    record = Snapshot(count=1, elapsed=timedelta(0), size_hint=(1, 1))

    with caplog.at_level(logging.INFO, logger="progressiter.test"):
        logger.log(record, "load")

    assert [r.getMessage() for r in caplog.records] == ["load"]
    assert caplog.records[0].context["percent"] == 50.0


def test_track_yields_bare_elements(capsys):
    logger = ProgressLogger(log_every=3)
    assert list(logger.track("abcde", "letters")) == list("abcde")
    lines = capsys.readouterr().out.splitlines()
    assert [ast.literal_eval(line)["count"] for line in lines] == [1, 4]


@pytest.mark.parametrize("log_every", [0, -3])
def test_non_positive_period_is_rejected(log_every):
    with pytest.raises(ValueError):
        ProgressLogger(log_every=log_every)
