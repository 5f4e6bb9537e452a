import json
import logging

import pytest

from parkinson_model import cli


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


RUN_ARGS = ["run", "--ticks", "4", "--seed", "3", "--neurons", "12", "--astrocytes", "2", "--microglia", "2", "--dimension", "15"]


def test_cli_prints_json_report(capsys, monkeypatch) -> None:
    monkeypatch.delenv("PRK_STATISTICS_INTERVAL", raising=False)

    assert cli.main([*RUN_ARGS, "--json"]) == 0

    report = json.loads(capsys.readouterr().out)
    assert report["ticks"] <= 4
    assert report["final"]["healthy_neurons"] + report["final"]["degenerating_neurons"] + report["final"]["dead_neurons"] == 12
    assert report["stop_reason"] in {"max_ticks", "no_alive_neurons"}


def test_cli_prints_text_summary(capsys, tmp_path) -> None:
    log_file = tmp_path / "model.log"

    assert cli.main([*RUN_ARGS, "--log-level", "INFO", "--log-file", str(log_file)]) == 0

    out = capsys.readouterr().out
    assert "tick=" in out
    assert "Stopped after 4 ticks: max_ticks" in out
    assert "Simulation finished" in log_file.read_text()


def test_cli_rejects_unknown_log_level(capsys) -> None:
    assert cli.main([*RUN_ARGS, "--log-level", "CHATTY"]) == 2
    assert "Unknown log level" in capsys.readouterr().err


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        cli.main([])


def test_cli_reports_unwritable_log_file(capsys, tmp_path) -> None:
    log_file = tmp_path / "missing" / "model.log"

    assert cli.main([*RUN_ARGS, "--log-file", str(log_file)]) == 2
    assert "Cannot open log file" in capsys.readouterr().err
