import json
from pathlib import Path

from typer.testing import CliRunner

from brokersim_core import cli
from brokersim_core.cli import app


runner = CliRunner()


def test_cli_simulate_writes_series(tmp_path: Path):
    config_path = tmp_path / "input.json"
    config_path.write_text(json.dumps({"monthly_contribution": 10000, "exchange_rate": 17.5, "horizon_years": 2}))
    out_path = tmp_path / "series.json"

    result = runner.invoke(
        app,
        [
            "simulate",
            "--config",
            str(config_path),
            "--annual-return",
            "0",
            "--out",
            str(out_path),
        ],
    )
    assert result.exit_code == 0, result.stdout
    assert "Ranking" in result.stdout
    assert out_path.exists()

    payload = json.loads(out_path.read_text())
    assert payload["input"]["annual_return_pct"] == 0.0
    assert len(payload["snapshots"]) == 24
    assert abs(payload["summary"]["total_fees"]["GBM"] - 24 * 25.0) < 1e-6


def test_cli_simulate_csv(tmp_path: Path):
    out_path = tmp_path / "series.csv"
    result = runner.invoke(app, ["simulate", "--years", "3", "--every", "6", "--out", str(out_path)])
    assert result.exit_code == 0, result.stdout
    lines = out_path.read_text().strip().splitlines()
    assert lines[0] == "month,invested,GBM,Actinver,IBKR,GBMFees,ActinverFees,IBKRFees"
    assert len(lines) == 1 + 36


def test_cli_simulate_rejects_invalid_config(tmp_path: Path):
    config_path = tmp_path / "input.json"
    config_path.write_text(json.dumps({"annual_return_pct": -150}))
    result = runner.invoke(app, ["simulate", "--config", str(config_path)])
    assert result.exit_code == 2


def test_cli_compare(tmp_path: Path):
    changes_path = tmp_path / "changes.json"
    changes_path.write_text(json.dumps({"monthly_contribution": 20000}))
    out_path = tmp_path / "comparison.json"

    result = runner.invoke(
        app,
        [
            "compare",
            "--changes",
            str(changes_path),
            "--annual-return",
            "0",
            "--out",
            str(out_path),
        ],
    )
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out_path.read_text())
    assert abs(payload["value_delta"]["GBM"] - 12 * 9975.0) < 1e-6
    assert payload["baseline"]["months"] == 12
    assert payload["changed"]["total_invested"] == 240000.0


def test_cli_brokers_lists_schedules():
    result = runner.invoke(app, ["brokers"])
    assert result.exit_code == 0, result.stdout
    for name in ("GBM", "Actinver", "IBKR"):
        assert name in result.stdout


def test_cli_interactive_recomputes_and_stores_state(tmp_path: Path, monkeypatch):
    state_path = tmp_path / "state.json"
    monkeypatch.setattr(cli, "_state_path", lambda: state_path)

    answers = "\n".join(
        [
            "10000",
            "17.5",
            "7",
            "1",
            "y",
            "20000",
            "0",
            "5",
            "2000",
            "n",
        ]
    )
    result = runner.invoke(app, ["interactive"], input=answers + "\n")
    assert result.exit_code == 0, result.stdout
    assert result.stdout.count("Ranking") == 2

    state = json.loads(state_path.read_text())
    assert state["monthly_contribution"] == 20000.0
    assert state["exchange_rate"] == 0.01
    assert state["horizon_years"] == 1000


def test_cli_simulate_rejects_infinite_years(tmp_path: Path):
    config_path = tmp_path / "input.json"
    config_path.write_text('{"horizon_years": Infinity}')
    result = runner.invoke(app, ["simulate", "--config", str(config_path)])
    assert result.exit_code == 2


def test_cli_simulate_broker_filter():
    result = runner.invoke(app, ["simulate", "--broker", "gbm", "--every", "6"])
    assert result.exit_code == 0, result.stdout
    assert "GBM fees" in result.stdout
    assert "IBKR fees" not in result.stdout
    assert "Best: GBM" in result.stdout

    result = runner.invoke(app, ["simulate", "--broker", "Bitso"])
    assert result.exit_code == 2


def test_cli_compare_clamps_changes_like_baseline(tmp_path: Path):
    changes_path = tmp_path / "changes.json"
    out_path = tmp_path / "comparison.json"

    changes_path.write_text(json.dumps({"exchange_rate": 0}))
    result = runner.invoke(app, ["compare", "--changes", str(changes_path), "--out", str(out_path)])
    assert result.exit_code == 0, result.stdout

    changes_path.write_text(json.dumps({"exchange_rate": "18"}))
    result = runner.invoke(app, ["compare", "--changes", str(changes_path), "--out", str(out_path)])
    assert result.exit_code == 0, result.stdout
    payload = json.loads(out_path.read_text())
    assert payload["changed"]["total_invested"] == 120000.0

    changes_path.write_text(json.dumps({"exchange_rate": "fast"}))
    result = runner.invoke(app, ["compare", "--changes", str(changes_path)])
    assert result.exit_code == 2


def test_cli_interactive_reprompts_on_infinite_years(tmp_path: Path, monkeypatch):
    state_path = tmp_path / "state.json"
    monkeypatch.setattr(cli, "_state_path", lambda: state_path)

    answers = "\n".join(["10000", "17.5", "7", "inf", "10000", "17.5", "7", "2", "n"])
    result = runner.invoke(app, ["interactive"], input=answers + "\n")
    assert result.exit_code == 0, result.stdout
    assert "must be finite" in result.stdout
    assert json.loads(state_path.read_text())["horizon_years"] == 2
