from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from brokersim_core.domain.models import Broker, InputComparison, SimulationInput, SimulationResult
from brokersim_core.io import config as config_io
from brokersim_core.io import export
from brokersim_core.services import pipeline
from brokersim_core.services import simulator
from brokersim_core.services import summary as summary_service
from brokersim_core.services.fees import FEE_SCHEDULE_NOTE, FEE_SCHEDULES

app = typer.Typer(help="Compare investment growth and fees across GBM, Actinver and IBKR.")

console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _build_input(
    config: Optional[Path],
    monthly_contribution: Optional[float],
    exchange_rate: Optional[float],
    annual_return: Optional[float],
    years: Optional[int],
) -> SimulationInput:
    """
    Input from an optional JSON config, with explicit options taking precedence.
    """
    try:
        base = config_io.load_simulation_input(config) if config else config_io.clamp_input(**config_io.DEFAULT_INPUT)
        return config_io.clamp_input(
            monthly_contribution=base.monthly_contribution if monthly_contribution is None else monthly_contribution,
            exchange_rate=base.exchange_rate if exchange_rate is None else exchange_rate,
            annual_return_pct=base.annual_return_pct if annual_return is None else annual_return,
            horizon_years=base.horizon_years if years is None else years,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _parse_brokers(names: Optional[List[str]]) -> List[Broker]:
    if not names:
        return list(Broker)
    try:
        return [Broker.parse(name) for name in names]
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _snapshot_table(result: SimulationResult, every: int, brokers: List[Broker]) -> Table:
    table = Table(title="Projected value (MXN)")
    table.add_column("Month", justify="right")
    table.add_column("Invested", justify="right")
    for broker in brokers:
        table.add_column(broker.value, justify="right")
        table.add_column(f"{broker.value} fees", justify="right")

    values = {b: result.series(b) for b in brokers}
    fees = {b: result.fee_series(b) for b in brokers}
    last = result.final.month
    for i, snap in enumerate(result.snapshots):
        if snap.month % every != 0 and snap.month != last:
            continue
        cells = [str(snap.month), f"{snap.total_invested:,.2f}"]
        for broker in brokers:
            cells += [f"{values[broker][i]:,.2f}", f"{fees[broker][i]:,.2f}"]
        table.add_row(*cells)
    return table


def _print_summary(result: SimulationResult) -> None:
    summary = summary_service.summarize(result)
    years = result.input.horizon_years
    console.print(f"\n[bold cyan]Total fees after {years} year(s)[/bold cyan]")
    for broker in Broker:
        console.print(
            f"- {broker.value}: fees [bold]{summary.total_fees[broker]:,.2f}[/bold], "
            f"final value {summary.final_value[broker]:,.2f}, "
            f"vs invested {-summary.fee_drag[broker]:+,.2f}"
        )
    console.print(f"Invested: {summary.total_invested:,.2f} over {summary.months} months")
    console.print("Ranking: " + " > ".join(b.value for b in summary.ranking))
    console.print(f"Best: [bold green]{summary.best.value}[/bold green]")


def _comparison_to_json(comparison: InputComparison) -> dict:
    return {
        "baseline": export.summary_to_json(summary_service.summarize(comparison.baseline)),
        "changed": export.summary_to_json(summary_service.summarize(comparison.changed)),
        "value_delta": {b.value: v for b, v in comparison.value_delta.items()},
        "fee_delta": {b.value: v for b, v in comparison.fee_delta.items()},
    }


@app.command()
def simulate(
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="JSON file with the simulation inputs"),
    monthly_contribution: Optional[float] = typer.Option(None, help="Monthly contribution (MXN)"),
    exchange_rate: Optional[float] = typer.Option(None, help="Exchange rate (MXN per USD)"),
    annual_return: Optional[float] = typer.Option(None, help="Annual return in percent"),
    years: Optional[int] = typer.Option(None, help="Horizon in years (1-1000)"),
    every: int = typer.Option(12, min=1, help="Show one table row every N months"),
    broker: Optional[List[str]] = typer.Option(None, help="Only show this broker in the table (repeatable)"),
    out: Optional[Path] = typer.Option(None, help="Output path for the monthly series (.csv or .json)"),
):
    """Project value and fees per broker month by month."""
    inp = _build_input(config, monthly_contribution, exchange_rate, annual_return, years)
    shown = _parse_brokers(broker)
    result = simulator.simulate(inp)
    console.print(_snapshot_table(result, every, shown))
    _print_summary(result)
    if out:
        export.save_result(result, out)
        typer.echo(f"Simulation written to {out}")


@app.command()
def compare(
    changes: Path = typer.Option(..., exists=True, dir_okay=False, help="JSON object with the input fields to change"),
    config: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="JSON file with the baseline inputs"),
    monthly_contribution: Optional[float] = typer.Option(None, help="Baseline monthly contribution (MXN)"),
    exchange_rate: Optional[float] = typer.Option(None, help="Baseline exchange rate (MXN per USD)"),
    annual_return: Optional[float] = typer.Option(None, help="Baseline annual return in percent"),
    years: Optional[int] = typer.Option(None, help="Baseline horizon in years (1-1000)"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Apply input changes to a baseline and compare the results."""
    base = _build_input(config, monthly_contribution, exchange_rate, annual_return, years)
    try:
        changed = config_io.clamp_changes(base, config_io.load_changes(changes))
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    comparison = pipeline.compare_inputs(base, changed)
    table = Table(title="Change at horizon (MXN)")
    table.add_column("Broker")
    table.add_column("Final value", justify="right")
    table.add_column("Value delta", justify="right")
    table.add_column("Fee delta", justify="right")
    for broker in Broker:
        table.add_row(
            broker.value,
            f"{comparison.changed.final.value(broker):,.2f}",
            f"{comparison.value_delta[broker]:+,.2f}",
            f"{comparison.fee_delta[broker]:+,.2f}",
        )
    console.print(table)

    if out:
        _save_json(out, _comparison_to_json(comparison))
        typer.echo(f"Comparison written to {out}")


@app.command()
def brokers():
    """Show the fee schedule of each broker."""
    for broker in Broker:
        console.print(f"\n[bold]{broker.value}[/bold]")
        for line in FEE_SCHEDULES[broker]:
            console.print(f"  {line}")
    console.print(f"\n[dim]{FEE_SCHEDULE_NOTE}[/dim]")


# -------------------------------
# Interactive helper (no JSON)
# -------------------------------


def _state_path() -> Path:
    return Path.home() / ".brokersim_interactive.json"


def _load_state() -> dict:
    p = _state_path()
    if p.exists():
        try:
            return json.loads(p.read_text())
        except (OSError, ValueError):
            return {}
    return {}


def _save_state(payload: dict) -> None:
    try:
        _state_path().write_text(json.dumps(payload, indent=2))
    except OSError:
        logging.getLogger(__name__).warning("Could not store interactive state at %s", _state_path())


@app.command()
def interactive():
    """
    Interactive mode: answer a few questions, every change recomputes the projection.
    """
    console.print("[bold cyan]Broker Comparison Simulator[/bold cyan]\n")
    state = {**config_io.DEFAULT_INPUT, **_load_state()}

    while True:
        monthly_contribution = typer.prompt("Monthly contribution (MXN)", default=state["monthly_contribution"], type=float)
        exchange_rate = typer.prompt("Exchange rate (MXN/USD)", default=state["exchange_rate"], type=float)
        annual_return = typer.prompt("Annual return (%)", default=state["annual_return_pct"], type=float)
        years = typer.prompt("Years", default=str(state["horizon_years"]))

        try:
            inp = config_io.clamp_input(monthly_contribution, exchange_rate, annual_return, years)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            continue

        result = simulator.simulate(inp)
        console.print(_snapshot_table(result, every=12, brokers=list(Broker)))
        _print_summary(result)

        state = {
            "monthly_contribution": inp.monthly_contribution,
            "exchange_rate": inp.exchange_rate,
            "annual_return_pct": inp.annual_return_pct,
            "horizon_years": inp.horizon_years,
        }
        _save_state(state)

        if not typer.confirm("\nAdjust the inputs?", default=False):
            break

    console.print("\n[bold cyan]Done.[/bold cyan]\n")


if __name__ == "__main__":
    app()
