from __future__ import annotations

import dataclasses
import datetime as dt
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from flowbudget_core.domain.models import MonthReport, ObservedEntry, RecurringRule, SimulationConfig
from flowbudget_core.io import config as config_io
from flowbudget_core.io import observed as observed_io
from flowbudget_core.io import rules as rules_io
from flowbudget_core.io.store import JsonRuleStore
from flowbudget_core.services import pipeline, propagation

app = typer.Typer(help="FlowBudget CLI: project a month of balances from recurring rules.")
console = Console()

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


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


def _money(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:,.2f}"


def _resolve_config(
    config: Optional[Path],
    initial_balance: Optional[float],
    year: Optional[int],
    month: Optional[int],
) -> SimulationConfig:
    today = dt.date.today()
    base = config_io.load_simulation_config(config) if config else SimulationConfig(year=today.year, month=today.month)
    resolved = dataclasses.replace(
        base,
        initial_balance=base.initial_balance if initial_balance is None else initial_balance,
        year=base.year if year is None else year,
        month=base.month if month is None else month,
    )
    if not 1 <= resolved.month <= 12:
        raise typer.BadParameter(f"month must be within 1..12, got {resolved.month}")
    if not dt.MINYEAR <= resolved.year <= dt.MAXYEAR:
        raise typer.BadParameter(f"year must be within {dt.MINYEAR}..{dt.MAXYEAR}, got {resolved.year}")
    return resolved


def _load_inputs(
    rules: Path,
    observed: Optional[Path],
    config: Optional[Path],
    initial_balance: Optional[float],
    year: Optional[int],
    month: Optional[int],
) -> Tuple[SimulationConfig, List[RecurringRule], List[ObservedEntry]]:
    try:
        sim_config = _resolve_config(config, initial_balance, year, month)
        rule_list = rules_io.load_rules(rules)
        entries = observed_io.load_observed(observed) if observed else []
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    return sim_config, rule_list, entries


def _run(rules, observed, config, initial_balance, year, month) -> MonthReport:
    sim_config, rule_list, entries = _load_inputs(rules, observed, config, initial_balance, year, month)
    return pipeline.run_month(sim_config, rule_list, entries)


def _title(report: MonthReport) -> str:
    return f"{MONTHS[report.config.month - 1]} {report.config.year}"


RULES_OPTION = typer.Option(..., help="JSON list of recurring rules")
OBSERVED_OPTION = typer.Option(None, help="CSV of observed balances with day,value columns")
CONFIG_OPTION = typer.Option(None, help="JSON config with initial_balance, year, month")
BALANCE_OPTION = typer.Option(None, help="Starting balance (overrides config)")
YEAR_OPTION = typer.Option(None, help="Year to simulate (defaults to current)")
MONTH_OPTION = typer.Option(None, help="Month 1-12 to simulate (defaults to current)")


@app.command()
def simulate(
    rules: Path = RULES_OPTION,
    observed: Optional[Path] = OBSERVED_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    initial_balance: Optional[float] = BALANCE_OPTION,
    year: Optional[int] = YEAR_OPTION,
    month: Optional[int] = MONTH_OPTION,
    out: Optional[Path] = typer.Option(None, help="Output path for the month report JSON"),
):
    """Simulate a month day by day and emit the full report as JSON."""
    report = _run(rules, observed, config, initial_balance, year, month)
    payload = report.to_dict()
    if out:
        _save_json(out, payload)
        typer.echo(f"Month report written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


@app.command()
def weekly(
    rules: Path = RULES_OPTION,
    observed: Optional[Path] = OBSERVED_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    initial_balance: Optional[float] = BALANCE_OPTION,
    year: Optional[int] = YEAR_OPTION,
    month: Optional[int] = MONTH_OPTION,
):
    """Show the month as weekly end-of-week snapshots."""
    report = _run(rules, observed, config, initial_balance, year, month)
    table = Table(title=f"{_title(report)} by week")
    table.add_column("Week")
    table.add_column("Balance", justify="right")
    table.add_column("Reality", justify="right")
    table.add_column("Income", justify="right", style="green")
    table.add_column("Expenses", justify="right", style="red")
    for w in report.weekly:
        table.add_row(w.week_label, _money(w.balance), _money(w.actual_balance), _money(w.income), _money(w.expenses))
    console.print(table)


@app.command()
def summary(
    rules: Path = RULES_OPTION,
    observed: Optional[Path] = OBSERVED_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
    initial_balance: Optional[float] = BALANCE_OPTION,
    year: Optional[int] = YEAR_OPTION,
    month: Optional[int] = MONTH_OPTION,
):
    """Totals for the month and where the outflows go."""
    report = _run(rules, observed, config, initial_balance, year, month)
    s = report.summary
    console.print(f"[bold cyan]{_title(report)}[/bold cyan]")
    console.print(f"End balance: [bold]{_money(s.end_balance)}[/bold]")
    console.print(f"Income: [green]{_money(s.total_income)}[/green] | Expenses: [red]{_money(s.total_expenses)}[/red]")
    console.print(f"Saving: {_money(s.total_saving)} | Net: [bold]{_money(s.net)}[/bold]")
    if s.deficit:
        console.print("[red]Deficit projected[/red]")
    else:
        console.print(f"Daily flex: [bold]{_money(s.daily_flex)}[/bold] / day")

    if not s.categories:
        console.print("[yellow]No outflow rules this month.[/yellow]")
        return
    table = Table(title="Allocation")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    table.add_column("Share", justify="right")
    for c in s.categories:
        share = c.amount / s.total_allocation * 100 if s.total_allocation else 0.0
        table.add_row(c.name, _money(c.amount), f"{share:.1f}%")
    console.print(table)


@app.command()
def propagate(
    store: Path = typer.Option(..., help="JSON rule store keyed by YYYY_MM"),
    year: int = typer.Option(..., help="Year of the edit"),
    month: int = typer.Option(..., help="Month 1-12 of the edit"),
    rule: Optional[Path] = typer.Option(None, help="JSON file with one rule to upsert"),
    delete: Optional[str] = typer.Option(None, help="Rule id to delete"),
):
    """Replicate a rule edit or deletion from a month through December of next year."""
    if (rule is None) == (delete is None):
        raise typer.BadParameter("Provide exactly one of --rule or --delete")
    try:
        rule_store = JsonRuleStore(store)
        if rule is not None:
            with rule.open("r", encoding="utf-8") as f:
                new_rule = rules_io.rule_from_dict(json.load(f))
            keys = propagation.propagate_upsert(rule_store, new_rule, year, month)
            typer.echo(f"Rule {new_rule.id} written to {len(keys)} months")
        else:
            keys = propagation.propagate_delete(rule_store, delete, year, month)
            typer.echo(f"Rule {delete} removed from {len(keys)} months")
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
