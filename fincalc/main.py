"""Command‑line interface for the financial calculators.

This module uses the ``click`` library to implement a multi‑command interface.
Users can compute an EMI with its amortization schedule, project a periodic
investment (SIP) or list the supported loan types. Results can be printed to
the terminal, exported to JSON/CSV files or written as a plain-text report.
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import click
from pythonjsonlogger.json import JsonFormatter

from .data_models import (
    Frequency,
    INVESTMENT_DEFAULTS,
    LOAN_CATEGORIES,
    LOAN_DEFAULTS,
    LoanType,
    clamp_tenure,
)
from .engine import calculate_growth, calculate_loan
from .exceptions import ValidationError
from .formatter import (
    print_amortization,
    print_growth_breakdown,
    print_growth_summary,
    print_loan_summary,
    render_growth_report,
    render_growth_share_text,
    render_loan_report,
    render_loan_share_text,
)
from .insights import yearly_snapshot

logger = logging.getLogger(__name__)

MAX_PRINTED_ROWS = 120
LOG_HANDLER_NAME = "fincalc"


def setup_logging(level: str = "WARNING", json_format: bool = False) -> None:
    """Configure the root logger, optionally with JSON output."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    for existing in [h for h in root.handlers if h.get_name() == LOG_HANDLER_NAME]:
        root.removeHandler(existing)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOG_HANDLER_NAME)
    if json_format:
        formatter = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    root.addHandler(handler)


def _usage_error(exc: ValidationError) -> click.UsageError:
    details = "\n".join(f"  {field}: {message}" for field, message in exc.messages().items())
    return click.UsageError(f"Invalid input:\n{details}")


def export_to_json(path: Path, summary: Dict[str, Any], rows: Sequence[Any]) -> None:
    """Export summary and ledger rows to a JSON file."""
    data = {"summary": summary, "schedule": [asdict(row) for row in rows]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, rows: Sequence[Any]) -> None:
    """Export ledger rows to a CSV file, one column per row field."""
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = None
        for row in rows:
            record = asdict(row)
            if writer is None:
                writer = csv.DictWriter(f, fieldnames=list(record))
                writer.writeheader()
            writer.writerow(record)


def _export(output: str, summary: Dict[str, Any], rows: Sequence[Any]) -> None:
    path = Path(output)
    suffix = path.suffix.lower()
    if suffix == ".json":
        export_to_json(path, summary, rows)
    elif suffix == ".csv":
        export_to_csv(path, rows)
    else:
        raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
    logger.info("Exported %d rows to %s", len(rows), path)
    click.echo(f"Results exported to {path}")


def _write_report(report: str, text: str) -> None:
    path = Path(report)
    path.write_text(text + "\n", encoding="utf-8")
    click.echo(f"Report written to {path}")


@click.group()
@click.option(
    "--log-level",
    envvar="FINCALC_LOG_LEVEL",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity (env: FINCALC_LOG_LEVEL)",
)
@click.option("--log-json", is_flag=True, help="Emit log records as JSON")
def cli(log_level: str, log_json: bool) -> None:
    """Loan EMI and periodic investment (SIP) calculators."""
    setup_logging(log_level, log_json)


@cli.command("loan-types")
def loan_types() -> None:
    """List loan types with their tenure range and default rate."""
    for loan_type, category in LOAN_CATEGORIES.items():
        click.echo(
            f"{loan_type.value:10s} {category.name:18s} {category.min_tenure:>2d}-{category.max_tenure:<2d} years  "
            f"{category.default_rate:>5.1f}%  {category.description}"
        )


@cli.command()
@click.option("--amount", "-a", "amount", default=LOAN_DEFAULTS["loan_amount"], show_default=True, help="Loan amount (accepts 10l, 2.5m)")
@click.option("--rate", "-r", "rate", help="Annual interest rate in percent [default: loan type's rate]")
@click.option("--tenure", "-t", "tenure", help="Tenure in years [default: 10, clamped to the loan type]")
@click.option("--fee", "-f", "fee", default=LOAN_DEFAULTS["processing_fee_percent"], show_default=True, help="Processing fee in percent")
@click.option(
    "--type",
    "loan_type",
    type=click.Choice([t.value for t in LoanType]),
    default=LOAN_DEFAULTS["loan_type"],
    show_default=True,
    help="Loan type",
)
@click.option("--schedule/--no-schedule", "show_schedule", default=True, help="Print the amortization schedule")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--report", "report", type=str, help="Write the text report to this path")
@click.option("--share", "share", is_flag=True, help="Print the short share text instead of tables")
def emi(
    amount: str,
    rate: Optional[str],
    tenure: Optional[str],
    fee: str,
    loan_type: str,
    show_schedule: bool,
    output: Optional[str],
    report: Optional[str],
    share: bool,
) -> None:
    """Compute the monthly EMI and amortization schedule for a loan."""
    selected = LoanType(loan_type)
    if rate is None:
        rate = str(LOAN_CATEGORIES[selected].default_rate)
    if tenure is None:
        tenure = str(clamp_tenure(selected, int(LOAN_DEFAULTS["tenure_years"])))
    try:
        loan, result, schedule = calculate_loan(amount, rate, tenure, fee, selected)
    except ValidationError as exc:
        raise _usage_error(exc) from exc

    if output:
        summary = asdict(result)
        summary["loan"] = {**asdict(loan), "loan_type": loan.loan_type.value}
        _export(output, summary, schedule)
    if report:
        _write_report(report, render_loan_report(loan, result, schedule))
    if output or report:
        return
    if share:
        click.echo(render_loan_share_text(loan, result))
        return
    print_loan_summary(loan, result)
    if show_schedule:
        if len(schedule) > MAX_PRINTED_ROWS:
            click.echo(f"Schedule has {len(schedule)} rows; showing first {MAX_PRINTED_ROWS} rows.")
        print_amortization(schedule[:MAX_PRINTED_ROWS])


@cli.command()
@click.option("--amount", "-a", "amount", default=INVESTMENT_DEFAULTS["amount"], show_default=True, help="Contribution per period")
@click.option("--years", "-y", "years", default=INVESTMENT_DEFAULTS["years"], show_default=True, help="Investment period in years (1-40)")
@click.option("--return-rate", "-r", "return_rate", default=INVESTMENT_DEFAULTS["return_rate"], show_default=True, help="Expected annual return in percent")
@click.option("--inflation", "-i", "inflation", default=INVESTMENT_DEFAULTS["inflation_rate"], show_default=True, help="Annual inflation in percent")
@click.option(
    "--frequency",
    "frequency",
    type=click.Choice([f.value for f in Frequency]),
    default=INVESTMENT_DEFAULTS["frequency"],
    show_default=True,
    help="Contribution frequency",
)
@click.option("--real/--nominal", "show_real", default=True, help="Show inflation-adjusted figures")
@click.option("--by-year/--by-period", "by_year", default=True, help="Print one breakdown row per year or per period")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
@click.option("--report", "report", type=str, help="Write the text report to this path")
@click.option("--share", "share", is_flag=True, help="Print the short share text instead of tables")
def sip(
    amount: str,
    years: str,
    return_rate: str,
    inflation: str,
    frequency: str,
    show_real: bool,
    by_year: bool,
    output: Optional[str],
    report: Optional[str],
    share: bool,
) -> None:
    """Project the maturity value of a systematic investment plan."""
    try:
        investment, result, breakdown = calculate_growth(amount, years, return_rate, inflation, frequency)
    except ValidationError as exc:
        raise _usage_error(exc) from exc

    if output:
        summary = asdict(result)
        summary["investment"] = {**asdict(investment), "frequency": investment.frequency.value}
        _export(output, summary, breakdown)
    if report:
        _write_report(report, render_growth_report(investment, result, breakdown))
    if output or report:
        return
    if share:
        click.echo(render_growth_share_text(investment, result))
        return
    print_growth_summary(investment, result, show_real)
    rows = yearly_snapshot(breakdown) if by_year else breakdown
    if len(rows) > MAX_PRINTED_ROWS:
        click.echo(f"Breakdown has {len(rows)} rows; showing first {MAX_PRINTED_ROWS} rows.")
    print_growth_breakdown(rows[:MAX_PRINTED_ROWS], show_real)


if __name__ == "__main__":
    cli()
