"""Typer CLI interface for the tax engine.

Each command reads one JSON request file, runs an engine, and prints a rich
table (default), the result as JSON (``--json``), and optionally writes a
text report (``--report PATH``).
"""

import logging
from pathlib import Path
from typing import NoReturn, TypeVar

import typer
from pydantic import BaseModel, TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from taxengine.engines.amt import AMTCalculator
from taxengine.engines.capital_gains import LotSelector
from taxengine.engines.harvesting import TaxLossHarvester
from taxengine.engines.quarterly import QuarterlyEstimateEngine
from taxengine.engines.wash_sale import WashSaleDetector
from taxengine.exceptions import DataValidationError, TaxComputationError
from taxengine.models.amt import AmtInput
from taxengine.models.harvesting import HarvestCandidate
from taxengine.models.lots import LotSelectionResult
from taxengine.models.requests import (
    HarvestRequest,
    LotSelectionRequest,
    QuarterlyRequest,
    WashSaleRequest,
)
from taxengine.reports import (
    AMTWorksheetGenerator,
    HarvestReportGenerator,
    LotComparisonReportGenerator,
    QuarterlyScheduleGenerator,
    WashSaleReportGenerator,
)
from taxengine.reports.environment import format_money

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

app = typer.Typer(
    name="taxengine",
    help="Deterministic federal tax computations: lots, wash sales, AMT, estimates.",
    no_args_is_help=True,
)

INPUT_ARG = typer.Argument(..., help="JSON request file")
JSON_OPT = typer.Option(False, "--json", help="Print the result as JSON")
REPORT_OPT = typer.Option(None, "--report", help="Write a text report to this path")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Deterministic federal tax computations: lots, wash sales, AMT, estimates."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _load_request(path: Path, model: type[ModelT]) -> ModelT:
    """Read and validate a JSON request file."""
    try:
        raw = path.read_text()
    except OSError as exc:
        raise DataValidationError(str(path), f"cannot read file ({exc.strerror})") from exc
    logger.debug("Loading %s from %s", model.__name__, path)
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        error = exc.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        raise DataValidationError(field, error["msg"]) from exc


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


def _write_report(path: Path | None, text: str) -> None:
    if path is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    typer.echo(f"Report written to {path}", err=True)


@app.command()
def lots(
    input_file: Path = INPUT_ARG,
    as_json: bool = JSON_OPT,
    report: Path | None = REPORT_OPT,
) -> None:
    """Compare lot selection strategies for a planned sale."""
    try:
        req = _load_request(input_file, LotSelectionRequest)
        results = LotSelector().compare_lot_strategies(
            req.lots, req.quantity, req.price, req.sale_date,
            req.marginal_rate, req.long_term_rate, req.methods,
        )
    except TaxComputationError as exc:
        _fail(exc)

    if as_json:
        adapter = TypeAdapter(list[LotSelectionResult])
        typer.echo(adapter.dump_json(results, indent=2).decode())
    else:
        tbl = Table(title="Lot Selection Comparison", show_header=True)
        tbl.add_column("Method", style="cyan")
        tbl.add_column("Shares", justify="right")
        tbl.add_column("Proceeds", justify="right")
        tbl.add_column("Basis", justify="right")
        tbl.add_column("ST", justify="right")
        tbl.add_column("LT", justify="right")
        tbl.add_column("Tax", style="green", justify="right")
        for r in results:
            tbl.add_row(
                r.method.value,
                str(r.quantity_sold),
                format_money(r.total_proceeds),
                format_money(r.total_basis),
                format_money(r.short_term_gain_loss),
                format_money(r.long_term_gain_loss),
                format_money(r.estimated_tax_impact),
            )
        Console().print(tbl)
    _write_report(report, LotComparisonReportGenerator().render(results))


@app.command(name="wash-sales")
def wash_sales(
    input_file: Path = INPUT_ARG,
    as_json: bool = JSON_OPT,
    report: Path | None = REPORT_OPT,
) -> None:
    """Check sales against purchases for wash sales."""
    try:
        req = _load_request(input_file, WashSaleRequest)
        result = WashSaleDetector().check_wash_sales(req.sales, req.purchases)
    except TaxComputationError as exc:
        _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        console = Console()
        if result.compliant:
            console.print("[green]No wash sales detected.[/green]")
        else:
            tbl = Table(title="Wash Sales", show_header=True)
            tbl.add_column("Symbol", style="cyan")
            tbl.add_column("Sold lot")
            tbl.add_column("Replacement")
            tbl.add_column("Disallowed", style="red", justify="right")
            for v in result.violations:
                tbl.add_row(
                    v.symbol,
                    f"{v.sold_lot_id} {v.sale_date}",
                    f"{v.replacement_lot_id} {v.replacement_date}",
                    format_money(v.disallowed_loss),
                )
            console.print(tbl)
            console.print(
                f"Total disallowed loss: {format_money(result.total_disallowed_loss)}"
            )
    _write_report(report, WashSaleReportGenerator().render(result))


@app.command()
def amt(
    input_file: Path = INPUT_ARG,
    as_json: bool = JSON_OPT,
    report: Path | None = REPORT_OPT,
) -> None:
    """Compute alternative minimum tax (Form 6251)."""
    try:
        amt_input = _load_request(input_file, AmtInput)
        result = AMTCalculator().compute_amt(amt_input)
    except TaxComputationError as exc:
        _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        tbl = Table(title=f"AMT {result.tax_year}", show_header=True)
        tbl.add_column("Line", style="cyan")
        tbl.add_column("Amount", style="green", justify="right")
        tbl.add_row("AMTI", format_money(result.amti))
        tbl.add_row("Exemption", format_money(result.exemption_amount))
        tbl.add_row("Reduced exemption", format_money(result.reduced_exemption))
        tbl.add_row("AMT base", format_money(result.amt_base))
        tbl.add_row("Tentative minimum tax", format_money(result.tentative_minimum_tax))
        tbl.add_row("Regular tax", format_money(result.regular_tax))
        tbl.add_row("AMT", format_money(result.alternative_minimum_tax))
        Console().print(tbl)
    _write_report(report, AMTWorksheetGenerator().render(amt_input, result))


@app.command()
def quarterly(
    input_file: Path = INPUT_ARG,
    as_json: bool = JSON_OPT,
    report: Path | None = REPORT_OPT,
) -> None:
    """Project quarterly estimated tax payments."""
    try:
        req = _load_request(input_file, QuarterlyRequest)
        result = QuarterlyEstimateEngine().calculate_quarterly_estimates(
            req.tax_year, req.filing_status, req.projected_income,
            req.prior_year_tax, req.payments_made, req.as_of,
        )
    except TaxComputationError as exc:
        _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        tbl = Table(title=f"Estimated Payments {result.tax_year}", show_header=True)
        tbl.add_column("Qtr", style="cyan")
        tbl.add_column("Due")
        tbl.add_column("Amount due", justify="right")
        tbl.add_column("Paid", justify="right")
        tbl.add_column("Status")
        for q in result.quarters:
            tbl.add_row(
                f"Q{q.quarter}",
                q.due_date.isoformat(),
                format_money(q.amount_due),
                format_money(q.amount_paid),
                q.status.value,
            )
        console = Console()
        console.print(tbl)
        console.print(
            f"Risk: {result.underpayment_risk.value}, next due {result.next_due_date}, "
            f"suggested {format_money(result.suggested_next_payment)}"
        )
    _write_report(report, QuarterlyScheduleGenerator().render(result))


@app.command()
def harvest(
    input_file: Path = INPUT_ARG,
    as_json: bool = JSON_OPT,
    report: Path | None = REPORT_OPT,
) -> None:
    """Find tax-loss harvesting candidates."""
    try:
        req = _load_request(input_file, HarvestRequest)
        candidates = TaxLossHarvester().find_candidates(
            req.lots, req.prices, req.as_of,
            min_loss=req.min_loss,
            marginal_rate=req.marginal_rate,
            long_term_rate=req.long_term_rate,
            recent_purchases=req.recent_purchases,
        )
    except TaxComputationError as exc:
        _fail(exc)

    if as_json:
        adapter = TypeAdapter(list[HarvestCandidate])
        typer.echo(adapter.dump_json(candidates, indent=2).decode())
    else:
        tbl = Table(title="Harvesting Candidates", show_header=True)
        tbl.add_column("Lot", style="cyan")
        tbl.add_column("Loss", style="red", justify="right")
        tbl.add_column("Term")
        tbl.add_column("Savings", style="green", justify="right")
        tbl.add_column("Wash risk")
        for c in candidates:
            tbl.add_row(
                f"{c.symbol} {c.lot_id}",
                format_money(c.unrealized_loss),
                c.holding_period.value,
                format_money(c.estimated_tax_savings),
                "yes" if c.wash_sale_risk else "no",
            )
        Console().print(tbl)
    _write_report(report, HarvestReportGenerator().render(candidates))


if __name__ == "__main__":
    app()
