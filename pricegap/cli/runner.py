# pricegap/cli/runner.py

"""Headless CLI runner, reusing the analysis orchestrator."""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from rich.console import Console
from rich.table import Table

from pricegap.config.settings import Settings
from pricegap.models.price_difference import (
    REPORT_COLUMNS,
    PriceDifferenceReport,
)
from pricegap.models.product import RECORD_COLUMNS
from pricegap.models.product_group import GROUP_COLUMNS
from pricegap.pipeline.errors import PriceGapError
from pricegap.services.analysis_orchestrator import (
    AnalysisOrchestrator,
    AnalysisResult,
)
from pricegap.storage.chart_exporter import export_price_gap_chart
from pricegap.storage.file_manager import FileManager

logger = logging.getLogger("pricegap.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

_MAX_ISSUES_SHOWN = 10


def _reports_to_dicts(
    reports: list[PriceDifferenceReport],
) -> list[dict[str, object]]:
    """Serialise reports to plain dicts for JSON output."""
    return [{**asdict(r), "display": r.display} for r in reports]


def _print_table(reports: list[PriceDifferenceReport]) -> None:
    """Render a Rich table of price differences to stdout."""
    table = Table(
        title="Price Differences",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Brand", style="magenta")
    table.add_column("Female Product", max_width=40)
    table.add_column("Male Product", max_width=40)
    table.add_column("Female Price", justify="right")
    table.add_column("Male Price", justify="right")
    table.add_column("Difference", justify="right")

    for r in reports:
        if r.diff_percent is None:
            diff = f"[yellow]{r.display}[/yellow]"
        elif r.diff_percent > 0:
            diff = f"[red]{r.display}[/red]"
        else:
            diff = f"[green]{r.display}[/green]"
        table.add_row(
            str(r.group_id),
            r.brand,
            r.women_product,
            r.men_product,
            f"{r.women_price:,.2f}",
            f"{r.men_price:,.2f}",
            diff,
        )

    Console().print(table)


def _print_summary(result: AnalysisResult) -> None:
    """Print the run summary and data-quality issues to stderr."""
    determinate = [
        r for r in result.reports if r.diff_percent is not None
    ]
    women_higher = sum(1 for r in determinate if (r.diff_percent or 0) > 0)
    _err.print(
        f"[green]✓ {len(result.records)} products, "
        f"{len(result.groups)} groups[/green]"
        + (
            f"  [dim]women's price higher in {women_higher}"
            f" of {len(determinate)}[/dim]"
            if determinate
            else ""
        )
    )
    if result.indeterminate_count:
        _err.print(
            f"[yellow]{result.indeterminate_count} difference(s) "
            "indeterminate (men's price is 0)[/yellow]"
        )
    if result.issues:
        _err.print(
            f"[yellow]{len(result.issues)} data-quality issue(s):[/yellow]"
        )
        for issue in result.issues[:_MAX_ISSUES_SHOWN]:
            _err.print(f"[dim]  {issue}[/dim]")
        if len(result.issues) > _MAX_ISSUES_SHOWN:
            _err.print(
                f"[dim]  … {len(result.issues) - _MAX_ISSUES_SHOWN}"
                " more in the log file[/dim]"
            )


def _export_all(file_manager: FileManager, result: AnalysisResult) -> None:
    """Write every stage table as CSV plus the JSON report."""
    try:
        stages = [
            ("preprocessed_data", [r.to_row() for r in result.records], RECORD_COLUMNS),
            ("analyzed_ingredients", [r.to_row() for r in result.classified], RECORD_COLUMNS),
            ("grouped_products", [g.to_row() for g in result.groups], GROUP_COLUMNS),
            ("price_differences", [r.to_row() for r in result.reports], REPORT_COLUMNS),
        ]
        for stage, rows, columns in stages:
            path = file_manager.export_csv(stage, rows, columns)
            _err.print(f"[dim]Exported {stage} → {path}[/dim]")
        path = file_manager.save_results("price_differences", result.reports)
        _err.print(f"[dim]Saved report → {path}[/dim]")
    except OSError as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")


def cli_analyze(
    csv_path: str,
    threshold: float | None,
    output_format: str,
    output_dir: str | None,
    export: bool = False,
    chart: bool = False,
    legacy_gender: bool = False,
) -> int:
    """Run the full analysis on *csv_path* and return an exit code.

    0 means the analysis ran, including when no pairs matched. 1 means
    the input could not be used.
    """
    charts_dir: Path | None = None
    if output_dir is not None:
        Settings.RESULTS_DIR = Path(output_dir)
        charts_dir = Settings.RESULTS_DIR / "charts"

    orchestrator = AnalysisOrchestrator(
        legacy_substring_match=legacy_gender
    )

    _err.print(f"[bold]Analysing:[/bold] {csv_path}")
    try:
        rows = FileManager.read_csv(csv_path)
        result = orchestrator.run(rows, threshold)
    except PriceGapError as exc:
        logger.error("Analysis failed: %s", exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return 1

    if not result.records:
        _err.print("[yellow]No product rows in file.[/yellow]")
        return 0

    _print_summary(result)

    if result.no_matches:
        _err.print(
            "[yellow]No matches found: no women's/men's pair "
            "cleared the similarity threshold.[/yellow]"
        )

    if export:
        _export_all(FileManager(), result)

    if chart and result.reports:
        path = export_price_gap_chart(
            result.reports, open_browser=False, charts_dir=charts_dir
        )
        if path is not None:
            _err.print(f"[dim]Chart → {path}[/dim]")

    if output_format == "table":
        if result.reports:
            _print_table(result.reports)
    else:
        json.dump(
            _reports_to_dicts(result.reports),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0
