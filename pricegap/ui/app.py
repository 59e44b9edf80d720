# pricegap/ui/app.py

"""Terminal wizard for the pricegap analysis pipeline."""

import asyncio
import logging
from collections.abc import Sequence
from typing import cast

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    ProgressBar,
    Static,
)

from pricegap.models.price_difference import (
    REPORT_COLUMNS,
    PriceDifferenceReport,
)
from pricegap.models.product import RECORD_COLUMNS, ProductRecord
from pricegap.models.product_group import GROUP_COLUMNS, ProductGroup
from pricegap.pipeline.errors import DataQualityIssue, PriceGapError
from pricegap.services.analysis_orchestrator import AnalysisOrchestrator
from pricegap.storage.chart_exporter import export_price_gap_chart
from pricegap.storage.file_manager import FileManager

logger = logging.getLogger("pricegap.ui")

_STAGE_FILENAMES: dict[str, str] = {
    "preprocess": "preprocessed_data",
    "classify": "analyzed_ingredients",
    "group": "grouped_products",
    "compare": "price_differences",
}


class PriceGapApp(App[object]):
    """Four-step wizard: load, classify, group, compare."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("e", "export", "Export CSV"),
        Binding("s", "save", "Save JSON"),
        Binding("c", "copy_tsv", "Copy TSV"),
        Binding("g", "chart", "Chart"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.orchestrator = AnalysisOrchestrator()
        self.file_manager = FileManager()
        self.records: list[ProductRecord] = []
        self.classified: list[ProductRecord] = []
        self.groups: list[ProductGroup] = []
        self.reports: list[PriceDifferenceReport] = []
        self.load_issues: list[DataQualityIssue] = []
        self.issues: list[DataQualityIssue] = []
        self.current_stage: str = ""

    def compose(self) -> ComposeResult:
        """Build the widget tree for the wizard."""
        yield Header()
        yield Container(
            Static("⚖ Gender Price Gap Analysis", id="title"),

            # Step 1: file selection
            Horizontal(
                Input(placeholder="Path to product CSV...", id="path_input"),
                Button("Load", variant="primary", id="load_btn"),
                id="load_bar",
            ),

            # Steps 2-4
            Horizontal(
                Button("Analyze Ingredients", id="classify_btn", disabled=True),
                Button("Group Products", id="group_btn", disabled=True),
                Button("Calculate Differences", id="compare_btn", disabled=True),
                id="step_buttons",
            ),

            ProgressBar(total=100, show_eta=False, id="progress"),
            Static("Step 1: load a product CSV", id="status"),
            cast(
                DataTable[str],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            id="main_container",
        )
        yield Footer()

    # ── Event handlers ───────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Dispatch step buttons."""
        if event.button.id == "load_btn":
            await self.load_file()
        elif event.button.id == "classify_btn":
            await self.run_classify()
        elif event.button.id == "group_btn":
            await self.run_group()
        elif event.button.id == "compare_btn":
            await self.run_compare()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the path input."""
        if event.input.id == "path_input":
            await self.load_file()

    # ── Progress ─────────────────────────────────────────

    def _set_progress(self, done: int, total: int) -> None:
        bar = self.query_one("#progress", ProgressBar)
        bar.update(total=max(total, 1), progress=done)

    def _progress_from_thread(self, stage: str, done: int, total: int) -> None:
        """Progress callback for stages running in a worker thread."""
        self.call_from_thread(self._set_progress, done, total)

    # ── Wizard steps ─────────────────────────────────────

    async def load_file(self) -> None:
        """Step 1: read the CSV, build records and normalise gender."""
        path = self.query_one("#path_input", Input).value.strip()
        if not path:
            self.notify("Please enter a CSV path", severity="warning")
            return

        status = self.query_one("#status", Static)
        status.update(f"📂 Loading {path}...")
        try:
            rows = await asyncio.to_thread(FileManager.read_csv, path)
            records, issues = await asyncio.to_thread(
                self.orchestrator.prepare, rows, self._progress_from_thread
            )
        except PriceGapError as exc:
            logger.error("Load failed for %s: %s", path, exc, exc_info=True)
            status.update(f"❌ {exc}")
            self.notify(str(exc), severity="error")
            return

        self.records = records
        self.load_issues = issues
        self.issues = list(issues)
        self.classified = []
        self.groups = []
        self.reports = []
        self._enable_steps(classify=bool(records))
        self.show_stage("preprocess")

        note = f", {len(issues)} data-quality issues" if issues else ""
        status.update(f"✅ Loaded {len(records)} products{note}")
        self.notify(f"Successfully processed {len(records)} rows of data")

    async def run_classify(self) -> None:
        """Step 2: infer active ingredient functionality."""
        self.query_one("#status", Static).update("🧪 Analyzing ingredients...")
        self.classified = await asyncio.to_thread(
            self.orchestrator.classify,
            self.records,
            self._progress_from_thread,
        )
        self.groups = []
        self.reports = []
        self._enable_steps(classify=True, group=True)
        self.show_stage("classify")
        self.query_one("#status", Static).update(
            f"✅ Classified {len(self.classified)} products"
        )
        self.notify("Ingredient analysis completed!")

    async def run_group(self) -> None:
        """Step 3: pair similar women's and men's products."""
        self.query_one("#status", Static).update("🔗 Grouping similar products...")
        try:
            groups = await asyncio.to_thread(
                self.orchestrator.group,
                self.classified,
                None,
                self._progress_from_thread,
            )
        except PriceGapError as exc:
            logger.error("Grouping failed: %s", exc, exc_info=True)
            self.notify(str(exc), severity="error")
            return

        self.groups = groups
        self.reports = []
        self._enable_steps(classify=True, group=True, compare=bool(groups))
        self.show_stage("group")
        status = self.query_one("#status", Static)
        if not groups:
            status.update("⚠ No matches found")
            self.notify(
                "No similar product groups were found. Check your data.",
                severity="warning",
            )
        else:
            status.update(f"✅ Found {len(groups)} product groups")
            self.notify(f"Found {len(groups)} similar product groups!")

    async def run_compare(self) -> None:
        """Step 4: compute the price differences."""
        if not self.groups:
            self.notify(
                "No grouped data available for comparison",
                severity="error",
            )
            return
        # Recomputing must not repeat the previous run's zero-price issues
        issues = list(self.load_issues)
        self.reports = await asyncio.to_thread(
            self.orchestrator.compare,
            self.groups,
            issues,
            self._progress_from_thread,
        )
        self.issues = issues
        self.show_stage("compare")

        indeterminate = sum(1 for r in self.reports if r.is_indeterminate)
        note = f" ({indeterminate} indeterminate)" if indeterminate else ""
        self.query_one("#status", Static).update(
            f"✅ Compared {len(self.reports)} groups{note}. "
            "Positive values mean the women's product costs more."
        )
        self.notify("Price difference calculation completed!")

    def _enable_steps(
        self,
        classify: bool = False,
        group: bool = False,
        compare: bool = False,
    ) -> None:
        self.query_one("#classify_btn", Button).disabled = not classify
        self.query_one("#group_btn", Button).disabled = not group
        self.query_one("#compare_btn", Button).disabled = not compare

    # ── Table ────────────────────────────────────────────

    def _stage_table(
        self, stage: str
    ) -> tuple[list[dict[str, object]], Sequence[str]]:
        """Rows and columns for *stage*."""
        if stage == "preprocess":
            return [r.to_row() for r in self.records], RECORD_COLUMNS[:-1]
        if stage == "classify":
            return [r.to_row() for r in self.classified], RECORD_COLUMNS
        if stage == "group":
            return [g.to_row() for g in self.groups], GROUP_COLUMNS
        if stage == "compare":
            return [r.to_row() for r in self.reports], REPORT_COLUMNS
        return [], []

    def show_stage(self, stage: str) -> None:
        """Fill the DataTable with *stage* output."""
        self.current_stage = stage
        rows, columns = self._stage_table(stage)
        table = cast(
            DataTable[str],
            self.query_one("#results_table", DataTable),
        )
        table.clear(columns=True)
        table.add_columns(*columns)
        for row in rows:
            table.add_row(*(str(row.get(col, "")) for col in columns))

    # ── Actions ──────────────────────────────────────────

    def action_export(self) -> None:
        """Export the displayed stage to a CSV file."""
        rows, columns = self._stage_table(self.current_stage)
        if not rows:
            self.notify("No data to export", severity="warning")
            return
        try:
            path = self.file_manager.export_csv(
                _STAGE_FILENAMES[self.current_stage], rows, columns
            )
            logger.info("Exported %s to %s", self.current_stage, path)
            self.notify(f"Exported to {path}")
        except OSError as e:
            logger.error("Failed to export table", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")

    def action_save(self) -> None:
        """Save price difference reports to a JSON file."""
        if not self.reports:
            self.notify("No price differences to save", severity="warning")
            return
        try:
            path = self.file_manager.save_results(
                "price_differences", self.reports
            )
            logger.info("Reports saved to %s", path)
            self.notify(f"Saved to {path}")
        except OSError as e:
            logger.error("Failed to save reports", exc_info=True)
            self.notify(f"Save failed: {e}", severity="error")

    def action_copy_tsv(self) -> None:
        """Copy the displayed stage to the clipboard as TSV."""
        rows, columns = self._stage_table(self.current_stage)
        if not rows:
            self.notify("No data to copy", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(FileManager.format_tsv(rows, columns))
            self.notify(f"Copied {len(rows)} rows")
        except Exception:
            logger.error("Failed to copy table to clipboard", exc_info=True)
            self.notify("Install pyperclip", severity="warning")

    def action_chart(self) -> None:
        """Open a bar chart of the price differences."""
        if not self.reports:
            self.notify("No price differences to chart", severity="warning")
            return
        try:
            path = export_price_gap_chart(self.reports)
        except OSError as e:
            logger.error("Failed to export chart", exc_info=True)
            self.notify(f"Chart failed: {e}", severity="error")
            return
        if path is None:
            self.notify(
                "Every difference is indeterminate", severity="warning"
            )
        else:
            self.notify(f"Chart saved to {path}")
