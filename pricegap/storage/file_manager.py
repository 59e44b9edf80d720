# pricegap/storage/file_manager.py

"""Reads input CSVs and writes analysis results to disk."""

import csv
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from pricegap.config.settings import Settings
from pricegap.models.price_difference import PriceDifferenceReport
from pricegap.pipeline.errors import InputContractError

logger = logging.getLogger("pricegap.storage")


class FileManager:
    """Handles CSV ingestion and saving results to disk."""

    def __init__(self) -> None:
        self.results_dir: Path = Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager initialised, results_dir=%s", self.results_dir)

    @staticmethod
    def read_csv(path: str | Path) -> list[dict[str, str]]:
        """Load a product CSV into a list of header → value dicts.

        Headers and values are whitespace-trimmed; rows whose cells are
        all blank are skipped.

        Raises:
            InputContractError: For a non-CSV, missing, non-UTF-8 or
                malformed file.
        """
        filepath = Path(path)
        if filepath.suffix.lower() != ".csv":
            msg = f"Only CSV files are supported: {filepath.name}"
            raise InputContractError(msg)
        if not filepath.is_file():
            msg = f"File not found: {filepath}"
            raise InputContractError(msg)

        rows: list[dict[str, str]] = []
        try:
            with open(filepath, newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                for raw in reader:
                    row = {
                        key.strip(): (value or "").strip()
                        for key, value in raw.items()
                        if key is not None
                    }
                    if any(row.values()):
                        rows.append(row)
        except UnicodeDecodeError as exc:
            msg = f"{filepath.name} is not UTF-8 encoded: {exc.reason}"
            raise InputContractError(msg) from exc
        except csv.Error as exc:
            msg = f"{filepath.name} is not a readable CSV: {exc}"
            raise InputContractError(msg) from exc

        logger.info("Read %d rows from %s", len(rows), filepath)
        return rows

    def save_results(
        self, name: str, reports: Sequence[PriceDifferenceReport]
    ) -> Path:
        """Save price difference reports to a timestamped JSON file.

        The unrounded ``diff_percent`` is kept (``null`` when
        indeterminate) next to its display text.
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{name.replace(' ', '_')}_{timestamp}.json"
        filepath = self.results_dir / filename

        data = [{**asdict(r), "display": r.display} for r in reports]

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info("Saved %d reports to %s", len(reports), filepath)
        return filepath

    def export_csv(
        self,
        stage: str,
        rows: Sequence[Mapping[str, object]],
        columns: Sequence[str],
    ) -> Path:
        """Export one stage's table to a timestamped CSV file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"export_{stage.replace(' ', '_')}_{timestamp}.csv"
        filepath = self.results_dir / filename

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f, fieldnames=list(columns), extrasaction="ignore"
            )
            writer.writeheader()
            for row in rows:
                writer.writerow(row)

        logger.info(
            "Exported %d %s rows to %s", len(rows), stage, filepath
        )
        return filepath

    @staticmethod
    def format_tsv(
        rows: Sequence[Mapping[str, object]],
        columns: Sequence[str],
    ) -> str:
        """Format a stage table as tab-separated text."""
        lines: list[str] = ["\t".join(columns)]
        for row in rows:
            lines.append(
                "\t".join(str(row.get(col, "")) for col in columns)
            )
        return "\n".join(lines)
