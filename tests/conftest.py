# tests/conftest.py

"""Shared pytest fixtures for all pricegap tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from pricegap.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_results_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point every results/chart write at a per-test temp directory."""
    results = tmp_path / "results"
    charts = results / "charts"
    with patch.object(Settings, "RESULTS_DIR", results), patch.object(
        Settings, "CHARTS_DIR", charts
    ), patch("pricegap.storage.chart_exporter._CHARTS_DIR", charts):
        yield results
