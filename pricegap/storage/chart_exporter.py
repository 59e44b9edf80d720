# pricegap/storage/chart_exporter.py

"""Generate an interactive Plotly HTML chart of price differences."""

import importlib
import logging
import webbrowser
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from pricegap.config.settings import Settings
from pricegap.models.price_difference import PriceDifferenceReport

logger = logging.getLogger("pricegap.chart")

_CHARTS_DIR: Path = Settings.CHARTS_DIR

_WOMEN_HIGHER_COLOR = "#d6336c"
_MEN_HIGHER_COLOR = "#1c7ed6"


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _ensure_charts_dir(charts_dir: Path | None = None) -> Path:
    """Create charts directory if it doesn't exist."""
    target = charts_dir or _CHARTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    return target


def _build_gap_chart(reports: Sequence[PriceDifferenceReport]) -> Any:
    """Build a bar chart with one bar per determinate group."""
    go = _get_plotly_go()
    labels = [
        f"#{r.group_id} {r.brand}: {r.women_product[:25]} / {r.men_product[:25]}"
        for r in reports
    ]
    values = [r.diff_percent for r in reports]
    colors = [
        _WOMEN_HIGHER_COLOR if (v or 0) > 0 else _MEN_HIGHER_COLOR
        for v in values
    ]

    fig: Any = go.Figure()
    fig.add_trace(go.Bar(
        x=labels,
        y=values,
        marker_color=colors,
        hovertemplate=(
            "%{x}<br>"
            "Difference: %{y:.2f}%"
            "<extra></extra>"
        ),
    ))
    fig.add_hline(y=0, line_width=1, line_color="black")
    fig.update_layout(
        title="Women's vs Men's Price Difference by Group",
        xaxis_title="Product group",
        yaxis_title="Price difference (%)",
        template="plotly_white",
    )
    return fig


def export_price_gap_chart(
    reports: Sequence[PriceDifferenceReport],
    open_browser: bool = True,
    charts_dir: Path | None = None,
) -> Path | None:
    """Export the price gap chart as HTML.

    Indeterminate reports are left out. Returns ``None`` when nothing
    is left to plot.
    """
    plotted = [r for r in reports if not r.is_indeterminate]
    if not plotted:
        logger.warning("No determinate price differences to chart")
        return None

    fig = _build_gap_chart(plotted)

    charts_dir = _ensure_charts_dir(charts_dir)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = charts_dir / f"price_gap_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath
