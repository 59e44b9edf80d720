# pricegap/pipeline/preprocessor.py

"""Raw row preprocessing: column resolution, price parsing, record building."""

import logging
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from pricegap.config.settings import Settings
from pricegap.models.product import ProductRecord
from pricegap.pipeline.errors import (
    DataQualityIssue,
    InputContractError,
    require_items,
)

logger = logging.getLogger("pricegap.preprocess")

# Accepted input headers per record field, tried in order.
COLUMN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "brand": ("Brand",),
    "product_name": ("Product Name", "Product", "Name"),
    "price": ("Price", "Price (€)", "Price (EUR)", "Price (USD)", "Price ($)"),
    "active_ingredient": ("Active Ingredient", "Active Ingredients"),
    "inactive_ingredients": ("Inactive Ingredients", "Inactive Ingredient"),
    "gender": ("Gender Classification", "Gender"),
}

# Any other "Price..." header is taken as the price column.
PRICE_PREFIX = "Price"

_PRICE_STRIP_RE = re.compile(r"[^0-9.\-]+")


def resolve_columns(headers: Sequence[str]) -> dict[str, str]:
    """Map record fields to the input headers that carry them.

    Raises:
        InputContractError: When a required field has no matching header.
    """
    available = [h.strip() for h in headers if h is not None]
    candidates = [h for h in available if h not in Settings.DROPPED_COLUMNS]

    resolved: dict[str, str] = {}
    for field, synonyms in COLUMN_SYNONYMS.items():
        for synonym in synonyms:
            if synonym in candidates:
                resolved[field] = synonym
                break

    if "price" not in resolved:
        for header in candidates:
            if header.startswith(PRICE_PREFIX):
                resolved["price"] = header
                break

    missing = [
        COLUMN_SYNONYMS[field][0]
        for field in Settings.REQUIRED_FIELDS
        if field not in resolved
    ]
    if missing:
        msg = f"Missing required columns: {', '.join(missing)}"
        raise InputContractError(msg)

    dropped = [h for h in available if h in Settings.DROPPED_COLUMNS]
    if dropped:
        logger.debug("Ignoring columns: %s", ", ".join(dropped))
    return resolved


def parse_price(value: Any) -> float:
    """Parse a currency-formatted price.

    Everything except digits, ``.`` and ``-`` is stripped before
    conversion. Empty or unparsable text yields 0.0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        cleaned = _PRICE_STRIP_RE.sub("", str(value or ""))
        try:
            price = float(cleaned)
        except ValueError:
            return 0.0
    if not math.isfinite(price):
        return 0.0
    return price


def _cell(row: Mapping[str, Any], header: str | None) -> str:
    if header is None:
        return ""
    value = row.get(header)
    if value is None:
        return ""
    return str(value).strip()


class RowPreprocessor:
    """Turn raw tabular rows into :class:`ProductRecord` objects."""

    @staticmethod
    def build_records(
        rows: Sequence[Mapping[str, Any]],
    ) -> tuple[list[ProductRecord], list[DataQualityIssue]]:
        """Build records from raw rows.

        Returns the records and the data-quality issues found. Rows
        with problems are kept; the issue list says what is wrong.

        Raises:
            InputContractError: When *rows* is not a list of mappings or
                lacks a required column. No records are built.
        """
        require_items(rows, Mapping, "preprocess")
        if not rows:
            return [], []

        columns = resolve_columns(list(rows[0].keys()))
        records: list[ProductRecord] = []
        issues: list[DataQualityIssue] = []

        for row_number, row in enumerate(rows, 1):
            brand = _cell(row, columns["brand"])
            raw_price = row.get(columns["price"])
            price = parse_price(raw_price)
            inactive = _cell(row, columns["inactive_ingredients"])

            row_issues: list[DataQualityIssue] = []
            if not brand:
                row_issues.append(
                    DataQualityIssue(row_number, "brand", "missing brand")
                )
            if price < 0:
                row_issues.append(
                    DataQualityIssue(
                        row_number, "price", f"negative price {raw_price!r} set to 0"
                    )
                )
                price = 0.0
            elif price == 0:
                row_issues.append(
                    DataQualityIssue(
                        row_number,
                        "price",
                        f"missing, zero or unparsable price {raw_price!r}",
                    )
                )
            if not inactive:
                row_issues.append(
                    DataQualityIssue(
                        row_number,
                        "inactive_ingredients",
                        "empty ingredient list",
                    )
                )

            for issue in row_issues:
                logger.warning("Data quality: %s", issue)
            issues.extend(row_issues)

            records.append(
                ProductRecord(
                    brand=brand,
                    product_name=_cell(row, columns["product_name"]),
                    price=price,
                    active_ingredient=_cell(row, columns["active_ingredient"]),
                    inactive_ingredients=inactive,
                    gender_classification=_cell(row, columns.get("gender")),
                    row_number=row_number,
                )
            )

        logger.info(
            "Preprocessed %d rows (%d data-quality issues)",
            len(records),
            len(issues),
        )
        return records, issues
