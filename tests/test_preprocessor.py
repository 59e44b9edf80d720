# tests/test_preprocessor.py

"""Tests for the raw row preprocessor."""

import unittest

from pricegap.pipeline.errors import InputContractError
from pricegap.pipeline.preprocessor import (
    RowPreprocessor,
    parse_price,
    resolve_columns,
)


def _row(**overrides: str) -> dict[str, str]:
    """Build a raw CSV row with every required column."""
    row = {
        "Brand": "Acme",
        "Product Name": "Rose Lotion",
        "Price": "$12.50",
        "Active Ingredient": "Glycerin",
        "Inactive Ingredients": "water, fragrance",
        "Gender Classification": "Female",
    }
    row.update(overrides)
    return row


class TestParsePrice(unittest.TestCase):
    """parse_price behaviour."""

    def test_currency_symbol_stripped(self) -> None:
        """Currency symbols and spaces are ignored."""
        self.assertEqual(parse_price("€ 9.99"), 9.99)

    def test_plain_number(self) -> None:
        """Plain numeric text parses directly."""
        self.assertEqual(parse_price("15"), 15.0)

    def test_numeric_passthrough(self) -> None:
        """Already-numeric values are kept."""
        self.assertEqual(parse_price(7), 7.0)

    def test_empty_is_zero(self) -> None:
        """Empty text parses to zero."""
        self.assertEqual(parse_price(""), 0.0)

    def test_none_is_zero(self) -> None:
        """None parses to zero."""
        self.assertEqual(parse_price(None), 0.0)

    def test_garbage_is_zero(self) -> None:
        """Text without digits parses to zero."""
        self.assertEqual(parse_price("N/A"), 0.0)

    def test_multiple_dots_is_zero(self) -> None:
        """An unparsable numeric remnant parses to zero."""
        self.assertEqual(parse_price("1.2.3"), 0.0)

    def test_thousands_separator_removed(self) -> None:
        """Commas are stripped like any other symbol."""
        self.assertEqual(parse_price("$1,299.00"), 1299.0)

    def test_negative_kept_for_caller(self) -> None:
        """The minus sign survives stripping."""
        self.assertEqual(parse_price("-5"), -5.0)

    def test_price_range_is_zero(self) -> None:
        """A range collapses to an unparsable remnant, not its low end."""
        self.assertEqual(parse_price("12.99 - 15.99"), 0.0)


class TestResolveColumns(unittest.TestCase):
    """Column synonym resolution."""

    def test_canonical_headers(self) -> None:
        """Canonical headers map to themselves."""
        columns = resolve_columns(list(_row().keys()))
        self.assertEqual(columns["price"], "Price")
        self.assertEqual(columns["gender"], "Gender Classification")

    def test_euro_price_alias(self) -> None:
        """'Price (€)' is accepted as the price column."""
        headers = [
            "Brand", "Product Name", "Price (€)",
            "Active Ingredient", "Inactive Ingredients",
        ]
        self.assertEqual(resolve_columns(headers)["price"], "Price (€)")

    def test_price_prefix_fallback(self) -> None:
        """Any other 'Price...' header is accepted."""
        headers = [
            "Brand", "Product Name", "Price in GBP",
            "Active Ingredient", "Inactive Ingredients",
        ]
        self.assertEqual(resolve_columns(headers)["price"], "Price in GBP")

    def test_price_per_unit_not_used(self) -> None:
        """'Price Per Unit' is dropped, never taken as the price."""
        headers = [
            "Brand", "Product Name", "Price Per Unit", "Price (€)",
            "Active Ingredient", "Inactive Ingredients", "URL",
        ]
        self.assertEqual(resolve_columns(headers)["price"], "Price (€)")

    def test_only_price_per_unit_is_missing(self) -> None:
        """A file with only 'Price Per Unit' lacks a price column."""
        headers = [
            "Brand", "Product Name", "Price Per Unit",
            "Active Ingredient", "Inactive Ingredients",
        ]
        with self.assertRaises(InputContractError) as ctx:
            resolve_columns(headers)
        self.assertIn("Price", str(ctx.exception))

    def test_missing_columns_listed(self) -> None:
        """The error names every missing required column."""
        with self.assertRaises(InputContractError) as ctx:
            resolve_columns(["Brand", "Price"])
        message = str(ctx.exception)
        self.assertIn("Product Name", message)
        self.assertIn("Active Ingredient", message)
        self.assertIn("Inactive Ingredients", message)

    def test_gender_optional(self) -> None:
        """A file without a gender column still resolves."""
        row = _row()
        del row["Gender Classification"]
        self.assertNotIn("gender", resolve_columns(list(row.keys())))


class TestBuildRecords(unittest.TestCase):
    """RowPreprocessor.build_records behaviour."""

    def test_builds_records(self) -> None:
        """Fields are copied from the raw row."""
        records, issues = RowPreprocessor.build_records([_row()])
        self.assertEqual(issues, [])
        record = records[0]
        self.assertEqual(record.brand, "Acme")
        self.assertEqual(record.product_name, "Rose Lotion")
        self.assertEqual(record.price, 12.5)
        self.assertEqual(record.gender_classification, "Female")
        self.assertIsNone(record.functionality)
        self.assertEqual(record.row_number, 1)

    def test_values_trimmed(self) -> None:
        """Cell whitespace is stripped."""
        records, _ = RowPreprocessor.build_records(
            [_row(Brand="  Acme  ")]
        )
        self.assertEqual(records[0].brand, "Acme")

    def test_input_rows_not_mutated(self) -> None:
        """The raw row dicts are left as they were."""
        row = _row(URL="https://example.com")
        original = dict(row)
        RowPreprocessor.build_records([row])
        self.assertEqual(row, original)

    def test_missing_brand_is_issue(self) -> None:
        """A blank brand is recorded but the row is kept."""
        records, issues = RowPreprocessor.build_records([_row(Brand="")])
        self.assertEqual(len(records), 1)
        self.assertEqual([i.field for i in issues], ["brand"])

    def test_unparsable_price_is_issue(self) -> None:
        """A price that cannot be parsed becomes 0 with an issue."""
        records, issues = RowPreprocessor.build_records([_row(Price="call us")])
        self.assertEqual(records[0].price, 0.0)
        self.assertEqual([i.field for i in issues], ["price"])

    def test_negative_price_clamped(self) -> None:
        """Negative prices are stored as 0 with an issue."""
        records, issues = RowPreprocessor.build_records([_row(Price="-3")])
        self.assertEqual(records[0].price, 0.0)
        self.assertIn("negative", issues[0].message)

    def test_empty_inactive_is_issue(self) -> None:
        """Empty ingredient lists are flagged."""
        _, issues = RowPreprocessor.build_records(
            [_row(**{"Inactive Ingredients": ""})]
        )
        self.assertEqual([i.field for i in issues], ["inactive_ingredients"])

    def test_missing_gender_column(self) -> None:
        """Without a gender column the raw label is empty."""
        row = _row()
        del row["Gender Classification"]
        records, _ = RowPreprocessor.build_records([row])
        self.assertEqual(records[0].gender_classification, "")

    def test_empty_rows(self) -> None:
        """No rows gives no records and no issues."""
        self.assertEqual(RowPreprocessor.build_records([]), ([], []))

    def test_not_a_list_raises(self) -> None:
        """A non-list input is a contract violation."""
        with self.assertRaises(InputContractError):
            RowPreprocessor.build_records("Brand,Price")  # type: ignore[arg-type]

    def test_non_mapping_row_raises(self) -> None:
        """Every row must be a mapping; no partial work is done."""
        with self.assertRaises(InputContractError):
            RowPreprocessor.build_records([_row(), ["Acme", "1"]])  # type: ignore[list-item]

    def test_missing_columns_raise(self) -> None:
        """Rows without required columns fail the call."""
        with self.assertRaises(InputContractError):
            RowPreprocessor.build_records([{"Brand": "Acme"}])


if __name__ == "__main__":
    unittest.main()
