# tests/test_functionality_classifier.py

"""Tests for FunctionalityClassifier ingredient inference."""

import unittest

from pricegap.models.product import ProductRecord
from pricegap.pipeline.functionality_classifier import (
    DEFAULT_FUNCTIONALITY,
    GENERIC_INGREDIENT_HINTS,
    KNOWN_INGREDIENTS,
    PRODUCT_NAME_HINTS,
    FunctionalityClassifier,
)


def _record(
    active: str, name: str = "Product", functionality: str | None = None
) -> ProductRecord:
    """Create a minimal ProductRecord."""
    return ProductRecord(
        brand="Acme",
        product_name=name,
        price=10.0,
        active_ingredient=active,
        functionality=functionality,
    )


class TestKnownIngredients(unittest.TestCase):
    """Known-ingredient table lookups."""

    def test_single_known_ingredient(self) -> None:
        """A known ingredient maps to its label."""
        self.assertEqual(
            FunctionalityClassifier.classify("Salicylic Acid 2%", ""),
            "Exfoliation and pore clearing",
        )

    def test_case_insensitive(self) -> None:
        """Ingredient text is lowercased before matching."""
        self.assertEqual(
            FunctionalityClassifier.classify("NIACINAMIDE", ""),
            "Sebum regulation and pore refinement",
        )

    def test_last_match_wins(self) -> None:
        """With two known ingredients the later table entry wins."""
        self.assertEqual(
            FunctionalityClassifier.classify(
                "Retinol and Hyaluronic Acid", ""
            ),
            "Hydration and moisture retention",
        )

    def test_last_match_wins_regardless_of_text_order(self) -> None:
        """Table order decides, not the order in the ingredient text."""
        self.assertEqual(
            FunctionalityClassifier.classify(
                "Hyaluronic Acid and Retinol", ""
            ),
            "Hydration and moisture retention",
        )

    def test_known_beats_product_name(self) -> None:
        """A known ingredient takes priority over name hints."""
        self.assertEqual(
            FunctionalityClassifier.classify("zinc oxide", "Daily Shampoo"),
            "Sun protection and soothing",
        )

    def test_overlapping_keys(self) -> None:
        """'tea tree oil' is a known key, so generic 'oil' is not used."""
        self.assertEqual(
            FunctionalityClassifier.classify("Tea Tree Oil", ""),
            "Antimicrobial and anti-inflammatory",
        )

    def test_table_order_is_fixed(self) -> None:
        """The first and last table entries are pinned."""
        self.assertEqual(KNOWN_INGREDIENTS[0][0], "salicylic acid")
        self.assertEqual(
            KNOWN_INGREDIENTS[-1][0], "cocamidopropyl betaine"
        )
        self.assertEqual(len(KNOWN_INGREDIENTS), 23)


class TestFallbacks(unittest.TestCase):
    """Product-name and generic-fragment fallbacks."""

    def test_shampoo_name(self) -> None:
        """Shampoo in the name yields the hair cleansing label."""
        self.assertEqual(
            FunctionalityClassifier.classify("", "Men's Daily SHAMPOO"),
            PRODUCT_NAME_HINTS[0][1],
        )

    def test_lotion_name(self) -> None:
        """'lotion' is a moisturizer synonym."""
        self.assertEqual(
            FunctionalityClassifier.classify("water", "Body Lotion"),
            "Skin hydration and moisturizing",
        )

    def test_wash_name(self) -> None:
        """'wash' is a cleanser synonym."""
        self.assertEqual(
            FunctionalityClassifier.classify("", "Face Wash"),
            "Skin cleansing",
        )

    def test_razor_name(self) -> None:
        """Razor and shave products share a label."""
        self.assertEqual(
            FunctionalityClassifier.classify("", "Smooth Shave Gel"),
            FunctionalityClassifier.classify("", "5-blade Razor"),
        )

    def test_name_hint_before_generic(self) -> None:
        """Name hints are tried before generic ingredient fragments."""
        self.assertEqual(
            FunctionalityClassifier.classify("argan oil", "Deodorant Stick"),
            "Odor control and sweat protection",
        )

    def test_generic_oil(self) -> None:
        """An unknown oil falls to the generic oil label."""
        self.assertEqual(
            FunctionalityClassifier.classify("Argan Oil", "Serum"),
            GENERIC_INGREDIENT_HINTS[0][1],
        )

    def test_generic_vitamin(self) -> None:
        """'vitamin e' is not a known key, so the generic label applies."""
        self.assertEqual(
            FunctionalityClassifier.classify("Vitamin E", ""),
            "Antioxidant and skin nourishment",
        )

    def test_default_label(self) -> None:
        """Nothing matches: the catch-all label is returned."""
        self.assertEqual(
            FunctionalityClassifier.classify("water", "Mystery Item"),
            DEFAULT_FUNCTIONALITY,
        )

    def test_empty_input_is_total(self) -> None:
        """Empty strings still produce a label."""
        self.assertEqual(
            FunctionalityClassifier.classify("", ""), DEFAULT_FUNCTIONALITY
        )

    def test_none_input_is_total(self) -> None:
        """None inputs are treated as empty."""
        self.assertEqual(
            FunctionalityClassifier.classify(None, None),
            DEFAULT_FUNCTIONALITY,
        )

    def test_deterministic(self) -> None:
        """Repeated calls return the same label."""
        first = FunctionalityClassifier.classify("caffeine", "Eye Cream")
        for _ in range(5):
            self.assertEqual(
                FunctionalityClassifier.classify("caffeine", "Eye Cream"),
                first,
            )


class TestClassifyRecords(unittest.TestCase):
    """FunctionalityClassifier.classify_records behaviour."""

    def test_returns_new_records(self) -> None:
        """Input records are not modified."""
        records = [_record("retinol")]
        result = FunctionalityClassifier.classify_records(records)
        self.assertIsNone(records[0].functionality)
        self.assertEqual(
            result[0].functionality,
            "Cell turnover and collagen production",
        )

    def test_existing_label_kept(self) -> None:
        """A record that already has a label is not reclassified."""
        records = [_record("retinol", functionality="Custom")]
        result = FunctionalityClassifier.classify_records(records)
        self.assertEqual(result[0].functionality, "Custom")

    def test_idempotent(self) -> None:
        """Classifying classified records changes nothing."""
        once = FunctionalityClassifier.classify_records(
            [_record("glycerin"), _record("", "Conditioner")]
        )
        twice = FunctionalityClassifier.classify_records(once)
        self.assertEqual(once, twice)

    def test_progress_reported_per_record(self) -> None:
        """The callback gets (done, total) after every record."""
        calls: list[tuple[int, int]] = []
        FunctionalityClassifier.classify_records(
            [_record("a"), _record("b"), _record("c")],
            on_progress=lambda done, total: calls.append((done, total)),
        )
        self.assertEqual(calls, [(1, 3), (2, 3), (3, 3)])

    def test_empty_list(self) -> None:
        """No records, no output."""
        self.assertEqual(FunctionalityClassifier.classify_records([]), [])


if __name__ == "__main__":
    unittest.main()
