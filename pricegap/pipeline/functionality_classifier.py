# pricegap/pipeline/functionality_classifier.py

"""Active-ingredient functionality inference."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import replace

from pricegap.models.product import ProductRecord

logger = logging.getLogger("pricegap.pipeline")

# Iteration order decides ties: the LAST matching key wins.
KNOWN_INGREDIENTS: tuple[tuple[str, str], ...] = (
    ("salicylic acid", "Exfoliation and pore clearing"),
    ("benzoyl peroxide", "Antimicrobial and anti-inflammatory"),
    ("retinol", "Cell turnover and collagen production"),
    ("hyaluronic acid", "Hydration and moisture retention"),
    ("niacinamide", "Sebum regulation and pore refinement"),
    ("vitamin c", "Antioxidant and brightening"),
    ("glycolic acid", "Exfoliation and texture improvement"),
    ("lactic acid", "Gentle exfoliation and hydration"),
    ("aloe vera", "Soothing and hydration"),
    ("tea tree oil", "Antimicrobial and anti-inflammatory"),
    ("witch hazel", "Astringent and pore tightening"),
    ("zinc oxide", "Sun protection and soothing"),
    ("titanium dioxide", "Sun protection"),
    ("ceramides", "Barrier repair and hydration"),
    ("peptides", "Collagen stimulation and firming"),
    ("shea butter", "Moisturizing and softening"),
    ("glycerin", "Hydration and moisture attraction"),
    ("alpha arbutin", "Brightening and hyperpigmentation"),
    ("allantoin", "Soothing and healing"),
    ("centella asiatica", "Calming and healing"),
    ("caffeine", "Vasoconstriction and de-puffing"),
    ("collagen", "Hydration and elasticity"),
    ("cocamidopropyl betaine", "Gentle cleansing and foaming agent"),
)

# First matching entry wins for both hint tables.
PRODUCT_NAME_HINTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("shampoo",), "Hair cleansing and scalp care"),
    (("conditioner",), "Hair conditioning and detangling"),
    (("moisturizer", "lotion"), "Skin hydration and moisturizing"),
    (("cleanser", "wash"), "Skin cleansing"),
    (("deodorant",), "Odor control and sweat protection"),
    (("razor", "shave"), "Shaving comfort and skin protection"),
)

GENERIC_INGREDIENT_HINTS: tuple[tuple[str, str], ...] = (
    ("oil", "Nourishing and emollient"),
    ("extract", "Botanical conditioning"),
    ("butter", "Moisturizing and softening"),
    ("vitamin", "Antioxidant and skin nourishment"),
)

DEFAULT_FUNCTIONALITY = "Personal care and skin health"

ProgressCallback = Callable[[int, int], None]


class FunctionalityClassifier:
    """Map an active ingredient (and product name) to a functionality label."""

    @staticmethod
    def _match_known(ingredient: str) -> str | None:
        label: str | None = None
        for known, known_label in KNOWN_INGREDIENTS:
            if known in ingredient:
                label = known_label
        return label

    @staticmethod
    def _match_product_name(name: str) -> str | None:
        for keywords, label in PRODUCT_NAME_HINTS:
            if any(kw in name for kw in keywords):
                return label
        return None

    @staticmethod
    def _match_generic(ingredient: str) -> str | None:
        for fragment, label in GENERIC_INGREDIENT_HINTS:
            if fragment in ingredient:
                return label
        return None

    @staticmethod
    def classify(
        active_ingredient: str | None,
        product_name: str | None = "",
    ) -> str:
        """Return the functionality label for an ingredient.

        Tries, in order: known ingredient substrings (last match wins),
        product-name category keywords, generic ingredient fragments,
        and finally a catch-all label. Never fails.
        """
        ingredient = (active_ingredient or "").lower()
        name = (product_name or "").lower()

        return (
            FunctionalityClassifier._match_known(ingredient)
            or FunctionalityClassifier._match_product_name(name)
            or FunctionalityClassifier._match_generic(ingredient)
            or DEFAULT_FUNCTIONALITY
        )

    @staticmethod
    def classify_records(
        records: Sequence[ProductRecord],
        on_progress: ProgressCallback | None = None,
    ) -> list[ProductRecord]:
        """Return new records with ``functionality`` filled in.

        Records that already carry a label keep it.
        """
        total = len(records)
        classified: list[ProductRecord] = []
        for idx, record in enumerate(records, 1):
            if record.functionality is None:
                record = replace(
                    record,
                    functionality=FunctionalityClassifier.classify(
                        record.active_ingredient, record.product_name
                    ),
                )
            classified.append(record)
            if on_progress is not None:
                on_progress(idx, total)

        logger.info("Classified %d records", total)
        return classified
