# pricegap/pipeline/grouping.py

"""Pairing of comparable women's and men's products."""

import logging
from collections import defaultdict
from collections.abc import Callable, Sequence

from pricegap.config.settings import Settings, validate_weights
from pricegap.models.product import GenderCategory, ProductRecord
from pricegap.models.product_group import ProductGroup
from pricegap.pipeline.errors import InputContractError, require_items
from pricegap.pipeline.similarity import SimilarityScorer

logger = logging.getLogger("pricegap.pipeline")

ProgressCallback = Callable[[int, int], None]


class ProductGrouper:
    """Find same-brand women's/men's pairs above a similarity threshold."""

    @staticmethod
    def partition(
        records: Sequence[ProductRecord],
    ) -> tuple[list[ProductRecord], list[ProductRecord]]:
        """Split records into (women, men), keeping input order.

        Unisex and unrecognised labels land in neither list.
        """
        women = [
            r for r in records
            if r.gender_classification == GenderCategory.WOMEN.value
        ]
        men = [
            r for r in records
            if r.gender_classification == GenderCategory.MEN.value
        ]
        return women, men

    @staticmethod
    def group(
        records: Sequence[ProductRecord],
        threshold: float | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> list[ProductGroup]:
        """Compare every women's product with every men's product.

        A pair is accepted when its score is strictly above *threshold*.
        Group ids run 1, 2, 3... in acceptance order (women outer,
        men inner, both in input order). An empty list means no
        matches, which is not an error.
        """
        require_items(records, ProductRecord, "group")
        limit = (
            Settings.SIMILARITY_THRESHOLD if threshold is None else threshold
        )
        if not 0.0 <= limit <= 1.0:
            msg = f"group: threshold must be within [0, 1], got {limit}"
            raise InputContractError(msg)
        try:
            validate_weights(
                Settings.FUNCTIONALITY_WEIGHT, Settings.INGREDIENT_WEIGHT
            )
        except ValueError as exc:
            raise InputContractError(f"group: {exc}") from exc

        women, men = ProductGrouper.partition(records)
        logger.info(
            "Grouping %d women's x %d men's products (threshold %.2f)",
            len(women),
            len(men),
            limit,
        )

        # Different brands always score 0, so only same-brand men are
        # scored. Bucket order keeps the original men order.
        men_by_brand: dict[str, list[ProductRecord]] = defaultdict(list)
        for man in men:
            men_by_brand[man.brand].append(man)

        groups: list[ProductGroup] = []
        total = len(women)
        for idx, woman in enumerate(women, 1):
            for man in men_by_brand.get(woman.brand, []):
                score = SimilarityScorer.score(woman, man)
                if score > limit:
                    groups.append(
                        ProductGroup(
                            group_id=len(groups) + 1,
                            women=woman,
                            men=man,
                            similarity_score=score,
                        )
                    )
            if on_progress is not None:
                on_progress(idx, total)

        if groups:
            logger.info("Accepted %d product groups", len(groups))
        else:
            logger.info("No product pairs cleared the threshold")
        return groups
