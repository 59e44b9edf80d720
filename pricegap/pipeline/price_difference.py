# pricegap/pipeline/price_difference.py

"""Percentage price gaps for accepted product groups."""

import logging
from collections.abc import Sequence

from pricegap.models.price_difference import PriceDifferenceReport
from pricegap.models.product_group import ProductGroup
from pricegap.pipeline.errors import DataQualityIssue, require_items

logger = logging.getLogger("pricegap.pipeline")


class PriceDifferenceCalculator:
    """Compute how much more (or less) the women's product costs."""

    @staticmethod
    def percent_difference(
        women_price: float, men_price: float
    ) -> float | None:
        """Return ``(women - men) / men * 100``, or ``None`` if men is 0."""
        if men_price == 0:
            return None
        return (women_price - men_price) / men_price * 100

    @staticmethod
    def compute_differences(
        groups: Sequence[ProductGroup],
        issues: list[DataQualityIssue] | None = None,
    ) -> list[PriceDifferenceReport]:
        """Build one report per group, in the same order.

        A zero men's price yields an indeterminate report and, when
        *issues* is given, a data-quality issue for that group.
        """
        require_items(groups, ProductGroup, "compute_differences")

        reports: list[PriceDifferenceReport] = []
        for group in groups:
            diff = PriceDifferenceCalculator.percent_difference(
                group.women.price, group.men.price
            )
            if diff is None:
                logger.warning(
                    "Group %d (%s): men's price is 0, "
                    "difference is indeterminate",
                    group.group_id,
                    group.men.product_name,
                )
                if issues is not None:
                    issues.append(
                        DataQualityIssue(
                            row_number=group.men.row_number,
                            field="price",
                            message=(
                                f"zero men's price in group {group.group_id}; "
                                "difference indeterminate"
                            ),
                        )
                    )
            reports.append(
                PriceDifferenceReport(
                    group_id=group.group_id,
                    brand=group.brand,
                    women_product=group.women.product_name,
                    men_product=group.men.product_name,
                    women_functionality=group.women.functionality or "",
                    men_functionality=group.men.functionality or "",
                    women_price=group.women.price,
                    men_price=group.men.price,
                    diff_percent=diff,
                )
            )

        logger.info("Computed %d price differences", len(reports))
        return reports
