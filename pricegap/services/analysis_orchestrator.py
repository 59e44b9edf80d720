# pricegap/services/analysis_orchestrator.py

"""Runs the price-gap pipeline stages in order and collects their output."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from pricegap.models.price_difference import PriceDifferenceReport
from pricegap.models.product import GenderCategory, ProductRecord
from pricegap.models.product_group import ProductGroup
from pricegap.pipeline.errors import DataQualityIssue
from pricegap.pipeline.functionality_classifier import FunctionalityClassifier
from pricegap.pipeline.gender_normalizer import GenderNormalizer
from pricegap.pipeline.grouping import ProductGrouper
from pricegap.pipeline.preprocessor import RowPreprocessor
from pricegap.pipeline.price_difference import PriceDifferenceCalculator

logger = logging.getLogger("pricegap.orchestrator")

StageProgress = Callable[[str, int, int], None]


@dataclass
class AnalysisResult:
    """Every stage's output for one pipeline run."""

    records: list[ProductRecord] = field(
        default_factory=lambda: list[ProductRecord]()
    )
    classified: list[ProductRecord] = field(
        default_factory=lambda: list[ProductRecord]()
    )
    groups: list[ProductGroup] = field(
        default_factory=lambda: list[ProductGroup]()
    )
    reports: list[PriceDifferenceReport] = field(
        default_factory=lambda: list[PriceDifferenceReport]()
    )
    issues: list[DataQualityIssue] = field(
        default_factory=lambda: list[DataQualityIssue]()
    )

    def count_gender(self, category: GenderCategory) -> int:
        """Number of normalised records in *category*."""
        return sum(
            1 for r in self.records
            if r.gender_classification == category.value
        )

    @property
    def no_matches(self) -> bool:
        """True when records were analysed but no pair was accepted."""
        return bool(self.classified) and not self.groups

    @property
    def indeterminate_count(self) -> int:
        """Reports whose difference could not be computed."""
        return sum(1 for r in self.reports if r.is_indeterminate)


def _stage_callback(
    on_progress: StageProgress | None, stage: str
) -> Callable[[int, int], None] | None:
    if on_progress is None:
        return None
    return partial(on_progress, stage)


class AnalysisOrchestrator:
    """Coordinates preprocessing, classification, grouping and comparison.

    Each stage is also exposed on its own so the TUI can step through
    the wizard one stage at a time.
    """

    def __init__(self, legacy_substring_match: bool = False) -> None:
        self.legacy_substring_match = legacy_substring_match

    # ── Individual stages ────────────────────────────────

    def prepare(
        self,
        rows: Sequence[Mapping[str, Any]],
        on_progress: StageProgress | None = None,
    ) -> tuple[list[ProductRecord], list[DataQualityIssue]]:
        """Build records from raw rows and canonicalise gender labels."""
        records, issues = RowPreprocessor.build_records(rows)
        normalized = GenderNormalizer.normalize_records(
            records, self.legacy_substring_match
        )
        if on_progress is not None:
            on_progress("normalize", len(normalized), len(normalized))
        return normalized, issues

    def classify(
        self,
        records: Sequence[ProductRecord],
        on_progress: StageProgress | None = None,
    ) -> list[ProductRecord]:
        """Attach functionality labels."""
        return FunctionalityClassifier.classify_records(
            records, _stage_callback(on_progress, "classify")
        )

    def group(
        self,
        records: Sequence[ProductRecord],
        threshold: float | None = None,
        on_progress: StageProgress | None = None,
    ) -> list[ProductGroup]:
        """Pair comparable women's and men's products."""
        return ProductGrouper.group(
            records, threshold, _stage_callback(on_progress, "group")
        )

    def compare(
        self,
        groups: Sequence[ProductGroup],
        issues: list[DataQualityIssue] | None = None,
        on_progress: StageProgress | None = None,
    ) -> list[PriceDifferenceReport]:
        """Compute price differences for each group."""
        reports = PriceDifferenceCalculator.compute_differences(
            groups, issues
        )
        if on_progress is not None:
            on_progress("compare", len(reports), len(reports))
        return reports

    # ── Full run ─────────────────────────────────────────

    def run(
        self,
        rows: Sequence[Mapping[str, Any]],
        threshold: float | None = None,
        on_progress: StageProgress | None = None,
    ) -> AnalysisResult:
        """Run every stage over *rows* and return all intermediate output.

        Raises:
            InputContractError: When *rows* cannot be ingested. Nothing
                is returned in that case.
        """
        records, issues = self.prepare(rows, on_progress)
        classified = self.classify(records, on_progress)
        groups = self.group(classified, threshold, on_progress)
        reports = self.compare(groups, issues, on_progress)

        result = AnalysisResult(
            records=records,
            classified=classified,
            groups=groups,
            reports=reports,
            issues=issues,
        )
        logger.info(
            "Analysis complete: %d records (%d women, %d men, %d unisex), "
            "%d groups, %d issues",
            len(records),
            result.count_gender(GenderCategory.WOMEN),
            result.count_gender(GenderCategory.MEN),
            result.count_gender(GenderCategory.UNISEX),
            len(groups),
            len(issues),
        )
        return result
