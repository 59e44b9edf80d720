# pricegap/pipeline/gender_normalizer.py

"""Gender label canonicalisation."""

import logging
import re
from collections.abc import Sequence
from dataclasses import replace

from pricegap.models.product import GenderCategory, ProductRecord

logger = logging.getLogger("pricegap.pipeline")

# Only these aliases are rewritten; other free-form labels pass through.
_ALIASES: dict[str, GenderCategory] = {
    "male": GenderCategory.MEN,
    "m": GenderCategory.MEN,
    "female": GenderCategory.WOMEN,
    "f": GenderCategory.WOMEN,
    "men": GenderCategory.MEN,
    "women": GenderCategory.WOMEN,
    "unisex": GenderCategory.UNISEX,
}

_MEN_TOKEN_RE = re.compile(r"\bmen(?:'s|s)?\b")
_WOMEN_TOKEN_RE = re.compile(r"\bwomen(?:'s|s)?\b")


class GenderNormalizer:
    """Canonicalise raw gender labels into :class:`GenderCategory` values."""

    @staticmethod
    def _infer_from_name(
        product_name: str, legacy_substring_match: bool
    ) -> GenderCategory:
        """Guess the category from the product name.

        The men check always runs first. With ``legacy_substring_match``
        a plain substring test is used, so "women" also hits the men
        branch; otherwise only whole tokens count.
        """
        name = product_name.lower()
        if legacy_substring_match:
            if "men" in name:
                return GenderCategory.MEN
            if "women" in name:
                return GenderCategory.WOMEN
            return GenderCategory.UNISEX

        if _MEN_TOKEN_RE.search(name):
            return GenderCategory.MEN
        if _WOMEN_TOKEN_RE.search(name):
            return GenderCategory.WOMEN
        return GenderCategory.UNISEX

    @staticmethod
    def normalize(
        raw_label: str | None,
        product_name: str | None = "",
        legacy_substring_match: bool = False,
    ) -> str:
        """Return the canonical category for *raw_label*.

        ``male``/``m`` and ``female``/``f`` are rewritten, canonical
        names are re-cased, and any other explicit label is returned
        unchanged. A missing label falls back to the product name.
        """
        if raw_label is not None and raw_label.strip():
            alias = _ALIASES.get(raw_label.strip().lower())
            if alias is not None:
                return alias.value
            return raw_label

        return GenderNormalizer._infer_from_name(
            product_name or "", legacy_substring_match
        ).value

    @staticmethod
    def normalize_records(
        records: Sequence[ProductRecord],
        legacy_substring_match: bool = False,
    ) -> list[ProductRecord]:
        """Return new records with canonical gender labels."""
        canonical = {c.value for c in GenderCategory}
        normalized: list[ProductRecord] = []
        passthrough = 0
        for record in records:
            label = GenderNormalizer.normalize(
                record.gender_classification,
                record.product_name,
                legacy_substring_match,
            )
            if label not in canonical:
                passthrough += 1
                logger.debug(
                    "Unrecognised gender label %r kept as-is (row %d)",
                    label,
                    record.row_number,
                )
            normalized.append(replace(record, gender_classification=label))

        if passthrough:
            logger.info(
                "%d records carry a non-canonical gender label "
                "and will not be paired",
                passthrough,
            )
        return normalized
