# pricegap/pipeline/similarity.py

"""Pairwise product similarity."""

from pricegap.config.settings import Settings
from pricegap.models.product import ProductRecord


def parse_ingredients(text: str | None) -> set[str]:
    """Split a comma-separated ingredient list into a set of tokens.

    Tokens are stripped and lowercased; blanks are dropped.
    """
    if not text:
        return set()
    tokens = (part.strip().lower() for part in text.split(","))
    return {token for token in tokens if token}


class SimilarityScorer:
    """Score how comparable two products are, from 0 to 1."""

    @staticmethod
    def ingredient_overlap(a: ProductRecord, b: ProductRecord) -> float:
        """Jaccard similarity of the inactive ingredient sets.

        Zero when either list is empty.
        """
        left = parse_ingredients(a.inactive_ingredients)
        right = parse_ingredients(b.inactive_ingredients)
        if not left or not right:
            return 0.0
        return len(left & right) / len(left | right)

    @staticmethod
    def score(a: ProductRecord, b: ProductRecord) -> float:
        """Weighted sum of functionality match and ingredient overlap.

        Products from different brands always score 0.
        """
        if a.brand != b.brand:
            return 0.0

        functionality_term = (
            Settings.FUNCTIONALITY_WEIGHT
            if a.functionality == b.functionality
            else 0.0
        )
        ingredient_term = (
            SimilarityScorer.ingredient_overlap(a, b)
            * Settings.INGREDIENT_WEIGHT
        )
        return functionality_term + ingredient_term
