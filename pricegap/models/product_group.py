# pricegap/models/product_group.py

"""Accepted women's/men's product pair."""

from dataclasses import dataclass

from pricegap.models.product import ProductRecord


@dataclass(frozen=True)
class ProductGroup:
    """A same-brand pair whose similarity cleared the threshold."""

    group_id: int
    women: ProductRecord
    men: ProductRecord
    similarity_score: float

    @property
    def brand(self) -> str:
        """Brand shared by both products."""
        return self.women.brand

    @property
    def similarity_percent(self) -> float:
        """Similarity as a percentage rounded to one decimal."""
        return round(self.similarity_score * 100, 1)

    def to_row(self) -> dict[str, object]:
        """Flatten to the column layout used for display and export."""
        return {
            "Group ID": self.group_id,
            "Brand": self.brand,
            "Female Product": self.women.product_name,
            "Male Product": self.men.product_name,
            "Functionality of Active Ingredient in Female Products": (
                self.women.functionality or ""
            ),
            "Functionality of Active Ingredient in Male Products": (
                self.men.functionality or ""
            ),
            "Female Price": self.women.price,
            "Male Price": self.men.price,
            "Similarity Score": self.similarity_percent,
        }


GROUP_COLUMNS: list[str] = [
    "Group ID",
    "Brand",
    "Female Product",
    "Male Product",
    "Functionality of Active Ingredient in Female Products",
    "Functionality of Active Ingredient in Male Products",
    "Female Price",
    "Male Price",
    "Similarity Score",
]
