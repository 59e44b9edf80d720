# pricegap/models/product.py

"""Product record model for inter-stage data flow."""

from dataclasses import dataclass
from enum import Enum


class GenderCategory(str, Enum):
    """Canonical gender categories used to pair comparable products."""

    MEN = "Men"
    WOMEN = "Women"
    UNISEX = "Unisex"


@dataclass(frozen=True)
class ProductRecord:
    """One product row, as ingested and as refined by each pipeline stage.

    ``gender_classification`` holds the raw label until the gender
    stage runs. ``functionality`` stays ``None`` until classification.
    """

    brand: str
    product_name: str
    price: float
    active_ingredient: str = ""
    inactive_ingredients: str = ""
    gender_classification: str = ""
    functionality: str | None = None
    row_number: int = 0

    def to_row(self) -> dict[str, object]:
        """Flatten to the column layout used for display and export."""
        return {
            "Brand": self.brand,
            "Product Name": self.product_name,
            "Price": self.price,
            "Active Ingredient": self.active_ingredient,
            "Inactive Ingredients": self.inactive_ingredients,
            "Gender Classification": self.gender_classification,
            "Functionality of Active Ingredient": self.functionality or "",
        }


RECORD_COLUMNS: list[str] = [
    "Brand",
    "Product Name",
    "Price",
    "Active Ingredient",
    "Inactive Ingredients",
    "Gender Classification",
    "Functionality of Active Ingredient",
]
