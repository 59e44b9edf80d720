# pricegap/models/price_difference.py

"""Price difference report for one product group."""

from dataclasses import dataclass

from pricegap.config.settings import Settings


@dataclass(frozen=True)
class PriceDifferenceReport:
    """Signed percentage gap of a women's price over its men's counterpart.

    ``diff_percent`` keeps the unrounded value. It is ``None`` when the
    men's price is zero and the ratio is undefined.
    """

    group_id: int
    brand: str
    women_product: str
    men_product: str
    women_functionality: str
    men_functionality: str
    women_price: float
    men_price: float
    diff_percent: float | None

    @property
    def is_indeterminate(self) -> bool:
        """True when no percentage could be computed."""
        return self.diff_percent is None

    @property
    def display(self) -> str:
        """Two-decimal percentage text, or the indeterminate marker."""
        if self.diff_percent is None:
            return Settings.INDETERMINATE_LABEL
        return f"{self.diff_percent:.2f}%"

    def to_row(self) -> dict[str, object]:
        """Flatten to the column layout used for display and export."""
        return {
            "Brand": self.brand,
            "Female Product": self.women_product,
            "Male Product": self.men_product,
            "Active Ingredient in Female Products": self.women_functionality,
            "Active Ingredient in Male Products": self.men_functionality,
            "Price of Female Products": self.women_price,
            "Price of Male Products": self.men_price,
            "Percent Price Difference": self.display,
        }


REPORT_COLUMNS: list[str] = [
    "Brand",
    "Female Product",
    "Male Product",
    "Active Ingredient in Female Products",
    "Active Ingredient in Male Products",
    "Price of Female Products",
    "Price of Male Products",
    "Percent Price Difference",
]
