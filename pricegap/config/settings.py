# pricegap/config/settings.py

"""Central configuration for the pricegap analysis tool."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    """Read a float override from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        msg = f"{name} must be a number, got {raw!r}"
        raise ValueError(msg) from None


def validate_weights(functionality: float, ingredient: float) -> None:
    """Reject weights that could push a similarity score outside [0, 1]."""
    if functionality < 0 or ingredient < 0:
        msg = (
            "Similarity weights must be non-negative, got "
            f"functionality={functionality}, ingredient={ingredient}"
        )
        raise ValueError(msg)
    if functionality + ingredient > 1.0 + 1e-9:
        msg = (
            "Similarity weights must sum to at most 1, got "
            f"{functionality} + {ingredient}"
        )
        raise ValueError(msg)


class Settings:
    """Central configuration for the pricegap analysis tool."""

    # --- Similarity ---
    SIMILARITY_THRESHOLD: float = _env_float(
        "PRICEGAP_SIMILARITY_THRESHOLD", 0.3
    )                                   # Strictly greater to accept a pair
    FUNCTIONALITY_WEIGHT: float = _env_float(
        "PRICEGAP_FUNCTIONALITY_WEIGHT", 0.5
    )
    INGREDIENT_WEIGHT: float = _env_float(
        "PRICEGAP_INGREDIENT_WEIGHT", 0.5
    )

    # --- Preprocessing ---
    REQUIRED_FIELDS: list[str] = [
        "brand",
        "product_name",
        "price",
        "active_ingredient",
        "inactive_ingredients",
    ]
    DROPPED_COLUMNS: list[str] = ["URL", "Price Per Unit"]

    # --- Display ---
    INDETERMINATE_LABEL: str = "Indeterminate"
    PROGRESS_STAGES: list[str] = ["normalize", "classify", "group", "compare"]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    RESULTS_DIR: Path = BASE_DIR / "results"
    CHARTS_DIR: Path = RESULTS_DIR / "charts"
    LOGS_DIR: Path = BASE_DIR / "logs"


validate_weights(Settings.FUNCTIONALITY_WEIGHT, Settings.INGREDIENT_WEIGHT)
