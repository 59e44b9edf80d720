# pricegap/pipeline/errors.py

"""Error taxonomy for the analysis pipeline."""

from dataclasses import dataclass
from typing import Any


class PriceGapError(Exception):
    """Base class for failures reported to the caller."""


class InputContractError(PriceGapError):
    """Input is not shaped the way a stage requires.

    Raised before the stage does any work, so no partial output exists.
    """


def require_items(items: Any, item_type: type, stage: str) -> None:
    """Raise :class:`InputContractError` unless *items* is a list/tuple of *item_type*."""
    if not isinstance(items, (list, tuple)):
        msg = f"{stage}: expected a list, got {type(items).__name__}"
        raise InputContractError(msg)
    for idx, item in enumerate(items):
        if not isinstance(item, item_type):
            msg = (
                f"{stage}: item {idx} is {type(item).__name__}, "
                f"expected {item_type.__name__}"
            )
            raise InputContractError(msg)


@dataclass(frozen=True)
class DataQualityIssue:
    """A non-fatal problem with one record."""

    row_number: int
    field: str
    message: str

    def __str__(self) -> str:
        return f"row {self.row_number}: {self.field}: {self.message}"
