from whichcard.domain.catalog import DEFAULT_SETTINGS
from whichcard.domain.models import (
    CardId,
    CardResult,
    CardSettings,
    Channel,
    ComputeResult,
    Location,
    PurchaseCategory,
    PurchaseInput,
)
from whichcard.engine.flags import derive_flags
from whichcard.engine.selectors import compute_best_card

__all__ = [
    "DEFAULT_SETTINGS",
    "CardId",
    "CardResult",
    "CardSettings",
    "Channel",
    "ComputeResult",
    "Location",
    "PurchaseCategory",
    "PurchaseInput",
    "compute_best_card",
    "derive_flags",
]
