"""Pydantic models defining shared data contracts."""

from expiryalert.models.inventory import (
    FreshnessStatus,
    InventorySnapshot,
    Item,
    ItemView,
    ShelfLifeSuggestion,
    StatusFilter,
    WastedSummary,
)

__all__ = [
    "FreshnessStatus",
    "InventorySnapshot",
    "Item",
    "ItemView",
    "ShelfLifeSuggestion",
    "StatusFilter",
    "WastedSummary",
]
