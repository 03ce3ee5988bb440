"""Inventory item data models."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FreshnessStatus(str, Enum):
    """Freshness bucket derived from an expiry date relative to today."""

    EXPIRED = "expired"
    NEAR = "near"
    SAFE = "safe"
    INVALID = "invalid"


class StatusFilter(str, Enum):
    """Filter choices offered for the active item list."""

    ALL = "all"
    SAFE = "safe"
    NEAR = "near"
    EXPIRED = "expired"

    def matches(self, status: FreshnessStatus) -> bool:
        if self is StatusFilter.ALL:
            return True
        return status.value == self.value


class Item(BaseModel):
    """Perishable item tracked in the inventory."""

    id: int
    name: str = Field(min_length=1)
    expiry: date

    model_config = ConfigDict(frozen=True)


class ItemView(BaseModel):
    """Item annotated with its freshness for display."""

    id: int
    name: str
    expiry: date
    status: FreshnessStatus
    days_left: int

    model_config = ConfigDict(frozen=True)


class InventorySnapshot(BaseModel):
    """Both item sequences as held by the store."""

    active: list[Item] = Field(default_factory=list)
    wasted: list[Item] = Field(default_factory=list)


class WastedSummary(BaseModel):
    """Items marked as thrown away, with their count."""

    count: int
    items: list[Item] = Field(default_factory=list)


class ShelfLifeSuggestion(BaseModel):
    """Suggested expiry for a known item name."""

    name: str
    days: Optional[int] = Field(default=None)
    expiry: Optional[date] = Field(default=None)


__all__ = [
    "FreshnessStatus",
    "StatusFilter",
    "Item",
    "ItemView",
    "InventorySnapshot",
    "WastedSummary",
    "ShelfLifeSuggestion",
]
