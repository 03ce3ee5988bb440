"""Inventory core: freshness rules, shelf-life suggestions and the item store."""

from expiryalert.tracker.editor import EntryForm
from expiryalert.tracker.freshness import annotate, classify, days_until, filtered_sorted_view
from expiryalert.tracker.shelf_life import DEFAULT_SHELF_LIFE, ShelfLifeTable, load_shelf_life_table
from expiryalert.tracker.store import InventoryStore

__all__ = [
    "EntryForm",
    "InventoryStore",
    "ShelfLifeTable",
    "DEFAULT_SHELF_LIFE",
    "annotate",
    "classify",
    "days_until",
    "filtered_sorted_view",
    "load_shelf_life_table",
]
