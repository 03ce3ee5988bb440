"""Construction of the inventory store from application settings."""

from __future__ import annotations

from expiryalert.config import Settings
from expiryalert.db.kv_store import InMemoryKeyValueStore, KeyValueStore, SqlKeyValueStore
from expiryalert.tracker.shelf_life import load_shelf_life_table
from expiryalert.tracker.store import InventoryStore


def build_kv_store(settings: Settings) -> KeyValueStore:
    """Return the key-value backend selected in settings."""

    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    return SqlKeyValueStore()


def build_inventory_store(settings: Settings) -> InventoryStore:
    """Construct an inventory store wired to the configured collaborators."""

    return InventoryStore(
        build_kv_store(settings),
        load_shelf_life_table(settings.shelf_life_path),
        near_days=settings.near_expiry_days,
    )


__all__ = ["build_kv_store", "build_inventory_store"]
