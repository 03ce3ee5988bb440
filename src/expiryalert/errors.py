"""Exception types raised by the inventory core."""

from __future__ import annotations


class ExpiryAlertError(Exception):
    """Base class for ExpiryAlert failures."""


class ItemValidationError(ExpiryAlertError, ValueError):
    """Raised when an item name or expiry date is empty or malformed."""


class ItemNotFoundError(ExpiryAlertError, LookupError):
    """Raised when an operation references an unknown or stale item id."""

    def __init__(self, item_id: int):
        super().__init__(f"Inventory item {item_id} not found")
        self.item_id = item_id


class StorageCorruptError(ExpiryAlertError):
    """Raised when a persisted payload cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Stored value for '{key}' is corrupt: {reason}")
        self.key = key
        self.reason = reason


__all__ = [
    "ExpiryAlertError",
    "ItemValidationError",
    "ItemNotFoundError",
    "StorageCorruptError",
]
