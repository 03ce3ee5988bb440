"""Encoding of item sequences to and from their persisted JSON form.

Each sequence is stored as a JSON array of ``{"id", "name", "expiry"}`` objects with
the expiry rendered as ``YYYY-MM-DD``. Objects without ``id`` (lists written before
ids existed) are accepted; the caller assigns them fresh ids.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from expiryalert.errors import StorageCorruptError
from expiryalert.models.inventory import Item


class StoredItem(BaseModel):
    """Persisted item record; ``id`` is optional for legacy payloads.

    Names are stripped before validation, so a blank name marks the payload corrupt.
    """

    id: Optional[int] = Field(default=None, ge=1)
    name: str = Field(min_length=1)
    expiry: date

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


def encode_items(items: Iterable[Item]) -> str:
    """Serialize items in order."""

    return json.dumps([item.model_dump(mode="json") for item in items])


def decode_items(key: str, raw: Optional[str]) -> List[StoredItem]:
    """Parse the value stored under ``key``.

    An absent value decodes to an empty list; anything malformed raises
    ``StorageCorruptError`` so the whole sequence can be discarded.
    """

    if raw is None or not raw.strip():
        return []

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageCorruptError(key, f"invalid JSON ({exc.msg})") from exc

    # A cleared list may be stored as JSON null.
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise StorageCorruptError(key, f"expected a JSON array, got {type(payload).__name__}")

    records: List[StoredItem] = []
    for position, entry in enumerate(payload):
        try:
            records.append(StoredItem.model_validate(entry))
        except ValidationError as exc:
            raise StorageCorruptError(key, f"entry {position} is invalid: {exc.errors()}") from exc
    return records


def encode_counter(value: int) -> str:
    return str(value)


def decode_counter(raw: Optional[str]) -> Optional[int]:
    """Return the stored id counter, or ``None`` when absent or unusable."""

    if raw is None:
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        return None
    return value if value >= 1 else None


__all__ = [
    "StoredItem",
    "encode_items",
    "decode_items",
    "encode_counter",
    "decode_counter",
]
