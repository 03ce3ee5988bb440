"""In-memory inventory mirrored to a key-value store."""

from __future__ import annotations

import logging
from datetime import date
from threading import Lock
from typing import Callable, List, Optional, Sequence, Tuple

from expiryalert import metrics
from expiryalert.db.kv_store import KeyValueStore
from expiryalert.errors import ItemNotFoundError, ItemValidationError, StorageCorruptError
from expiryalert.models.inventory import InventorySnapshot, Item, StatusFilter
from expiryalert.tracker.codec import (
    StoredItem,
    decode_counter,
    decode_items,
    encode_counter,
    encode_items,
)
from expiryalert.tracker.freshness import DEFAULT_NEAR_DAYS, DateLike, as_date, filtered_sorted_view
from expiryalert.tracker.shelf_life import ShelfLifeTable

logger = logging.getLogger(__name__)

ITEMS_KEY = "items"
WASTED_KEY = "wasted"
NEXT_ID_KEY = "next_id"

Clock = Callable[[], date]


def _validate_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ItemValidationError("Item name must not be empty")
    return cleaned


def _validate_expiry(expiry: Optional[DateLike]) -> date:
    if expiry is None or (isinstance(expiry, str) and not expiry.strip()):
        raise ItemValidationError("Expiry date must not be empty")
    parsed = as_date(expiry)
    if parsed is None:
        raise ItemValidationError(f"Expiry date {expiry!r} is not a valid YYYY-MM-DD date")
    return parsed


class InventoryStore:
    """Active and wasted item lists with persistence on every mutation.

    Items are addressed by a stable id handed out from a monotonically increasing
    counter. Each mutation builds the new state, writes it to the key-value store in
    a single ``save_many`` call and only then swaps it in, so a failed write leaves
    the in-memory lists untouched.

    Mutations and reloads are serialized by an internal lock; one instance may be
    shared between the threads of the API server.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        shelf_life: Optional[ShelfLifeTable] = None,
        *,
        near_days: int = DEFAULT_NEAR_DAYS,
        clock: Clock = date.today,
    ) -> None:
        self._kv_store = kv_store
        self._shelf_life = shelf_life if shelf_life is not None else ShelfLifeTable()
        self._near_days = near_days
        self._clock = clock
        self._active: Tuple[Item, ...] = ()
        self._wasted: Tuple[Item, ...] = ()
        self._next_id = 1
        self._lock = Lock()
        self.reload()

    def _load_sequence(self, key: str) -> List[StoredItem]:
        try:
            return decode_items(key, self._kv_store.load(key))
        except StorageCorruptError as exc:
            logger.warning("%s; starting with an empty list", exc, extra={"storage_key": key})
            metrics.STORAGE_RECOVERIES.labels(key=key).inc()
            return []

    def reload(self) -> None:
        """Replace in-memory state with what the key-value store holds."""

        with self._lock:
            self._active, self._wasted, self._next_id = self._read_state()
        logger.debug(
            "Loaded inventory active=%s wasted=%s next_id=%s",
            len(self._active),
            len(self._wasted),
            self._next_id,
        )

    def _read_state(self) -> Tuple[Tuple[Item, ...], Tuple[Item, ...], int]:
        active_records = self._load_sequence(ITEMS_KEY)
        wasted_records = self._load_sequence(WASTED_KEY)

        known_ids = [
            record.id for record in (*active_records, *wasted_records) if record.id is not None
        ]
        next_id = max(known_ids, default=0) + 1
        stored_next = decode_counter(self._kv_store.load(NEXT_ID_KEY))
        if stored_next is not None and stored_next > next_id:
            next_id = stored_next

        seen: set[int] = set()

        def _materialize(records: List[StoredItem]) -> Tuple[Item, ...]:
            nonlocal next_id
            items: List[Item] = []
            for record in records:
                item_id = record.id
                if item_id is None or item_id in seen:
                    item_id = next_id
                    next_id += 1
                seen.add(item_id)
                items.append(Item(id=item_id, name=record.name, expiry=record.expiry))
            return tuple(items)

        active = _materialize(active_records)
        wasted = _materialize(wasted_records)
        return active, wasted, next_id

    def _commit(
        self,
        operation: str,
        active: Sequence[Item],
        wasted: Sequence[Item],
        next_id: int,
    ) -> None:
        # Caller holds self._lock.
        self._kv_store.save_many(
            {
                ITEMS_KEY: encode_items(active),
                WASTED_KEY: encode_items(wasted),
                NEXT_ID_KEY: encode_counter(next_id),
            }
        )
        self._active = tuple(active)
        self._wasted = tuple(wasted)
        self._next_id = next_id
        metrics.INVENTORY_MUTATIONS.labels(operation=operation).inc()

    def _position(self, item_id: int) -> int:
        for position, item in enumerate(self._active):
            if item.id == item_id:
                return position
        raise ItemNotFoundError(item_id)

    @property
    def active(self) -> Tuple[Item, ...]:
        return self._active

    @property
    def wasted(self) -> Tuple[Item, ...]:
        return self._wasted

    @property
    def wasted_count(self) -> int:
        return len(self._wasted)

    @property
    def near_days(self) -> int:
        return self._near_days

    @property
    def shelf_life(self) -> ShelfLifeTable:
        return self._shelf_life

    def today(self) -> date:
        return self._clock()

    def snapshot(self) -> InventorySnapshot:
        return InventorySnapshot(active=list(self._active), wasted=list(self._wasted))

    def get(self, item_id: int) -> Item:
        return self._active[self._position(item_id)]

    def view(
        self,
        status_filter: StatusFilter = StatusFilter.ALL,
        now: Optional[DateLike] = None,
    ) -> List[Item]:
        """Active items matching ``status_filter`` ordered by expiry."""

        reference = now if now is not None else self._clock()
        return filtered_sorted_view(self._active, status_filter, reference, self._near_days)

    def suggest_expiry(self, name: str, now: Optional[DateLike] = None) -> Optional[date]:
        """Suggested expiry for ``name`` from the shelf-life table."""

        if now is None:
            reference = self._clock()
        else:
            reference = as_date(now)
            if reference is None:
                raise ItemValidationError(f"Reference date {now!r} is not a valid YYYY-MM-DD date")
        return self._shelf_life.suggest_expiry(name, reference)

    def add(self, name: str, expiry: DateLike) -> Item:
        """Append a new item to the active list."""

        cleaned_name = _validate_name(name)
        parsed_expiry = _validate_expiry(expiry)
        with self._lock:
            item = Item(id=self._next_id, name=cleaned_name, expiry=parsed_expiry)
            self._commit("add", (*self._active, item), self._wasted, self._next_id + 1)
        logger.info(
            "Added item name=%s expiry=%s",
            item.name,
            item.expiry.isoformat(),
            extra={"item_id": item.id, "operation": "add"},
        )
        return item

    def update(self, item_id: int, name: str, expiry: DateLike) -> Item:
        """Replace the fields of an active item in place."""

        cleaned_name = _validate_name(name)
        parsed_expiry = _validate_expiry(expiry)
        item = Item(id=item_id, name=cleaned_name, expiry=parsed_expiry)
        with self._lock:
            position = self._position(item_id)
            active = list(self._active)
            active[position] = item
            self._commit("update", active, self._wasted, self._next_id)
        logger.info(
            "Updated item name=%s expiry=%s",
            item.name,
            item.expiry.isoformat(),
            extra={"item_id": item_id, "operation": "update"},
        )
        return item

    def delete(self, item_id: int) -> Item:
        """Remove an active item and return it."""

        with self._lock:
            position = self._position(item_id)
            removed = self._active[position]
            active = self._active[:position] + self._active[position + 1 :]
            self._commit("delete", active, self._wasted, self._next_id)
        logger.info("Deleted item name=%s", removed.name, extra={"item_id": item_id, "operation": "delete"})
        return removed

    def mark_wasted(self, item_id: int) -> Item:
        """Move an active item to the wasted list in one transition."""

        with self._lock:
            position = self._position(item_id)
            moved = self._active[position]
            active = self._active[:position] + self._active[position + 1 :]
            wasted = (*self._wasted, moved)
            self._commit("mark_wasted", active, wasted, self._next_id)
        logger.info(
            "Marked item wasted name=%s expiry=%s",
            moved.name,
            moved.expiry.isoformat(),
            extra={"item_id": item_id, "operation": "mark_wasted"},
        )
        return moved


__all__ = ["InventoryStore", "ITEMS_KEY", "WASTED_KEY", "NEXT_ID_KEY", "Clock"]
