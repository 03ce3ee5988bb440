"""Reference shelf-life table used to suggest expiry dates for new items."""

from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

# Typical refrigerated/pantry shelf life in days.
DEFAULT_SHELF_LIFE: Mapping[str, int] = MappingProxyType(
    {
        "milk": 7,
        "bread": 5,
        "eggs": 21,
        "butter": 30,
        "cheese": 30,
        "yogurt": 14,
        "cream": 7,
        "chicken": 2,
        "beef": 3,
        "pork": 3,
        "fish": 2,
        "lettuce": 5,
        "spinach": 5,
        "tomatoes": 7,
        "carrots": 21,
        "potatoes": 30,
        "onions": 30,
        "apples": 30,
        "bananas": 5,
        "berries": 3,
        "tofu": 7,
        "juice": 10,
    }
)


def normalize_name(name: str) -> str:
    return " ".join(name.split()).casefold()


class ShelfLifeTable(Mapping[str, int]):
    """Read-only mapping of case-folded item name to shelf life in days."""

    def __init__(self, entries: Optional[Mapping[str, int]] = None) -> None:
        source = DEFAULT_SHELF_LIFE if entries is None else entries
        self._entries = {normalize_name(name): int(days) for name, days in source.items()}

    def __getitem__(self, name: str) -> int:
        return self._entries[normalize_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> Optional[int]:
        return self._entries.get(normalize_name(name))

    def suggest_expiry(self, name: str, now: date) -> Optional[date]:
        """Return ``now`` plus the shelf life of ``name``, or ``None`` when unknown."""

        days = self.lookup(name)
        if days is None:
            return None
        return now + timedelta(days=days)

    @classmethod
    def from_file(cls, path: Path) -> "ShelfLifeTable":
        """Load the built-in table with overrides from a JSON object file.

        Entries whose value is not a non-negative integer are skipped.
        """

        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError(f"Shelf-life file {path} must contain a JSON object")

        merged = dict(DEFAULT_SHELF_LIFE)
        for name, days in raw.items():
            if isinstance(days, bool) or not isinstance(days, int) or days < 0:
                logger.warning("Ignoring shelf-life entry %r=%r from %s", name, days, path)
                continue
            merged[str(name)] = days
        logger.info("Loaded %s shelf-life override(s) from %s", len(raw), path)
        return cls(merged)


def load_shelf_life_table(path: Optional[Path] = None) -> ShelfLifeTable:
    """Return the table for ``path`` (built-in defaults when unset or missing)."""

    if path is None:
        return ShelfLifeTable()
    if not path.exists():
        logger.warning("Shelf-life file %s does not exist; using built-in table", path)
        return ShelfLifeTable()
    return ShelfLifeTable.from_file(path)


__all__ = [
    "DEFAULT_SHELF_LIFE",
    "ShelfLifeTable",
    "load_shelf_life_table",
    "normalize_name",
]
