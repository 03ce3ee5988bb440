"""Key-value persistence backends used by the inventory store."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from expiryalert.db.models import KeyValueEntryORM
from expiryalert.db.repository import session_scope

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String-keyed, string-valued store."""

    @abstractmethod
    def load(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None`` when absent."""

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    def save_many(self, values: Mapping[str, str]) -> None:
        """Store several keys. Backends with transactions write them atomically."""

        for key, value in values.items():
            self.save(key, value)


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, value: str) -> None:
        self._data[key] = value

    def save_many(self, values: Mapping[str, str]) -> None:
        self._data.update(values)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._data)


class SqlKeyValueStore(KeyValueStore):
    """Store backed by the ``kv_entries`` SQLite table."""

    def load(self, key: str) -> Optional[str]:
        with session_scope() as session:
            row = session.get(KeyValueEntryORM, key)
            if row is None:
                return None
            return row.value

    def save(self, key: str, value: str) -> None:
        self.save_many({key: value})

    def save_many(self, values: Mapping[str, str]) -> None:
        with session_scope() as session:
            for key, value in values.items():
                session.merge(KeyValueEntryORM(key=key, value=value))
        logger.debug("Persisted keys=%s", sorted(values))


__all__ = ["KeyValueStore", "InMemoryKeyValueStore", "SqlKeyValueStore"]
