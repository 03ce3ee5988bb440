"""Persistence layer: SQLAlchemy engine helpers and key-value backends."""

from expiryalert.db.kv_store import InMemoryKeyValueStore, KeyValueStore, SqlKeyValueStore
from expiryalert.db.repository import get_engine, reset_repository_state, session_scope

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqlKeyValueStore",
    "get_engine",
    "reset_repository_state",
    "session_scope",
]
