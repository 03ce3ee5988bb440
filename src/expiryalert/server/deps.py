"""Dependency definitions for the ExpiryAlert API server."""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from expiryalert.config import Settings, get_settings
from expiryalert.tracker.factory import build_inventory_store
from expiryalert.tracker.store import InventoryStore

logger = logging.getLogger(__name__)

_STORE_LOCK = Lock()
_store: Optional[InventoryStore] = None


def get_inventory_store() -> InventoryStore:
    """Return the process-wide inventory store, loading it on first use."""
    global _store

    if _store is not None:
        return _store

    with _STORE_LOCK:
        if _store is None:
            settings = get_settings()
            _store = build_inventory_store(settings)
            logger.info(
                "Inventory store ready backend=%s active=%s wasted=%s",
                settings.storage_backend,
                len(_store.active),
                _store.wasted_count,
            )
        return _store


def reset_inventory_store() -> None:
    """Drop the cached store (intended for testing)."""

    global _store
    _store = None


def require_api_token(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> None:
    """Ensure requests carry the configured API token when required."""

    token = settings.api_token
    if not token:
        return

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.split("Bearer ")[-1].strip() == token:
        return

    if request.headers.get("X-API-Key") == token:
        return

    if request.query_params.get("api_token") == token:
        return

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
