"""Shared pytest fixtures for the ExpiryAlert test suite."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from expiryalert.config import get_settings
from expiryalert.db.kv_store import InMemoryKeyValueStore
from expiryalert.db.repository import reset_repository_state
from expiryalert.server import deps
from expiryalert.server.app import create_app
from expiryalert.tracker.shelf_life import ShelfLifeTable
from expiryalert.tracker.store import InventoryStore

TODAY = date(2025, 3, 10)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Ensure each test uses an isolated SQLite database location."""

    db_path = tmp_path / "test_expiryalert.db"
    monkeypatch.setenv("EXPIRYALERT_DATABASE_PATH", str(db_path))
    monkeypatch.delenv("EXPIRYALERT_API_TOKEN", raising=False)
    get_settings.cache_clear()
    reset_repository_state()
    deps.reset_inventory_store()
    yield
    deps.reset_inventory_store()
    reset_repository_state()
    get_settings.cache_clear()


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def shelf_life() -> ShelfLifeTable:
    return ShelfLifeTable({"milk": 7, "bread": 5, "Eggs": 21})


@pytest.fixture()
def store(kv_store, shelf_life, today) -> InventoryStore:
    """Empty store on an in-memory backend with a fixed clock."""

    return InventoryStore(kv_store, shelf_life, clock=lambda: today)


@pytest.fixture()
def stocked_store(store, today) -> InventoryStore:
    """Store holding Milk (near), Bread (safe) and Eggs (expired) in that order."""

    store.add("Milk", today + timedelta(days=1))
    store.add("Bread", today + timedelta(days=5))
    store.add("Eggs", today - timedelta(days=1))
    return store


@pytest.fixture()
def app(store) -> Generator[FastAPI, None, None]:
    """Create a new FastAPI app bound to the fixed-clock store."""

    application = create_app()
    application.dependency_overrides[deps.get_inventory_store] = lambda: store
    yield application
    application.dependency_overrides.clear()


@pytest.fixture()
def client(app) -> TestClient:
    """Return a test client bound to the FastAPI app."""

    return TestClient(app)
