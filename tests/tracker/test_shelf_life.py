"""Tests for the shelf-life reference table."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest

from expiryalert.tracker.shelf_life import DEFAULT_SHELF_LIFE, ShelfLifeTable, load_shelf_life_table


def test_lookup_is_case_and_whitespace_insensitive():
    table = ShelfLifeTable({"Milk": 7})

    assert table.lookup("milk") == 7
    assert table.lookup("  MILK ") == 7
    assert "mIlK" in table
    assert table.lookup("oat milk") is None


def test_suggest_expiry_adds_shelf_life_days():
    table = ShelfLifeTable({"milk": 7})
    today = date(2025, 3, 10)

    assert table.suggest_expiry("milk", today) == today + timedelta(days=7)
    assert table.suggest_expiry("caviar", today) is None


def test_default_table_is_read_only():
    table = ShelfLifeTable()

    assert table["milk"] == DEFAULT_SHELF_LIFE["milk"]
    with pytest.raises(TypeError):
        DEFAULT_SHELF_LIFE["milk"] = 1  # type: ignore[index]


def test_from_file_merges_overrides_and_skips_bad_entries(tmp_path):
    path = tmp_path / "shelf_life.json"
    path.write_text(json.dumps({"Milk": 10, "kimchi": 60, "bad": "soon", "neg": -2}), encoding="utf-8")

    table = ShelfLifeTable.from_file(path)

    assert table.lookup("milk") == 10
    assert table.lookup("kimchi") == 60
    assert table.lookup("bread") == DEFAULT_SHELF_LIFE["bread"]
    assert "bad" not in table
    assert "neg" not in table


def test_from_file_rejects_non_object(tmp_path):
    path = tmp_path / "shelf_life.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        ShelfLifeTable.from_file(path)


def test_load_table_falls_back_to_defaults(tmp_path):
    assert len(load_shelf_life_table(None)) == len(DEFAULT_SHELF_LIFE)
    assert len(load_shelf_life_table(tmp_path / "missing.json")) == len(DEFAULT_SHELF_LIFE)
