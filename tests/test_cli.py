"""Tests for the Typer command-line interface."""

from __future__ import annotations

import json
from datetime import date, timedelta

import pytest
from typer.testing import CliRunner

from expiryalert.cli import app

runner = CliRunner()


def _invoke(*args: str):
    return runner.invoke(app, list(args))


def test_add_with_explicit_expiry_and_list():
    result = _invoke("add", "Milk", "--expiry", "2030-01-05")
    assert result.exit_code == 0, result.output
    created = json.loads(result.stdout)
    assert created["name"] == "Milk"
    assert created["expiry"] == "2030-01-05"

    listing = _invoke("list")
    assert listing.exit_code == 0
    items = json.loads(listing.stdout)
    assert [item["name"] for item in items] == ["Milk"]
    assert items[0]["status"] == "safe"


def test_add_uses_shelf_life_suggestion():
    result = _invoke("add", "bread")

    assert result.exit_code == 0, result.output
    created = json.loads(result.stdout)
    assert created["expiry"] == (date.today() + timedelta(days=5)).isoformat()


def test_add_unknown_name_without_expiry_fails():
    result = _invoke("add", "durian")

    assert result.exit_code == 1
    assert json.loads(_invoke("list").stdout) == []


def test_add_rejects_malformed_expiry():
    result = _invoke("add", "Milk", "--expiry", "soon")

    assert result.exit_code == 1


def test_update_waste_and_wasted_summary():
    created = json.loads(_invoke("add", "Cheese", "--expiry", "2030-02-01").stdout)

    updated = _invoke("update", str(created["id"]), "--name", "Brie")
    assert updated.exit_code == 0, updated.output
    assert json.loads(updated.stdout) == {"id": created["id"], "name": "Brie", "expiry": "2030-02-01"}

    wasted = _invoke("waste", str(created["id"]))
    assert wasted.exit_code == 0

    summary = json.loads(_invoke("wasted").stdout)
    assert summary["count"] == 1
    assert summary["items"][0]["name"] == "Brie"
    assert json.loads(_invoke("list").stdout) == []


def test_list_filters_by_status():
    _invoke("add", "Old milk", "--expiry", (date.today() - timedelta(days=2)).isoformat())
    _invoke("add", "Honey", "--expiry", "2040-01-01")

    expired = json.loads(_invoke("list", "--status", "expired").stdout)

    assert [item["name"] for item in expired] == ["Old milk"]


def test_delete_and_unknown_ids():
    created = json.loads(_invoke("add", "Tofu", "--expiry", "2030-03-01").stdout)

    assert _invoke("delete", str(created["id"])).exit_code == 0
    assert _invoke("delete", str(created["id"])).exit_code == 1
    assert _invoke("waste", "999").exit_code == 1
    assert _invoke("update", "999", "--name", "x").exit_code == 1


def test_update_requires_changes():
    assert _invoke("update", "1").exit_code == 1


@pytest.mark.parametrize(("name", "exit_code"), [("Milk", 0), ("durian", 1)])
def test_suggest(name, exit_code):
    result = _invoke("suggest", name)

    assert result.exit_code == exit_code
    if exit_code == 0:
        assert result.stdout.strip() == (date.today() + timedelta(days=7)).isoformat()
