"""Tests for freshness classification and the filtered view."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from expiryalert.errors import ItemValidationError
from expiryalert.models.inventory import FreshnessStatus, Item, StatusFilter
from expiryalert.tracker.freshness import annotate, classify, days_until, filtered_sorted_view

TODAY = date(2025, 3, 10)


@pytest.mark.parametrize(
    ("offset", "expected"),
    [
        (-30, FreshnessStatus.EXPIRED),
        (-1, FreshnessStatus.EXPIRED),
        (0, FreshnessStatus.NEAR),
        (1, FreshnessStatus.NEAR),
        (3, FreshnessStatus.NEAR),
        (4, FreshnessStatus.SAFE),
        (90, FreshnessStatus.SAFE),
    ],
)
def test_classify_buckets_by_whole_days(offset, expected):
    assert classify(TODAY + timedelta(days=offset), TODAY) is expected


@pytest.mark.parametrize("clock_time", ["00:00:00", "12:30:00", "23:59:59"])
def test_classify_ignores_time_of_day(clock_time):
    now = datetime.fromisoformat(f"{TODAY.isoformat()}T{clock_time}")

    assert classify(TODAY, now) is FreshnessStatus.NEAR
    assert classify(TODAY + timedelta(days=3), now) is FreshnessStatus.NEAR
    assert classify(TODAY + timedelta(days=4), now) is FreshnessStatus.SAFE
    assert classify(TODAY - timedelta(days=1), now) is FreshnessStatus.EXPIRED


def test_classify_three_days_and_one_second_stays_near():
    now = datetime(2025, 3, 10, 8, 0, 0)
    expiry = now + timedelta(days=3, seconds=1)

    assert classify(expiry, now) is FreshnessStatus.NEAR


def test_classify_accepts_iso_strings():
    assert classify("2025-03-09", "2025-03-10") is FreshnessStatus.EXPIRED
    assert classify("2025-03-13", TODAY) is FreshnessStatus.NEAR
    assert classify("2025-03-14", TODAY) is FreshnessStatus.SAFE


@pytest.mark.parametrize(
    "bad",
    ["", "not-a-date", "2025-02-30", "13/01/2025", "20250320", "2025-W12-4", "2025-3-20"],
)
def test_classify_flags_malformed_dates_as_invalid(bad):
    assert classify(bad, TODAY) is FreshnessStatus.INVALID


def test_classify_honours_custom_near_window():
    assert classify(TODAY + timedelta(days=5), TODAY, near_days=7) is FreshnessStatus.NEAR
    assert classify(TODAY, TODAY, near_days=0) is FreshnessStatus.NEAR
    assert classify(TODAY + timedelta(days=1), TODAY, near_days=0) is FreshnessStatus.SAFE


def test_days_until():
    assert days_until(TODAY + timedelta(days=2), TODAY) == 2
    assert days_until(TODAY - timedelta(days=3), TODAY) == -3
    assert days_until("garbage", TODAY) is None


def _item(item_id: int, name: str, offset: int) -> Item:
    return Item(id=item_id, name=name, expiry=TODAY + timedelta(days=offset))


def test_view_all_sorts_by_expiry_regardless_of_status():
    items = [_item(1, "Milk", 1), _item(2, "Bread", 5), _item(3, "Eggs", -1)]

    view = filtered_sorted_view(items, StatusFilter.ALL, TODAY)

    assert [item.name for item in view] == ["Eggs", "Milk", "Bread"]


def test_view_filters_by_status():
    items = [_item(1, "Milk", 1), _item(2, "Bread", 5), _item(3, "Eggs", -1), _item(4, "Cream", 3)]

    assert [i.name for i in filtered_sorted_view(items, StatusFilter.NEAR, TODAY)] == ["Milk", "Cream"]
    assert [i.name for i in filtered_sorted_view(items, StatusFilter.SAFE, TODAY)] == ["Bread"]
    assert [i.name for i in filtered_sorted_view(items, StatusFilter.EXPIRED, TODAY)] == ["Eggs"]


def test_view_keeps_insertion_order_for_equal_expiry():
    items = [_item(1, "Yogurt", 2), _item(2, "Apples", 9), _item(3, "Cheese", 2), _item(4, "Ham", 2)]

    view = filtered_sorted_view(items, StatusFilter.ALL, TODAY)

    assert [item.id for item in view] == [1, 3, 4, 2]


def test_view_is_idempotent_and_does_not_mutate_input():
    items = [_item(1, "Milk", 1), _item(2, "Bread", 5), _item(3, "Eggs", -1)]
    original = list(items)

    first = filtered_sorted_view(items, StatusFilter.ALL, TODAY)
    second = filtered_sorted_view(items, StatusFilter.ALL, TODAY)

    assert first == second
    assert items == original


def test_annotate_reports_status_and_days_left():
    view = annotate(_item(7, "Milk", 2), TODAY)

    assert view.id == 7
    assert view.status is FreshnessStatus.NEAR
    assert view.days_left == 2


def test_annotate_rejects_unparseable_reference_date():
    with pytest.raises(ItemValidationError):
        annotate(_item(7, "Milk", 2), "garbage")
