"""Freshness classification and the filtered, expiry-ordered item view.

Both sides of every comparison are reduced to calendar dates, so the time of day of
``now`` never moves an item between buckets: an item expiring three days from today
is ``near`` at 00:00 and at 23:59 alike.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from expiryalert.errors import ItemValidationError
from expiryalert.models.inventory import FreshnessStatus, Item, ItemView, StatusFilter

DEFAULT_NEAR_DAYS = 3

_ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> Optional[date]:
    """Reduce ``value`` to a calendar date.

    Strings must be exactly ``YYYY-MM-DD``; anything else returns ``None``.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not _ISO_DATE_PATTERN.fullmatch(text):
            return None
        try:
            return date.fromisoformat(text)
        except ValueError:
            return None
    return None


def days_until(expiry: DateLike, now: DateLike) -> Optional[int]:
    """Whole days from ``now`` to ``expiry`` (negative once expired)."""

    expiry_date = as_date(expiry)
    today = as_date(now)
    if expiry_date is None or today is None:
        return None
    return (expiry_date - today).days


def classify(
    expiry: DateLike,
    now: DateLike,
    near_days: int = DEFAULT_NEAR_DAYS,
) -> FreshnessStatus:
    """Return the freshness bucket of ``expiry`` as seen on ``now``.

    Unparseable input yields ``FreshnessStatus.INVALID`` instead of raising.
    """

    diff = days_until(expiry, now)
    if diff is None:
        return FreshnessStatus.INVALID
    if diff < 0:
        return FreshnessStatus.EXPIRED
    if diff <= near_days:
        return FreshnessStatus.NEAR
    return FreshnessStatus.SAFE


def annotate(item: Item, now: DateLike, near_days: int = DEFAULT_NEAR_DAYS) -> ItemView:
    """Attach status and days left to ``item``."""

    days_left = days_until(item.expiry, now)
    if days_left is None:
        raise ItemValidationError(f"Reference date {now!r} is not a valid YYYY-MM-DD date")
    return ItemView(
        id=item.id,
        name=item.name,
        expiry=item.expiry,
        status=classify(item.expiry, now, near_days),
        days_left=days_left,
    )


def filtered_sorted_view(
    items: Iterable[Item],
    status_filter: StatusFilter,
    now: DateLike,
    near_days: int = DEFAULT_NEAR_DAYS,
) -> List[Item]:
    """Items matching ``status_filter`` ordered by ascending expiry.

    ``sorted`` is stable, so items sharing an expiry keep their insertion order.
    """

    selected = [
        item
        for item in items
        if status_filter.matches(classify(item.expiry, now, near_days))
    ]
    return sorted(selected, key=lambda item: item.expiry)


__all__ = [
    "DEFAULT_NEAR_DAYS",
    "as_date",
    "days_until",
    "classify",
    "annotate",
    "filtered_sorted_view",
]
