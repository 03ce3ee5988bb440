"""Tests for logging utilities and sensitive data redaction."""

from __future__ import annotations

import json
import logging

import pytest

from expiryalert.logging_utils import configure_logging


def _record(msg: str, *args, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="expiryalert.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.parametrize("fmt", ["plain", "json"])
def test_sensitive_data_filter_redacts_tokens(fmt):
    secret = "top-secret-token"
    configure_logging("INFO", fmt, [secret])

    handler = logging.getLogger().handlers[0]
    record = _record("Authorization header Bearer %s", secret)
    for filter_ in handler.filters:
        filter_.filter(record)

    formatted = handler.format(record)
    assert secret not in formatted
    assert "[redacted]" in formatted


def test_json_formatter_includes_item_context():
    configure_logging("DEBUG", "json", [])

    handler = logging.getLogger().handlers[0]
    record = _record("Marked item wasted name=%s", "Milk", item_id=4, operation="mark_wasted")

    payload = json.loads(handler.format(record))

    assert payload["message"] == "Marked item wasted name=Milk"
    assert payload["item_id"] == 4
    assert payload["operation"] == "mark_wasted"
    assert payload["level"] == "INFO"
    assert logging.getLogger().level == logging.DEBUG
