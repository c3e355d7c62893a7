"""Tests for JSON log formatting and API-key redaction."""

from __future__ import annotations

import json
import logging

from skynow.log_setup import JsonConsoleFormatter, setup_logger
from skynow.redaction import REDACTED, sanitize_for_logging, sanitize_text


def test_sanitize_text_redacts_query_api_key() -> None:
    url = "https://customer-api.open-meteo.com/v1/forecast?latitude=1&apikey=abc123&daily=x"
    sanitized = sanitize_text(url)
    assert "abc123" not in sanitized
    assert f"apikey={REDACTED}&daily=x" in sanitized


def test_sanitize_for_logging_redacts_nested_keys() -> None:
    payload = {"params": {"apikey": "abc123", "latitude": 1.0}, "urls": ["x?api_key=zzz"]}
    sanitized = sanitize_for_logging(payload)
    assert sanitized["params"] == {"apikey": REDACTED, "latitude": 1.0}
    assert sanitized["urls"] == [f"x?api_key={REDACTED}"]


def test_json_formatter_emits_redacted_json() -> None:
    record = logging.LogRecord(
        name="skynow",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Forecast fetch failed at %s",
        args=("https://api.open-meteo.com/v1/forecast?apikey=abc123",),
        exc_info=None,
    )
    event = json.loads(JsonConsoleFormatter().format(record))
    assert event["level"] == "WARNING"
    assert event["logger"] == "skynow"
    assert "abc123" not in event["message"]


def test_setup_logger_is_idempotent() -> None:
    first = setup_logger("skynow.test_setup")
    second = setup_logger("skynow.test_setup")
    assert first is second
    assert len(second.handlers) == 1
    assert second.propagate is False
