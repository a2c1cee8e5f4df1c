"""Property tests for structured logging.

Every entry is valid JSON with the base fields, and credential-looking
key/value pairs never survive into the output.
"""

from __future__ import annotations

import json
import logging

from hypothesis import given, settings, strategies as st

from catalog_scraper.logging_config import JsonFormatter


# --- Strategies ---

messages = st.text(min_size=1, max_size=100, alphabet="abcdefghijklmnopqrstuvwxyz0123456789 ._-/")
levels = st.sampled_from(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
geos = st.sampled_from(["RU", "DE", "BR", "EN"])
sensitive_keys = st.sampled_from(["password", "pass", "secret", "token", "credential", "Authorization"])
secret_values = st.from_regex(r"[A-Z]{12,24}", fullmatch=True)
separators = st.sampled_from(["=", ": ", " = ", ":"])


def _make_record(message: str, level: str = "INFO", **extra: object) -> logging.LogRecord:
    """Create a LogRecord with optional extra attributes."""
    record = logging.LogRecord(
        name="test",
        level=getattr(logging, level),
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@settings(max_examples=100)
@given(message=messages, level=levels, geo=geos, casino_id=st.integers(min_value=1))
def test_structured_log_format(message: str, level: str, geo: str, casino_id: int) -> None:
    output = JsonFormatter().format(_make_record(message, level, geo=geo, casino_id=casino_id))
    entry = json.loads(output)

    assert entry["level"] == level
    assert entry["logger"] == "test"
    assert entry["geo"] == geo
    assert entry["casino_id"] == casino_id
    assert "timestamp" in entry
    assert "message" in entry


@settings(max_examples=100)
@given(
    prefix=messages,
    key=sensitive_keys,
    separator=separators,
    value=secret_values,
)
def test_no_credentials_in_logs(prefix: str, key: str, separator: str, value: str) -> None:
    leaked = f"{prefix} {key}{separator}{value}"
    record = _make_record(leaked, error_reason=leaked)

    output = JsonFormatter().format(record)

    assert value not in output
    assert "[REDACTED]" in json.loads(output)["message"]
