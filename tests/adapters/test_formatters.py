from __future__ import annotations

import json
from collections.abc import Callable

import pytest

from lib_log_sentry.adapters._formatting import build_format_payload
from lib_log_sentry.adapters.formatters import DEFAULT_TEXT_TEMPLATE, JSONFormatter, TextFormatter
from lib_log_sentry.domain.entry import LogEntry
from lib_log_sentry.domain.levels import LogLevel


def test_json_formatter_emits_single_line_document(make_entry: Callable[..., LogEntry]) -> None:
    rendered = JSONFormatter().format(make_entry(data={"user": "alice"}))

    assert rendered.endswith(b"\n")
    assert rendered.count(b"\n") == 1
    document = json.loads(rendered)
    assert document == {
        "file": "/srv/app/payments.py:42",
        "func": "charge",
        "level": "error",
        "msg": "boom",
        "time": "2025-09-23T12:00:00+00:00",
        "user": "alice",
    }


def test_json_formatter_prefixes_clashing_data_keys(make_entry: Callable[..., LogEntry]) -> None:
    document = json.loads(JSONFormatter().format(make_entry(data={"msg": "shadow", "level": "x"})))

    assert document["msg"] == "boom"
    assert document["level"] == "error"
    assert document["fields.msg"] == "shadow"
    assert document["fields.level"] == "x"


def test_json_formatter_renders_errors_as_text(make_entry: Callable[..., LogEntry]) -> None:
    entry = make_entry(error=ValueError("bad card"), data={"cause": KeyError("pin")})

    document = json.loads(JSONFormatter().format(entry))

    assert document["error"] == "bad card"
    assert document["cause"] == "'pin'"


def test_json_formatter_keeps_non_ascii_and_stringifies_unknown_values(make_entry: Callable[..., LogEntry]) -> None:
    rendered = JSONFormatter().format(make_entry("Zahlung fehlgeschlagen: Größe", data={"amount": object}))

    assert "Größe".encode("utf-8") in rendered
    assert "<class 'object'>" in json.loads(rendered)["amount"]


def test_json_formatter_omits_missing_caller(make_entry: Callable[..., LogEntry]) -> None:
    document = json.loads(JSONFormatter().format(make_entry(caller=None)))

    assert "file" not in document
    assert "func" not in document


def test_text_formatter_default_template(make_entry: Callable[..., LogEntry]) -> None:
    rendered = TextFormatter().format(make_entry(data={"user": "alice", "empty": None}))

    assert rendered == b"2025-09-23T12:00:00+00:00 ERROR boom user=alice"


def test_text_formatter_custom_template(make_entry: Callable[..., LogEntry]) -> None:
    formatter = TextFormatter("{YYYY}-{MM}-{DD} {sentry_level} {file}:{line} {func} {message}")

    assert formatter.template != DEFAULT_TEXT_TEMPLATE
    assert formatter.format(make_entry(level=LogLevel.PANIC)) == b"2025-09-23 fatal /srv/app/payments.py:42 charge boom"


def test_text_formatter_unknown_placeholder_raises(make_entry: Callable[..., LogEntry]) -> None:
    with pytest.raises(KeyError):
        TextFormatter("{nope}").format(make_entry())


def test_format_payload_without_caller_uses_empty_strings(make_entry: Callable[..., LogEntry]) -> None:
    payload = build_format_payload(make_entry(caller=None, level=LogLevel.WARN))

    assert payload["file"] == ""
    assert payload["line"] == ""
    assert payload["func"] == ""
    assert payload["LEVEL"] == "WARN"
    assert payload["level_enum"] is LogLevel.WARN
    assert payload["data_fields"] == ""
