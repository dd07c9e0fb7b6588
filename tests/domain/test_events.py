from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from hub_console.domain.events import LogEvent
from hub_console.domain.levels import LogLevel

TS = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


def _payload(**overrides):
    payload = {"level": "warning", "timestamp": TS, "source": "db", "message": ["slow", {"ms": 120}]}
    payload.update(overrides)
    return payload


def test_from_payload_builds_event() -> None:
    event = LogEvent.from_payload(_payload())

    assert event == LogEvent(LogLevel.WARNING, TS, "db", ("slow", {"ms": 120}))


def test_from_payload_returns_existing_event_unchanged() -> None:
    event = LogEvent(LogLevel.LOG, TS, "db", ("x",))

    assert LogEvent.from_payload(event) is event


def test_from_payload_parses_iso_timestamps() -> None:
    event = LogEvent.from_payload(_payload(timestamp="2025-09-23T12:00:00+00:00"))

    assert event is not None
    assert event.timestamp == TS


def test_from_payload_wraps_scalar_message() -> None:
    event = LogEvent.from_payload(_payload(message="just text"))

    assert event is not None
    assert event.message == ("just text",)


def test_from_payload_maps_unknown_level_to_log() -> None:
    event = LogEvent.from_payload(_payload(level="trace"))

    assert event is not None
    assert event.level is LogLevel.LOG
    assert event.level_name == "trace"
    assert json.loads(event.to_json())["level"] == "trace"


def test_from_payload_keeps_published_level_casing() -> None:
    event = LogEvent.from_payload(_payload(level="ERROR"))

    assert event is not None
    assert event.level is LogLevel.ERROR
    assert event.level_name == "ERROR"


def test_level_name_defaults_to_level_value() -> None:
    assert LogEvent(LogLevel.READY, TS, "db", ("x",)).level_name == "ready"
    assert LogEvent.from_payload(_payload(level=LogLevel.DEBUG)).level_name == "debug"


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "log line",
        {"timestamp": TS, "source": "db", "message": ["x"]},
        {"level": "log", "source": "db", "message": ["x"]},
        {"level": "log", "timestamp": TS, "message": ["x"]},
        {"level": "log", "timestamp": TS, "source": "db"},
        {"level": "log", "timestamp": "yesterday", "source": "db", "message": ["x"]},
        {"level": "", "timestamp": TS, "source": "db", "message": ["x"]},
    ],
)
def test_from_payload_rejects_malformed_payloads(payload) -> None:
    assert LogEvent.from_payload(payload) is None


def test_to_json_is_sorted_and_serialises_unknown_values() -> None:
    event = LogEvent(LogLevel.ERROR, TS, "db", ("boom", object))

    decoded = json.loads(event.to_json())

    assert list(decoded) == ["level", "message", "source", "timestamp"]
    assert decoded["level"] == "error"
    assert decoded["timestamp"] == TS.isoformat()
    assert decoded["message"][0] == "boom"
    assert "object" in decoded["message"][1]


def test_replace_returns_copy() -> None:
    event = LogEvent(LogLevel.LOG, TS, "db", ("x",))

    changed = event.replace(source="cache")

    assert changed.source == "cache"
    assert event.source == "db"
