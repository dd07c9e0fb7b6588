from __future__ import annotations

import pytest

from hub_console.domain.levels import LogLevel


@pytest.mark.parametrize(
    "name, expected",
    [
        ("log", LogLevel.LOG),
        ("DEBUG", LogLevel.DEBUG),
        ("Warning", LogLevel.WARNING),
        ("error", LogLevel.ERROR),
        (" ready ", LogLevel.READY),
    ],
)
def test_from_name_accepts_case_insensitive_matches(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected


@pytest.mark.parametrize("name", ["verbose", "", 42, None])
def test_from_name_falls_back_to_log(name: object) -> None:
    assert LogLevel.from_name(name) is LogLevel.LOG


@pytest.mark.parametrize(
    "level, tag",
    [
        (LogLevel.LOG, "LOG"),
        (LogLevel.DEBUG, "DBG"),
        (LogLevel.WARNING, "WRN"),
        (LogLevel.ERROR, "ERR"),
        (LogLevel.READY, "RDY"),
    ],
)
def test_level_tag_table(level: LogLevel, tag: str) -> None:
    assert level.tag == tag
    assert len(level.tag) == 3


def test_style_key_uses_level_value() -> None:
    assert LogLevel.WARNING.style_key == "level.warning"


def test_parse_filter_any_means_no_filter() -> None:
    assert LogLevel.parse_filter("ANY") is None
    assert LogLevel.parse_filter("error") is LogLevel.ERROR


def test_parse_filter_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level filter"):
        LogLevel.parse_filter("verbose")
