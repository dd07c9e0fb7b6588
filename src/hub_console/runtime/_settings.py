"""Startup settings for the console plugin and their environment overrides.

Purpose
-------
Collect the operator-facing configuration surface in one frozen dataclass and
merge it with ``HUB_CONSOLE_*`` environment variables. Environment values win
over keyword arguments so deployments can adjust a console without touching
the host code.

Contents
--------
* :class:`ConsoleSettings` - validated settings record.
* :func:`build_settings` - keyword arguments plus environment overrides.
* :data:`ENV_PREFIX` - prefix shared by every environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, Callable, Pattern, Union

from hub_console.application.use_cases.stats import DEFAULT_STATS_INTERVAL
from hub_console.domain import LogLevel

ENV_PREFIX = "HUB_CONSOLE_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ConsoleSettings:
    """Configuration surface of the console plugin.

    Attributes mirror the options documented for hosts: timestamps off,
    compact inspection on, no level or content filter, 16 character source
    column, stats every two seconds for no spoke, colour on, evaluation on.
    """

    show_timestamp: bool = False
    compact_inspect: bool = True
    level_filter: str = "any"
    content_filter: Union[str, Pattern[str], None] = None
    exit_on_error: bool = False
    source_width: int = 16
    stats_interval: float = DEFAULT_STATS_INTERVAL
    stats_sources: tuple[str, ...] = ()
    monochrome: bool = False
    eval_enabled: bool = True
    catch_unhandled: bool = True
    styles: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.source_width < 0:
            raise ValueError("source_width must be >= 0")
        if self.stats_interval <= 0:
            raise ValueError("stats_interval must be positive")
        LogLevel.parse_filter(self.level_filter)
        object.__setattr__(self, "stats_sources", tuple(self.stats_sources))
        object.__setattr__(self, "styles", dict(self.styles))

    @property
    def level(self) -> LogLevel | None:
        return LogLevel.parse_filter(self.level_filter)


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {value!r}")


def _parse_width(name: str, value: str) -> int:
    try:
        width = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc
    if width < 0:
        raise ValueError(f"{name} must be >= 0")
    return width


def _parse_interval(name: str, value: str) -> float:
    try:
        interval = float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from exc
    if interval <= 0:
        raise ValueError(f"{name} must be positive")
    return interval


def _parse_sources(name: str, value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _parse_level(name: str, value: str) -> str:
    LogLevel.parse_filter(value)
    return value.strip().lower()


def _parse_text(name: str, value: str) -> str | None:
    return value or None


_ENV_FIELDS: dict[str, tuple[str, Callable[[str, str], Any]]] = {
    "TIMESTAMP": ("show_timestamp", _parse_bool),
    "COMPACT": ("compact_inspect", _parse_bool),
    "LEVEL": ("level_filter", _parse_level),
    "FILTER": ("content_filter", _parse_text),
    "EXIT_ON_ERROR": ("exit_on_error", _parse_bool),
    "SOURCE_WIDTH": ("source_width", _parse_width),
    "STATS_INTERVAL": ("stats_interval", _parse_interval),
    "STATS_SOURCES": ("stats_sources", _parse_sources),
    "MONOCHROME": ("monochrome", _parse_bool),
    "EVAL": ("eval_enabled", _parse_bool),
    "CATCH_UNHANDLED": ("catch_unhandled", _parse_bool),
}


def environment_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return settings fields overridden by ``HUB_CONSOLE_*`` variables.

    ``NO_COLOR`` (any non-empty value) forces monochrome unless
    ``HUB_CONSOLE_MONOCHROME`` says otherwise.

    Examples
    --------
    >>> environment_overrides({'HUB_CONSOLE_SOURCE_WIDTH': '8', 'HUB_CONSOLE_STATS_SOURCES': 'a, b'})
    {'source_width': 8, 'stats_sources': ('a', 'b')}
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    if env.get("NO_COLOR"):
        overrides["monochrome"] = True
    for suffix, (attribute, parser) in _ENV_FIELDS.items():
        name = f"{ENV_PREFIX}{suffix}"
        raw = env.get(name)
        if raw is None:
            continue
        overrides[attribute] = parser(name, raw)
    return overrides


def build_settings(
    settings: ConsoleSettings | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    **values: Any,
) -> ConsoleSettings:
    """Merge ``settings``/keyword ``values`` with the environment.

    Unknown keyword names raise :class:`TypeError`; invalid values raise
    :class:`ValueError`.
    """
    known = {item.name for item in fields(ConsoleSettings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise TypeError(f"unknown console settings: {', '.join(unknown)}")
    base = settings if settings is not None else ConsoleSettings()
    sources = values.get("stats_sources")
    if isinstance(sources, str):
        values["stats_sources"] = (sources,)
    elif isinstance(sources, Iterable):
        values["stats_sources"] = tuple(sources)
    merged = {**values, **environment_overrides(environ)}
    return replace(base, **merged)


__all__ = ["ConsoleSettings", "ENV_PREFIX", "build_settings", "environment_overrides"]
