"""Level and content gating for log events.

Purpose
-------
Decide whether an event passes the level filter and the content filter
currently configured on the :class:`DisplayConfig`.

Contents
--------
* :func:`passes` - pure predicate combining both gates.
"""

from __future__ import annotations

from hub_console.domain import DisplayConfig, LogEvent


def _level_allows(event: LogEvent, config: DisplayConfig) -> bool:
    # published name: "ERROR" or "verbose" match no level filter
    return config.level_filter is None or event.level_name == config.level_filter.value


def _content_allows(event: LogEvent, config: DisplayConfig) -> bool:
    content_filter = config.content_filter
    if content_filter is None:
        return True
    serialized = event.to_json()
    if isinstance(content_filter, str):
        return content_filter in serialized
    return content_filter.search(serialized) is not None


def passes(event: LogEvent, config: DisplayConfig) -> bool:
    """Return ``True`` when ``event`` passes both the level and content gate.

    The level gate compares the level name exactly as published. String
    filters match case-sensitively against the JSON form of the event;
    compiled patterns use :meth:`re.Pattern.search`.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from hub_console.domain import LogLevel
    >>> event = LogEvent(LogLevel.LOG, datetime(2025, 1, 1, tzinfo=timezone.utc), 'db', ('slow query',))
    >>> passes(event, DisplayConfig())
    True
    >>> passes(event, DisplayConfig(level_filter=LogLevel.ERROR))
    False
    >>> passes(event, DisplayConfig(content_filter='Slow'))
    False
    """
    return _level_allows(event, config) and _content_allows(event, config)


__all__ = ["passes"]
