"""Build console lines from log events.

Purpose
-------
Turn a :class:`LogEvent` into the single output line operators see: status
glyph, optional timestamp, level tag, padded source column and the rendered
message items.

Contents
--------
* :class:`ValueRenderer` - scalar versus structured rendering of message items.
* :class:`LineFormatter` - header/content composition with a line counter.
* :func:`pad_source` - fixed-width source column helper shared with STATS lines.

System Role
-----------
Application-layer presentation logic. Colours and pretty printing are
delegated to :class:`StylerPort` / :class:`InspectorPort` adapters so the
same code serves colour and monochrome consoles.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from hub_console.application.ports import InspectorPort, StylerPort
from hub_console.domain import ControllerState, DisplayConfig, LogEvent, LogLevel

OK_GLYPH = "✓"
ERRORED_GLYPH = "𐄂"
SEPARATOR = "|"

_SCALAR_TYPES: tuple[type, ...] = (str, bytes, int, float, complex, Decimal, bool, type(None), date, datetime, time, Enum)


def pad_source(name: str, width: int) -> str:
    """Pad ``name`` with spaces to ``width`` and truncate anything longer.

    Examples
    --------
    >>> pad_source('db', 4)
    'db  '
    >>> pad_source('scheduler', 5)
    'sched'
    """
    return name.ljust(width)[:width]


def is_structured(value: Any) -> bool:
    """Return ``True`` for values rendered through the inspector."""

    return not isinstance(value, _SCALAR_TYPES) and not callable(value)


class ValueRenderer:
    """Render message items for the content column.

    Structured values go through the inspector, which also owns their
    colouring. Scalars are returned via ``str`` and coloured by the caller.
    """

    def __init__(self, inspector: InspectorPort) -> None:
        self._inspector = inspector

    def render(self, value: Any, compact: bool) -> str:
        if is_structured(value):
            return self._inspector.inspect(value, compact=compact)
        return str(value)


class LineFormatter:
    """Compose formatted console lines and count them.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from hub_console.adapters.styling import PlainStyler, RichInspector
    >>> formatter = LineFormatter(styler=PlainStyler(), renderer=ValueRenderer(RichInspector(colors=False)))
    >>> event = LogEvent(LogLevel.ERROR, datetime(2025, 1, 1, tzinfo=timezone.utc), 'Worker1', ('boom',))
    >>> formatter.format(event, DisplayConfig(source_width=8), ControllerState())
    '✓|ERR|Worker1 |boom'
    >>> formatter.lines_rendered
    1
    """

    def __init__(self, *, styler: StylerPort, renderer: ValueRenderer) -> None:
        self._styler = styler
        self._renderer = renderer
        self.lines_rendered = 0

    @property
    def stats(self) -> dict[str, int]:
        return {"lines_rendered": self.lines_rendered}

    def format(self, event: LogEvent, config: DisplayConfig, state: ControllerState) -> str:
        """Return the complete line for ``event`` and bump the line counter."""

        self.lines_rendered += 1
        header = self._header(event, config, state)
        content = ", ".join(self._content_item(event.level, item, config) for item in event.message)
        return f"{self._styler.style(header, event.level.style_key)}{content}"

    def _header(self, event: LogEvent, config: DisplayConfig, state: ControllerState) -> str:
        parts = [self._glyph(event, state), SEPARATOR]
        if config.show_timestamp:
            parts.append(self._styler.style(event.timestamp.isoformat(), "timestamp"))
            parts.append(" | ")
        parts.append(f"{event.level.tag}{SEPARATOR}")
        parts.append(f"{pad_source(event.source, config.source_width)}{SEPARATOR}")
        return "".join(parts)

    def _glyph(self, event: LogEvent, state: ControllerState) -> str:
        if not state.errored:
            return OK_GLYPH
        # error lines already carry a red background
        if event.level is LogLevel.ERROR:
            return ERRORED_GLYPH
        return self._styler.style(ERRORED_GLYPH, "glyph.errored")

    def _content_item(self, level: LogLevel, item: Any, config: DisplayConfig) -> str:
        rendered = self._renderer.render(item, config.compact_inspect)
        if is_structured(item):
            return rendered
        return self._styler.style(rendered, level.style_key)


__all__ = ["ERRORED_GLYPH", "LineFormatter", "OK_GLYPH", "ValueRenderer", "is_structured", "pad_source"]
