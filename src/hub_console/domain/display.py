"""Runtime-mutable display configuration and controller state.

Purpose
-------
Hold the options operators toggle from the keyboard while the console runs,
and the transient controller flags (line input, errored hub) that gate
rendering.

Contents
--------
* :class:`DisplayConfig` - display options with explicit mutators.
* :class:`LinePurpose` - what a pending line of input will be used for.
* :class:`ControllerState` - line-input mode and the errored flag.

System Role
-----------
Owned by a single :class:`hub_console.runtime.ConsolePlugin`. Only the
interactive controller and the stats poller mutate these objects; the filter
and formatter read them. All access happens on the event loop thread, so the
mutators need no locking.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Pattern, Union

from .levels import LogLevel

ContentFilter = Union[str, Pattern[str], None]


@dataclass(slots=True)
class DisplayConfig:
    """Display options consulted for every rendered line.

    ``level_filter`` of ``None`` means "any level". ``content_filter`` is either
    a literal substring or a compiled pattern tested against the event's JSON
    form.
    """

    show_timestamp: bool = False
    compact_inspect: bool = True
    level_filter: LogLevel | None = None
    content_filter: ContentFilter = None
    source_width: int = 16
    exit_on_error: bool = False
    paused: bool = False
    monochrome: bool = False

    def __post_init__(self) -> None:
        if self.source_width < 0:
            raise ValueError("source_width must be >= 0")

    @property
    def level_filter_name(self) -> str:
        return "any" if self.level_filter is None else self.level_filter.value

    def toggle_timestamp(self) -> bool:
        self.show_timestamp = not self.show_timestamp
        return self.show_timestamp

    def toggle_compact(self) -> bool:
        self.compact_inspect = not self.compact_inspect
        return self.compact_inspect

    def toggle_pause(self) -> bool:
        """Flip the pause flag and return the new value."""

        self.paused = not self.paused
        return self.paused

    def set_content_filter(self, pattern: str | Pattern[str]) -> None:
        """Install a literal or compiled content filter.

        Examples
        --------
        >>> config = DisplayConfig()
        >>> config.set_content_filter(re.compile('boom', re.IGNORECASE))
        >>> config.content_filter.pattern
        'boom'
        """
        self.content_filter = pattern

    def clear_content_filter(self) -> None:
        self.content_filter = None

    def set_level_filter(self, level: LogLevel | str | None) -> None:
        if isinstance(level, str):
            level = LogLevel.parse_filter(level)
        self.level_filter = level

    def describe(self) -> dict[str, object]:
        """Return the options as a plain mapping for status dumps."""

        content = self.content_filter
        if isinstance(content, re.Pattern):
            content = f"/{content.pattern}/"
        return {
            "show_timestamp": self.show_timestamp,
            "compact_inspect": self.compact_inspect,
            "level_filter": self.level_filter_name,
            "content_filter": content,
            "source_width": self.source_width,
            "exit_on_error": self.exit_on_error,
            "paused": self.paused,
            "monochrome": self.monochrome,
        }


class LinePurpose(Enum):
    """Consumer of a line typed at the interactive prompt."""

    FILTER = "filter"
    EVAL = "eval"


@dataclass(slots=True)
class ControllerState:
    """Transient controller flags shared by the render pipeline."""

    line_purpose: LinePurpose | None = None
    line_buffer: str = ""
    errored: bool = False

    @property
    def awaiting_line_input(self) -> bool:
        return self.line_purpose is not None

    def begin_line_input(self, purpose: LinePurpose) -> None:
        self.line_purpose = purpose
        self.line_buffer = ""

    def end_line_input(self) -> str:
        """Leave line-input mode and return the collected text."""

        text = self.line_buffer
        self.line_purpose = None
        self.line_buffer = ""
        return text


__all__ = ["ContentFilter", "ControllerState", "DisplayConfig", "LinePurpose"]
