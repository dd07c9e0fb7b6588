"""Log level abstraction for events published on the hub.

Purpose
-------
Offer a domain-specific representation of the hub's severities together with
the presentation metadata the console needs (three-letter tags, style keys).

Contents
--------
* :class:`LogLevel` enum with a lenient name parser.
* ``_TAG_TABLE`` constant mapping levels to their console tags.

System Role
-----------
Used by the filter to compare levels and by the line formatter to pick the
tag and the semantic style for every rendered line.
"""

from __future__ import annotations

from enum import Enum


class LogLevel(Enum):
    """Enumerated severities emitted by spokes."""

    LOG = "log"
    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"
    READY = "ready"

    @property
    def tag(self) -> str:
        """Return the fixed-width tag shown in the level column."""

        return _TAG_TABLE[self]

    @property
    def style_key(self) -> str:
        """Return the semantic style name used to colour lines of this level."""

        return f"level.{self.value}"

    @classmethod
    def from_name(cls, name: object) -> "LogLevel":
        """Return the level for ``name``, falling back to :attr:`LOG`.

        Unknown or non-string values never raise; they render as plain log
        lines.

        Examples
        --------
        >>> LogLevel.from_name('ERROR') is LogLevel.ERROR
        True
        >>> LogLevel.from_name('verbose') is LogLevel.LOG
        True
        """
        if isinstance(name, LogLevel):
            return name
        if not isinstance(name, str):
            return cls.LOG
        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        return cls.LOG

    @classmethod
    def parse_filter(cls, name: str) -> "LogLevel | None":
        """Parse a configured level filter; ``"any"`` yields ``None``.

        Unlike :meth:`from_name` this is strict, because a typo in a filter
        would otherwise silently hide everything but plain log lines.
        """
        normalized = name.strip().lower()
        if normalized == "any":
            return None
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Unknown log level filter: {name!r}")


_TAG_TABLE = {
    LogLevel.LOG: "LOG",
    LogLevel.DEBUG: "DBG",
    LogLevel.WARNING: "WRN",
    LogLevel.ERROR: "ERR",
    LogLevel.READY: "RDY",
}
# Tags displayed in the level column, all exactly three characters wide.


__all__ = ["LogLevel"]
