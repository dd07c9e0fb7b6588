"""Domain event describing a log message published on the hub.

Purpose
-------
Provide an immutable, serialisable representation of the log events spokes
emit, plus the lenient payload parser that decides which hub payloads are
renderable at all.

Contents
--------
* :class:`LogEvent` dataclass with serialisation helpers.

System Role
-----------
Sits in the domain layer; the render pipeline converts raw hub payloads into
:class:`LogEvent` objects before filtering and formatting them.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from .levels import LogLevel

logger = logging.getLogger(__name__)


def _coerce_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _coerce_message(value: Any) -> tuple[Any, ...]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return (value,)
    return tuple(value)


@dataclass(slots=True, frozen=True)
class LogEvent:
    """Immutable log event as published by a spoke.

    Attributes
    ----------
    level:
        :class:`LogLevel` used for the tag and colour; unknown names map to ``LOG``.
    timestamp:
        Moment the spoke created the event.
    source:
        Name of the emitting spoke.
    message:
        Items to render, each scalar or structured.
    level_name:
        Level exactly as published; the level filter and the JSON form use
        it. Defaults to ``level.value``.
    """

    level: LogLevel
    timestamp: datetime
    source: str
    message: tuple[Any, ...] = field(default_factory=tuple)
    level_name: str = ""

    def __post_init__(self) -> None:
        if not self.level_name:
            object.__setattr__(self, "level_name", self.level.value)

    @classmethod
    def from_payload(cls, payload: Any) -> "LogEvent | None":
        """Build an event from a hub payload or return ``None`` when malformed.

        Accepts an existing :class:`LogEvent` unchanged. Payloads lacking a
        level, timestamp, source or message are rejected without raising.

        Examples
        --------
        >>> from datetime import datetime, timezone
        >>> ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        >>> LogEvent.from_payload({'level': 'warning', 'timestamp': ts, 'source': 'db', 'message': ['slow']}).level
        <LogLevel.WARNING: 'warning'>
        >>> LogEvent.from_payload({'level': 'log', 'source': 'db', 'message': ['x']}) is None
        True
        """
        if isinstance(payload, LogEvent):
            return payload
        if not isinstance(payload, Mapping):
            return None
        level = payload.get("level")
        source = payload.get("source")
        message = payload.get("message")
        timestamp = _coerce_timestamp(payload.get("timestamp"))
        if not level or not source or message is None or timestamp is None:
            logger.debug("dropping malformed event payload", extra={"payload_keys": [str(key) for key in payload]})
            return None
        return cls(
            level=LogLevel.from_name(level),
            timestamp=timestamp,
            source=str(source),
            message=_coerce_message(message),
            level_name=level.value if isinstance(level, LogLevel) else str(level),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize the event to a dictionary with an ISO-8601 timestamp."""

        return {
            "level": self.level_name,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "message": list(self.message),
        }

    def to_json(self) -> str:
        """Serialize the event to JSON with sorted keys for deterministic output.

        Values JSON cannot represent natively are rendered with ``str``.
        """

        return json.dumps(self.to_dict(), sort_keys=True, default=str)

    def replace(self, **changes: Any) -> "LogEvent":
        """Return a copied event with ``changes`` applied."""

        return replace(self, **changes)


__all__ = ["LogEvent"]
