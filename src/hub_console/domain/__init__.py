"""Domain entities and value objects used by the hub console."""

from __future__ import annotations

from .display import ContentFilter, ControllerState, DisplayConfig, LinePurpose
from .events import LogEvent
from .levels import LogLevel
from .status import SpokeStatus, StatusSnapshot

__all__ = [
    "ContentFilter",
    "ControllerState",
    "DisplayConfig",
    "LinePurpose",
    "LogEvent",
    "LogLevel",
    "SpokeStatus",
    "StatusSnapshot",
]
