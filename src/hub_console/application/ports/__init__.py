"""Application-layer ports consumed by the console use cases."""

from __future__ import annotations

from .console import OutputPort
from .hub import HubPort, LogHandler
from .styling import InspectorPort, StylerPort
from .time import TimerFactory, TimerPort

__all__ = [
    "HubPort",
    "InspectorPort",
    "LogHandler",
    "OutputPort",
    "StylerPort",
    "TimerFactory",
    "TimerPort",
]
