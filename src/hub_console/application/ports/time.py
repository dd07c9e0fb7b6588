"""Ports for periodic timers driven by the event loop."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class TimerPort(Protocol):
    """Repeating timer that invokes its callback every ``interval`` seconds."""

    interval: float

    def start(self) -> None: ...

    def cancel(self) -> None: ...

    @property
    def active(self) -> bool: ...


@runtime_checkable
class TimerFactory(Protocol):
    """Create (but do not start) a :class:`TimerPort`."""

    def __call__(self, interval: float, callback: Callable[[], None]) -> TimerPort: ...


__all__ = ["TimerFactory", "TimerPort"]
