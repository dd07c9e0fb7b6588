from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO
from typing import Callable

import pytest
from rich.console import Console

from hub_console.adapters.hub import LocalHub

FIXED_TS = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


class RecordingOutput:
    """Output port double collecting everything written to the terminal."""

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.fragments: list[str] = []
        self.backspaces = 0

    def write_line(self, line: str) -> None:
        self.lines.append(line)

    def write(self, text: str) -> None:
        self.fragments.append(text)

    def backspace(self) -> None:
        self.backspaces += 1


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    @property
    def active(self) -> bool:
        return self.started and not self.cancelled

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    def active(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if timer.active]


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, width=200, color_system="standard", force_terminal=True)


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def hub() -> LocalHub:
    return LocalHub(name="TestHub", version="1.2.3", clock=lambda: FIXED_TS)

