"""Adapter implementations for the hub console ports."""

from __future__ import annotations

from .console import RichConsoleAdapter
from .hub import LocalHub, Spoke
from .keyboard import TerminalKeyboard
from .styling import DEFAULT_STYLES, PlainStyler, RichInspector, RichStyler
from .timer import PeriodicTimer

__all__ = [
    "DEFAULT_STYLES",
    "LocalHub",
    "PeriodicTimer",
    "PlainStyler",
    "RichConsoleAdapter",
    "RichInspector",
    "RichStyler",
    "Spoke",
    "TerminalKeyboard",
]
