"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that write rendered lines and prompts to
an interactive console, letting the application layer depend on a narrow
protocol.

Contents
--------
* :class:`OutputPort` - runtime-checkable protocol with line and raw writes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputPort(Protocol):
    """Write already-formatted text to the console."""

    def write_line(self, line: str) -> None:
        """Write ``line`` followed by a newline; ANSI styling is preserved."""

    def write(self, text: str) -> None:
        """Write ``text`` without a newline (prompts and echoed keys)."""

    def backspace(self) -> None:
        """Erase the last echoed character of the current prompt line."""


__all__ = ["OutputPort"]
