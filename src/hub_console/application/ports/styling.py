"""Ports for colouring text and inspecting structured values.

Purpose
-------
Keep terminal escape sequences and pretty-printing behind capability
interfaces keyed by semantic style names, so the formatter works unchanged
with a colour or a monochrome backend.

Contents
--------
* :class:`StylerPort` - ``style(text, style) -> str``.
* :class:`InspectorPort` - ``inspect(value, compact=...) -> str``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StylerPort(Protocol):
    """Apply a semantic style such as ``level.error`` or ``notice``."""

    def style(self, text: str, style: str) -> str:
        """Return ``text`` decorated for ``style``; unknown styles return it unchanged."""


@runtime_checkable
class InspectorPort(Protocol):
    """Render structured values into display strings."""

    def inspect(self, value: Any, *, compact: bool) -> str:
        """Return ``value`` at unlimited depth without a wrap budget."""


__all__ = ["InspectorPort", "StylerPort"]
