"""Rich-powered styling and inspection adapters.

Purpose
-------
Implement :class:`StylerPort` and :class:`InspectorPort` with Rich so the
formatter can ask for semantic styles (``level.error``, ``notice``) and
pretty-printed structured values without knowing about escape sequences.

Contents
--------
* :data:`DEFAULT_STYLES` - semantic style names mapped to Rich style strings.
* :class:`RichStyler` - ANSI colouring via :class:`rich.style.Style`.
* :class:`PlainStyler` - monochrome pass-through.
* :class:`RichInspector` - :func:`rich.pretty.pretty_repr` plus
  :class:`rich.highlighter.ReprHighlighter` colouring.

System Role
-----------
Chosen by the composition root according to the ``monochrome`` option.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from typing import Any

from rich.color import ColorSystem
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.highlighter import ReprHighlighter
from rich.pretty import pretty_repr
from rich.style import Style
from rich.text import Text

from hub_console.application.ports.styling import InspectorPort, StylerPort

logger = logging.getLogger(__name__)


DEFAULT_STYLES: Mapping[str, str] = {
    "level.log": "green",
    "level.debug": "cyan",
    "level.warning": "yellow",
    "level.error": "on red",
    "level.ready": "on green",
    "timestamp": "magenta",
    "glyph.errored": "red",
    "notice": "on magenta",
    "error": "red",
    "banner.logo": "on blue",
    "banner.text": "bold blue",
}
"""Default Rich styles keyed by semantic style name."""


class RichStyler(StylerPort):
    """Render semantic styles as ANSI sequences using Rich.

    Examples
    --------
    >>> RichStyler().style('ok', 'level.log')
    '\\x1b[32mok\\x1b[0m'
    >>> RichStyler().style('ok', 'sparkly')
    'ok'
    """

    def __init__(
        self,
        *,
        styles: Mapping[str, str] | None = None,
        color_system: ColorSystem = ColorSystem.STANDARD,
    ) -> None:
        merged = dict(DEFAULT_STYLES)
        if styles:
            merged.update(styles)
        self._styles = merged
        self._color_system = color_system
        self._parsed: dict[str, Style | None] = {}

    def style(self, text: str, style: str) -> str:
        parsed = self._resolve(style)
        if parsed is None:
            return text
        return parsed.render(text, color_system=self._color_system)

    def _resolve(self, name: str) -> Style | None:
        if name in self._parsed:
            return self._parsed[name]
        definition = self._styles.get(name)
        parsed: Style | None = None
        if definition is None:
            logger.warning("not implemented style %r, rendering unstyled", name)
        else:
            try:
                parsed = Style.parse(definition)
            except StyleSyntaxError as exc:
                logger.warning("invalid style %r for %r: %s", definition, name, exc)
        self._parsed[name] = parsed
        return parsed


class PlainStyler(StylerPort):
    """Monochrome styler returning text unchanged."""

    def style(self, text: str, style: str) -> str:
        return text


class RichInspector(InspectorPort):
    """Pretty-print structured values on one logical line or expanded.

    Examples
    --------
    >>> RichInspector(colors=False).inspect({'a': [1, 2]}, compact=True)
    "{'a': [1, 2]}"
    >>> print(RichInspector(colors=False).inspect({'a': 1}, compact=False))
    {
        'a': 1
    }
    """

    def __init__(self, *, colors: bool = True) -> None:
        self._colors = colors
        self._highlighter = ReprHighlighter()
        self._console = Console(
            color_system="standard",
            force_terminal=True,
            width=sys.maxsize,
            highlight=False,
        )

    def inspect(self, value: Any, *, compact: bool) -> str:
        rendered = pretty_repr(value, max_width=sys.maxsize, expand_all=not compact)
        if not self._colors:
            return rendered
        return self._to_ansi(self._highlighter(Text(rendered)))

    def _to_ansi(self, text: Text) -> str:
        with self._console.capture() as capture:
            self._console.print(text, end="", soft_wrap=True)
        return capture.get()


__all__ = ["DEFAULT_STYLES", "PlainStyler", "RichInspector", "RichStyler"]
