"""Rich-powered console adapter implementing :class:`OutputPort`.

Purpose
-------
Write pre-formatted lines (which may carry ANSI styling from the
:class:`~hub_console.adapters.styling.RichStyler`) through a Rich console so
colour control (``NO_COLOR``, forced terminals, recording in tests) stays in
one place.

Contents
--------
* :class:`RichConsoleAdapter` - adapter constructed by the composition root.
"""

from __future__ import annotations

from rich.console import Console
from rich.control import Control
from rich.text import Text

from hub_console.application.ports.console import OutputPort


class RichConsoleAdapter(OutputPort):
    """Print lines through Rich without wrapping or markup.

    Examples
    --------
    >>> from io import StringIO
    >>> console = Console(file=StringIO(), record=True, width=120)
    >>> adapter = RichConsoleAdapter(console=console)
    >>> adapter.write_line('\\x1b[32mLOG|\\x1b[0mhello')
    >>> console.export_text()
    'LOG|hello\\n'
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
    ) -> None:
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color, highlight=False)

    @property
    def console(self) -> Console:
        return self._console

    @property
    def is_terminal(self) -> bool:
        return self._console.is_terminal

    def write_line(self, line: str) -> None:
        self._console.print(Text.from_ansi(line), soft_wrap=True, highlight=False)

    def write(self, text: str) -> None:
        self._console.print(Text.from_ansi(text, end=""), end="", soft_wrap=True, highlight=False)

    def backspace(self) -> None:
        """Erase the character left of the cursor on the prompt line."""

        self._console.control(Control.move(x=-1))
        self._console.print(" ", end="", soft_wrap=True)
        self._console.control(Control.move(x=-1))


__all__ = ["RichConsoleAdapter"]
