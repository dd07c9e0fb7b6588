"""Single-keypress input from an interactive terminal.

Purpose
-------
Put the terminal into cbreak mode with signal keys disabled and feed every keypress to a callback from
the asyncio event loop, so key handling interleaves cooperatively with log
events and timers.

Contents
--------
* :class:`TerminalKeyboard` - attach/detach around ``loop.add_reader``.

System Role
-----------
Only attached when stdin is a TTY and :mod:`termios` is available (POSIX).
Everywhere else the interactive controller simply never receives keys.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import re
import sys
from collections.abc import Callable
from typing import Any, TextIO

logger = logging.getLogger(__name__)

_READ_CHUNK = 64
_KEY_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z~]|\x1bO.|.", re.DOTALL)


def _split_keys(chunk: str) -> list[str]:
    """Split raw input into keys; CSI and SS3 escape sequences stay whole.

    Examples
    --------
    >>> _split_keys('ab')
    ['a', 'b']
    >>> _split_keys('t\\x1b[C')
    ['t', '\\x1b[C']
    >>> _split_keys('\\x1bq')
    ['\\x1b', 'q']
    >>> _split_keys('\\x1b[A')
    ['\\x1b[A']
    >>> _split_keys('\\x1b')
    ['\\x1b']
    """
    return _KEY_RE.findall(chunk)


class TerminalKeyboard:
    """Deliver keypresses from ``stream`` to ``on_key`` on the event loop."""

    def __init__(self, on_key: Callable[[str], None], *, stream: TextIO | None = None) -> None:
        self._on_key = on_key
        self._stream = stream if stream is not None else sys.stdin
        self._fd: int | None = None
        self._saved_attrs: list[Any] | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def attached(self) -> bool:
        return self._fd is not None

    def is_supported(self) -> bool:
        """Return ``True`` when the stream is an interactive POSIX terminal."""

        try:
            import termios  # noqa: F401
            import tty  # noqa: F401
        except ImportError:
            return False
        isatty = getattr(self._stream, "isatty", None)
        return bool(isatty and isatty())

    def attach(self, loop: asyncio.AbstractEventLoop | None = None) -> bool:
        """Switch to cbreak mode and start reading; return ``False`` if unsupported."""

        if self.attached:
            return True
        if not self.is_supported():
            logger.debug("keyboard not attached: stream is not an interactive terminal")
            return False
        import termios
        import tty

        fd = self._stream.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        # Ctrl-C must arrive as a key, not as SIGINT
        attrs = termios.tcgetattr(fd)
        attrs[3] &= ~termios.ISIG
        termios.tcsetattr(fd, termios.TCSANOW, attrs)
        self._decoder.reset()
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        self._loop.add_reader(fd, self._on_readable)
        self._fd = fd
        logger.debug("keyboard attached to fd %s", fd)
        return True

    def detach(self) -> None:
        """Stop reading and restore the saved terminal settings."""

        if self._fd is None:
            return
        import termios

        fd = self._fd
        self._fd = None
        if self._loop is not None:
            self._loop.remove_reader(fd)
        if self._saved_attrs is not None:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
        logger.debug("keyboard detached from fd %s", fd)

    def _on_readable(self) -> None:
        assert self._fd is not None
        data = os.read(self._fd, _READ_CHUNK)
        if not data:
            self.detach()
            return
        self._deliver(data)

    def _deliver(self, data: bytes) -> None:
        # a multi-byte character may straddle two reads
        for key in _split_keys(self._decoder.decode(data)):
            self._on_key(key)


__all__ = ["TerminalKeyboard"]
