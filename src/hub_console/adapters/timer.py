"""Repeating timers scheduled on the asyncio event loop.

Purpose
-------
Provide :class:`PeriodicTimer`, the :class:`TimerPort` implementation used for
the error-flag poll and the stats dump. Callbacks run on the loop thread, one
at a time, so they never race with key or event handlers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from hub_console.application.ports.time import TimerPort

logger = logging.getLogger(__name__)


class PeriodicTimer(TimerPort):
    """Invoke ``callback`` every ``interval`` seconds until cancelled.

    The next tick is scheduled before the callback runs, so a slow callback
    does not stretch the period. Exceptions raised by the callback are logged
    and the timer keeps running.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._callback = callback
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None

    @property
    def active(self) -> bool:
        return self._handle is not None

    def start(self) -> None:
        """Schedule the first tick; a running timer is left untouched."""

        if self._handle is not None:
            return
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._handle = self._loop.call_later(self.interval, self._tick)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        assert self._loop is not None
        self._handle = self._loop.call_later(self.interval, self._tick)
        try:
            self._callback()
        except Exception:
            logger.exception("periodic timer callback failed")


__all__ = ["PeriodicTimer"]
