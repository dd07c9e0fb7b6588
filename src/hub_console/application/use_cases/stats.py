"""Periodic hub polling: the errored flag and STATS lines.

Purpose
-------
Keep the status glyph honest by polling the hub's error count, and dump
per-spoke statistics for the configured spokes at a fixed interval.

Contents
--------
* :class:`StatsPoller` - owns the error-poll and stats-dump timers.
* :func:`format_stats_line` - ``STATS|<source>|status: ...`` rendering.

System Role
-----------
Runs on event-loop timers created through a :class:`TimerFactory`. Replacing
the dump interval or target set cancels the running dump timer before a new
one starts, so at most one dump timer exists at any time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from hub_console.application.ports import HubPort, OutputPort, TimerFactory, TimerPort
from hub_console.domain import ControllerState, DisplayConfig, SpokeStatus

from .formatting import pad_source

logger = logging.getLogger(__name__)

ERROR_POLL_INTERVAL = 5.0
DEFAULT_STATS_INTERVAL = 2.0
ALL_SOURCES = "all"


def format_stats_line(spoke: SpokeStatus, width: int) -> str:
    """Return the STATS line for ``spoke``.

    Examples
    --------
    >>> format_stats_line(SpokeStatus('Worker1', 'ready', {'jobs': 3, 'errors': 0}), 8)
    'STATS|Worker1 |status: ready, jobs:3, errors:0'
    >>> format_stats_line(SpokeStatus('idle', 'ready'), 4)
    'STATS|idle|status: ready'
    """
    line = f"STATS|{pad_source(spoke.name, width)}|status: {spoke.status}"
    values = ", ".join(f"{key}:{value}" for key, value in spoke.stats.items())
    return f"{line}, {values}" if values else line


class StatsPoller:
    """Poll the hub for the errored flag and periodic stats dumps."""

    def __init__(
        self,
        *,
        hub: HubPort,
        config: DisplayConfig,
        state: ControllerState,
        output: OutputPort,
        timer_factory: TimerFactory,
        interval: float = DEFAULT_STATS_INTERVAL,
        sources: Iterable[str] = (),
        error_poll_interval: float = ERROR_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("stats interval must be positive")
        self._hub = hub
        self._config = config
        self._state = state
        self._output = output
        self._timer_factory = timer_factory
        self._interval = interval
        self._sources: tuple[str, ...] = tuple(sources)
        self._error_poll_interval = error_poll_interval
        self._error_timer: TimerPort | None = None
        self._dump_timer: TimerPort | None = None
        self._running = False

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def sources(self) -> tuple[str, ...]:
        return self._sources

    @property
    def dump_timer(self) -> TimerPort | None:
        return self._dump_timer

    def start(self) -> None:
        """Start the error poll and, when targets exist, the dump timer."""

        if self._running:
            return
        self._running = True
        self._error_timer = self._timer_factory(self._error_poll_interval, self.check_for_errors)
        self._error_timer.start()
        self._replace_dump_timer()

    def stop(self) -> None:
        self._running = False
        if self._error_timer is not None:
            self._error_timer.cancel()
            self._error_timer = None
        self._cancel_dump_timer()

    def configure(self, *, interval: float | None = None, sources: Iterable[str] | None = None) -> None:
        """Change the dump interval and/or targets, replacing the dump timer."""

        if interval is not None:
            if interval <= 0:
                raise ValueError("stats interval must be positive")
            self._interval = interval
        if sources is not None:
            self._sources = tuple(sources)
        if self._running:
            self._replace_dump_timer()

    def check_for_errors(self) -> bool:
        """Refresh ``state.errored`` from the hub and return it."""

        snapshot = self._hub.get_status()
        self._state.errored = snapshot.error_count > 0
        return self._state.errored

    def dump_stats(self) -> int:
        """Write STATS lines for the targeted spokes; return how many were written."""

        if self._state.awaiting_line_input or not self._sources:
            return 0
        snapshot = self._hub.get_status()
        # "all" takes precedence so no spoke is printed twice
        dump_all = ALL_SOURCES in self._sources
        written = 0
        for spoke in snapshot.spokes:
            if dump_all or spoke.name in self._sources:
                self._output.write_line(format_stats_line(spoke, self._config.source_width))
                written += 1
        return written

    def _replace_dump_timer(self) -> None:
        self._cancel_dump_timer()
        if not self._sources:
            return
        self._dump_timer = self._timer_factory(self._interval, self.dump_stats)
        self._dump_timer.start()
        logger.debug("stats dump every %.3fs for %s", self._interval, ", ".join(self._sources))

    def _cancel_dump_timer(self) -> None:
        if self._dump_timer is not None:
            self._dump_timer.cancel()
            self._dump_timer = None


__all__ = ["ALL_SOURCES", "DEFAULT_STATS_INTERVAL", "ERROR_POLL_INTERVAL", "StatsPoller", "format_stats_line"]
