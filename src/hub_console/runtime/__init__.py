"""Runtime façade attaching the console plugin to a hub.

Purpose
-------
Expose a stable entry point (:class:`ConsolePlugin`, :func:`attach`) that host
applications use instead of wiring the inner layers themselves. The hub is
passed in explicitly; the plugin keeps no global state.

Contents
--------
* :class:`ConsolePlugin` - lifecycle (start/stop), event and key entry points.
* :func:`attach` - build settings, create and start a plugin in one call.
* :func:`banner_lines` - startup banner shown before the first log line.

System Role
-----------
Outer shell of the clean-architecture stack: the composition root in
:mod:`._composition` builds adapters and use cases; this module orders the
startup sequence (banner, subscription, keyboard, timers, ready signal).
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any, Mapping, TextIO

from hub_console.adapters import PeriodicTimer, TerminalKeyboard
from hub_console.adapters.hub import DEFAULT_HUB_NAME
from hub_console.application.ports import HubPort, OutputPort, StylerPort, TimerFactory
from hub_console.application.use_cases.controller import KEY_HELP
from hub_console.application.use_cases.render_event import RenderResult
from hub_console.domain import ControllerState, DisplayConfig

from ._composition import ConsoleComponents, build_components
from ._settings import ConsoleSettings, build_settings, environment_overrides

logger = logging.getLogger(__name__)

PLUGIN_NAME = "HubConsole"
READY_MESSAGE = "console ready"

_LOGO: tuple[str, ...] = (
    "  ____    ____  ",
    "  \\\\\\\\\\  /////  ",
    "   \\\\\\\\\\/////   ",
    "    \\\\\\\\////    ",
    "     \\\\\\///     ",
    "      \\\\//      ",
    "       \\/       ",
)
_LOGO_BLANK = " " * len(_LOGO[0])


def banner_lines(
    hub: HubPort,
    styler: StylerPort,
    *,
    eval_enabled: bool,
    started: datetime | None = None,
) -> list[str]:
    """Return the startup banner: logo column plus hub identity and key help.

    The hub name is shown only when it differs from the default hub name.
    """
    moment = started if started is not None else datetime.now(timezone.utc)
    prefix = f"{hub.name} - " if hub.name != DEFAULT_HUB_NAME else ""
    texts = [
        f" {prefix}Powered by hub v{hub.version}",
        f" started on {moment.isoformat()}",
    ]
    texts.extend(f" press {key} to {action}" for key, action in KEY_HELP if key != "e" or eval_enabled)
    lines = []
    for index, text in enumerate(texts):
        logo = _LOGO[index] if index < len(_LOGO) else _LOGO_BLANK
        lines.append(styler.style(logo, "banner.logo") + styler.style(text, "banner.text"))
    return lines


class ConsolePlugin:
    """Render hub log events to the terminal and react to keypresses.

    Parameters
    ----------
    hub:
        Collaborator implementing :class:`HubPort`.
    settings:
        Resolved :class:`ConsoleSettings`; defaults to :func:`build_settings`.
    output:
        Optional :class:`OutputPort`; defaults to a Rich console on stdout.
    keyboard_stream:
        Stream read for keypresses; defaults to ``sys.stdin``. Keys are only
        read when the stream is an interactive terminal.
    timer_factory:
        Factory for the poll timers; defaults to :class:`PeriodicTimer`.
    exit_process:
        Called with the exit code after an error line when ``exit_on_error``
        is enabled; defaults to :func:`sys.exit`.
    """

    name = PLUGIN_NAME

    def __init__(
        self,
        hub: HubPort,
        settings: ConsoleSettings | None = None,
        *,
        output: OutputPort | None = None,
        keyboard_stream: TextIO | None = None,
        timer_factory: TimerFactory = PeriodicTimer,
        exit_process: Callable[[int], Any] = sys.exit,
    ) -> None:
        self._hub = hub
        self._settings = settings if settings is not None else build_settings()
        self._components: ConsoleComponents = build_components(
            hub,
            self._settings,
            output=output,
            timer_factory=timer_factory,
            exit_process=exit_process,
        )
        self._keyboard = TerminalKeyboard(self.handle_key, stream=keyboard_stream)
        self._loop: asyncio.AbstractEventLoop | None = None
        self._previous_exception_handler: Any = None
        self._started = False

    @property
    def hub(self) -> HubPort:
        return self._hub

    @property
    def settings(self) -> ConsoleSettings:
        return self._settings

    @property
    def config(self) -> DisplayConfig:
        return self._components.config

    @property
    def state(self) -> ControllerState:
        return self._components.state

    @property
    def components(self) -> ConsoleComponents:
        return self._components

    @property
    def stats(self) -> Mapping[str, int]:
        """Plugin statistics (currently the rendered line counter)."""

        return self._components.formatter.stats

    @property
    def interactive(self) -> bool:
        return self._keyboard.attached

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Print the banner, subscribe, start keyboard and timers, signal ready.

        Must be called from within a running event loop unless ``loop`` is
        given.
        """
        if self._started:
            return
        self._loop = loop if loop is not None else asyncio.get_running_loop()
        components = self._components
        for line in banner_lines(self._hub, components.styler, eval_enabled=self._settings.eval_enabled):
            components.output.write_line(line)
        self._hub.subscribe(self.handle_event)
        self._keyboard.attach(self._loop)
        components.poller.start()
        if self._settings.catch_unhandled:
            self._previous_exception_handler = self._loop.get_exception_handler()
            self._loop.set_exception_handler(self._report_unhandled)
        self._started = True
        self._hub.signal_ready(READY_MESSAGE)

    def stop(self) -> None:
        """Stop timers, release the terminal and restore the loop handler."""

        if not self._started:
            return
        self._started = False
        self._components.poller.stop()
        self._keyboard.detach()
        if self._loop is not None and self._settings.catch_unhandled:
            self._loop.set_exception_handler(self._previous_exception_handler)
            self._previous_exception_handler = None

    def handle_event(self, payload: Any) -> RenderResult:
        """Hub subscriber: render ``payload`` if it passes every gate.

        Hubs offer no unsubscribe, so events arriving after :meth:`stop` are
        dropped here.
        """
        if not self._started:
            return {"ok": False, "reason": "stopped"}
        return self._components.render(payload)

    def handle_key(self, key: str) -> None:
        self._components.controller.handle_key(key)

    def configure_stats(self, *, interval: float | None = None, sources: Iterable[str] | None = None) -> None:
        """Change the stats dump interval or target spokes at runtime."""

        self._components.poller.configure(interval=interval, sources=sources)

    def _report_unhandled(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        styler = self._components.styler
        message = context.get("message", "unhandled exception")
        exception = context.get("exception")
        detail = f"{message}: {exception!r}" if exception is not None else message
        self._components.output.write_line(styler.style("UNHANDLED EXCEPTION", "error") + f" {detail}")
        logger.error("unhandled exception in event loop: %s", detail, exc_info=exception)


def attach(
    hub: HubPort,
    settings: ConsoleSettings | None = None,
    *,
    output: OutputPort | None = None,
    **values: Any,
) -> ConsolePlugin:
    """Create a :class:`ConsolePlugin` for ``hub``, start it, and return it.

    Keyword ``values`` and ``HUB_CONSOLE_*`` environment variables are merged
    via :func:`build_settings`. Call from within a running event loop.
    """
    plugin = ConsolePlugin(hub, build_settings(settings, **values), output=output)
    plugin.start()
    return plugin


__all__ = [
    "ConsolePlugin",
    "ConsoleSettings",
    "PLUGIN_NAME",
    "READY_MESSAGE",
    "attach",
    "banner_lines",
    "build_settings",
    "environment_overrides",
]
