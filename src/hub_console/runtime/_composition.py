"""Runtime composition helpers wiring domain, application, and adapters.

Purpose
-------
Translate :class:`ConsoleSettings` into the live collaborators of one console
plugin. The helpers here keep wiring small, declarative, and testable.

Contents
--------
* :class:`ConsoleComponents` - aggregate of the wired collaborators.
* :func:`build_components` - composition root used by :class:`ConsolePlugin`.
* Adapter selection helpers for styling and inspection.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hub_console.adapters import PeriodicTimer, PlainStyler, RichConsoleAdapter, RichInspector, RichStyler
from hub_console.application.ports import HubPort, InspectorPort, OutputPort, StylerPort, TimerFactory
from hub_console.application.use_cases import (
    InteractiveController,
    LineFormatter,
    StatsPoller,
    ValueRenderer,
    create_render_log_event,
)
from hub_console.application.use_cases.render_event import RenderResult
from hub_console.domain import ControllerState, DisplayConfig

from ._settings import ConsoleSettings


@dataclass(slots=True)
class ConsoleComponents:
    """Live collaborators assembled for one plugin instance."""

    config: DisplayConfig
    state: ControllerState
    output: OutputPort
    styler: StylerPort
    inspector: InspectorPort
    formatter: LineFormatter
    controller: InteractiveController
    poller: StatsPoller
    render: Callable[[Any], RenderResult]


def create_display_config(settings: ConsoleSettings) -> DisplayConfig:
    return DisplayConfig(
        show_timestamp=settings.show_timestamp,
        compact_inspect=settings.compact_inspect,
        level_filter=settings.level,
        content_filter=settings.content_filter,
        source_width=settings.source_width,
        exit_on_error=settings.exit_on_error,
        monochrome=settings.monochrome,
    )


def create_styler(settings: ConsoleSettings) -> StylerPort:
    """Pick the monochrome or Rich styler."""

    if settings.monochrome:
        return PlainStyler()
    return RichStyler(styles=settings.styles)


def create_inspector(settings: ConsoleSettings) -> InspectorPort:
    return RichInspector(colors=not settings.monochrome)


def create_output(settings: ConsoleSettings) -> OutputPort:
    return RichConsoleAdapter(no_color=settings.monochrome)


def build_components(
    hub: HubPort,
    settings: ConsoleSettings,
    *,
    output: OutputPort | None = None,
    timer_factory: TimerFactory = PeriodicTimer,
    exit_process: Callable[[int], Any],
) -> ConsoleComponents:
    """Assemble the console pipeline for ``hub`` from resolved settings."""

    config = create_display_config(settings)
    state = ControllerState()
    sink = output if output is not None else create_output(settings)
    styler = create_styler(settings)
    inspector = create_inspector(settings)
    formatter = LineFormatter(styler=styler, renderer=ValueRenderer(inspector))
    poller = StatsPoller(
        hub=hub,
        config=config,
        state=state,
        output=sink,
        timer_factory=timer_factory,
        interval=settings.stats_interval,
        sources=settings.stats_sources,
    )
    controller = InteractiveController(
        hub=hub,
        config=config,
        state=state,
        output=sink,
        styler=styler,
        inspector=inspector,
        eval_enabled=settings.eval_enabled,
        stats_provider=lambda: formatter.stats,
    )
    render = create_render_log_event(
        config=config,
        state=state,
        formatter=formatter,
        output=sink,
        refresh_errors=poller.check_for_errors,
        exit_process=exit_process,
    )
    return ConsoleComponents(
        config=config,
        state=state,
        output=sink,
        styler=styler,
        inspector=inspector,
        formatter=formatter,
        controller=controller,
        poller=poller,
        render=render,
    )


__all__ = ["ConsoleComponents", "build_components"]
