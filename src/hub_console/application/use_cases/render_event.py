"""Use case orchestrating the rendering of a single hub log event.

Purpose
-------
Tie together payload validation, the forced error-flag refresh, gating,
formatting, output and the optional exit-on-error policy.

Contents
--------
* :data:`RenderResult` - diagnostic dictionary returned per event.
* :func:`create_render_log_event` factory returning the subscriber callable.

System Role
-----------
Application-layer orchestrator registered with the hub by the composition
root. It never raises for bad input: malformed payloads and filtered events
come back as ``{"ok": False, "reason": ...}``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from hub_console.application.ports import OutputPort
from hub_console.domain import ControllerState, DisplayConfig, LogEvent, LogLevel

from .filtering import passes
from .formatting import LineFormatter

logger = logging.getLogger(__name__)

RenderResult = dict[str, Any]

_REFRESH_LEVELS = frozenset({LogLevel.ERROR, LogLevel.READY})
ERROR_EXIT_CODE = 1


@dataclass(frozen=True)
class _RenderToolkit:
    config: DisplayConfig
    state: ControllerState
    formatter: LineFormatter
    output: OutputPort
    refresh_errors: Callable[[], Any] | None
    exit_process: Callable[[int], Any]


def create_render_log_event(
    *,
    config: DisplayConfig,
    state: ControllerState,
    formatter: LineFormatter,
    output: OutputPort,
    refresh_errors: Callable[[], Any] | None = None,
    exit_process: Callable[[int], Any],
) -> Callable[[Any], RenderResult]:
    """Build the hub subscriber that renders log events.

    Parameters
    ----------
    config / state:
        Shared display configuration and controller state.
    formatter:
        :class:`LineFormatter` producing the output line.
    output:
        Adapter implementing :class:`OutputPort`.
    refresh_errors:
        Called before rendering ``error`` and ``ready`` events so the status
        glyph reflects the hub's current error count.
    exit_process:
        Invoked with :data:`ERROR_EXIT_CODE` after an ``error`` line was
        rendered while ``config.exit_on_error`` is set.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from hub_console.adapters.styling import PlainStyler, RichInspector
    >>> from hub_console.application.use_cases.formatting import ValueRenderer
    >>> class _Out:
    ...     def __init__(self): self.lines = []
    ...     def write_line(self, line): self.lines.append(line)
    ...     def write(self, text): pass
    ...     def backspace(self): pass
    >>> out = _Out()
    >>> render = create_render_log_event(
    ...     config=DisplayConfig(source_width=4), state=ControllerState(),
    ...     formatter=LineFormatter(styler=PlainStyler(), renderer=ValueRenderer(RichInspector(colors=False))),
    ...     output=out, exit_process=lambda code: None)
    >>> ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
    >>> render({'level': 'debug', 'timestamp': ts, 'source': 'db', 'message': ['hi']})['ok']
    True
    >>> out.lines
    ['✓|DBG|db  |hi']
    >>> render({'level': 'debug', 'source': 'db'})
    {'ok': False, 'reason': 'malformed'}
    """

    toolkit = _RenderToolkit(
        config=config,
        state=state,
        formatter=formatter,
        output=output,
        refresh_errors=refresh_errors,
        exit_process=exit_process,
    )

    def render(payload: Any) -> RenderResult:
        event = LogEvent.from_payload(payload)
        if event is None:
            return {"ok": False, "reason": "malformed"}
        if event.level in _REFRESH_LEVELS and toolkit.refresh_errors is not None:
            toolkit.refresh_errors()
        reason = _suppression_reason(toolkit, event)
        if reason is not None:
            return {"ok": False, "reason": reason}
        line = toolkit.formatter.format(event, toolkit.config, toolkit.state)
        toolkit.output.write_line(line)
        if event.level is LogLevel.ERROR and toolkit.config.exit_on_error:
            logger.info("exiting after error event from %s", event.source)
            toolkit.exit_process(ERROR_EXIT_CODE)
        return {"ok": True, "line": line}

    return render


def _suppression_reason(toolkit: _RenderToolkit, event: LogEvent) -> str | None:
    if toolkit.state.awaiting_line_input:
        return "awaiting_input"
    if toolkit.config.paused:
        return "paused"
    if not passes(event, toolkit.config):
        return "filtered"
    return None


__all__ = ["ERROR_EXIT_CODE", "RenderResult", "create_render_log_event"]
