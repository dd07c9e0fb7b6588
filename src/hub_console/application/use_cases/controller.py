"""Keypress-driven control of the running console.

Purpose
-------
Translate single keypresses into display changes and ad-hoc queries, and run
the line-input prompt used to enter a content filter or an evaluation
statement.

Contents
--------
* :data:`KEY_HELP` - key bindings shown in the startup banner.
* :class:`InteractiveController` - ``Idle`` / ``AwaitingLineInput`` state machine.

System Role
-----------
Fed by :class:`hub_console.adapters.keyboard.TerminalKeyboard`. While a prompt
is open the controller owns the input stream: no other binding fires and the
render pipeline suppresses log lines until the line is submitted or
cancelled.
"""

from __future__ import annotations

import builtins
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from hub_console.application.ports import HubPort, InspectorPort, OutputPort, StylerPort
from hub_console.domain import ControllerState, DisplayConfig, LinePurpose

logger = logging.getLogger(__name__)

KEY_HELP: tuple[tuple[str, str], ...] = (
    ("q", "shutdown"),
    ("f", "filter"),
    ("t", "toggle timestamps"),
    ("c", "toggle compact inspect"),
    ("s", "print status for the hub"),
    ("p", "pause output"),
    ("e", "evaluate statement"),
)

FILTER_PROMPT = "Enter new filter:"
EVAL_PROMPT = "Enter statement:"
PAUSE_NOTICE = "Pausing, press p again to un-pause"
NO_FILTER_NOTICE = "Continuing with no filtering"

_INTERRUPT = "\x03"
_ESCAPE = "\x1b"
_SUBMIT_KEYS = frozenset({"\r", "\n"})
_ERASE_KEYS = frozenset({"\x7f", "\b"})


class InteractiveController:
    """Dispatch keypresses against the shared display state.

    Examples
    --------
    >>> class _Out:
    ...     def __init__(self): self.lines = []
    ...     def write_line(self, line): self.lines.append(line)
    ...     def write(self, text): pass
    ...     def backspace(self): pass
    >>> from hub_console.adapters.styling import PlainStyler, RichInspector
    >>> config, state = DisplayConfig(), ControllerState()
    >>> controller = InteractiveController(
    ...     hub=None, config=config, state=state, output=_Out(),
    ...     styler=PlainStyler(), inspector=RichInspector(colors=False))
    >>> controller.handle_key('t')
    >>> config.show_timestamp
    True
    """

    def __init__(
        self,
        *,
        hub: HubPort,
        config: DisplayConfig,
        state: ControllerState,
        output: OutputPort,
        styler: StylerPort,
        inspector: InspectorPort,
        eval_enabled: bool = True,
        stats_provider: Callable[[], Mapping[str, Any]] | None = None,
    ) -> None:
        self._hub = hub
        self._config = config
        self._state = state
        self._output = output
        self._styler = styler
        self._inspector = inspector
        self._eval_enabled = eval_enabled
        self._stats_provider = stats_provider
        self._bindings: dict[str, Callable[[], None]] = {
            "q": self._quit,
            _INTERRUPT: self._quit,
            "t": self._toggle_timestamp,
            "c": self._toggle_compact,
            "s": self.print_status,
            "p": self._toggle_pause,
            "f": self._prompt_filter,
        }
        if eval_enabled:
            self._bindings["e"] = self._prompt_eval

    @property
    def eval_enabled(self) -> bool:
        return self._eval_enabled

    def handle_key(self, key: str) -> None:
        """Process one keypress (or one whole escape sequence)."""

        if self._state.awaiting_line_input:
            self._edit_line(key)
            return
        action = self._bindings.get(key if len(key) != 1 else key.lower())
        if action is not None:
            action()

    def print_status(self) -> None:
        """Print the hub status snapshot, expanded."""

        snapshot = self._hub.get_status()
        self._output.write_line(self._inspector.inspect(snapshot.to_dict(), compact=False))

    def namespace(self) -> dict[str, Any]:
        """Names visible to statements typed at the ``e`` prompt."""

        return {
            "controller": self,
            "config": self._config,
            "state": self._state,
            "hub": self._hub,
            "status": self._hub.get_status,
            "stats": self._stats_provider if self._stats_provider is not None else dict,
        }

    def _notice(self, text: str) -> None:
        self._output.write_line(self._styler.style(text, "notice"))

    def _error(self, text: str) -> None:
        self._output.write_line(self._styler.style(text, "error"))

    def _quit(self) -> None:
        logger.info("shutdown requested from keyboard")
        self._hub.request_shutdown()

    def _toggle_timestamp(self) -> None:
        self._config.toggle_timestamp()

    def _toggle_compact(self) -> None:
        self._config.toggle_compact()

    def _toggle_pause(self) -> None:
        if self._config.toggle_pause():
            self._notice(PAUSE_NOTICE)

    def _prompt_filter(self) -> None:
        self._open_prompt(LinePurpose.FILTER, FILTER_PROMPT)

    def _prompt_eval(self) -> None:
        self._open_prompt(LinePurpose.EVAL, EVAL_PROMPT)

    def _open_prompt(self, purpose: LinePurpose, prompt: str) -> None:
        self._state.begin_line_input(purpose)
        self._output.write(f"{self._styler.style(prompt, 'notice')} ")

    def _edit_line(self, key: str) -> None:
        if key in _SUBMIT_KEYS:
            self._submit()
        elif key in (_ESCAPE, _INTERRUPT):
            self._state.end_line_input()
            self._output.write_line("")
        elif key in _ERASE_KEYS:
            if self._state.line_buffer:
                self._state.line_buffer = self._state.line_buffer[:-1]
                self._output.backspace()
        elif len(key) == 1 and key.isprintable():
            self._state.line_buffer += key
            self._output.write(key)

    def _submit(self) -> None:
        purpose = self._state.line_purpose
        text = self._state.end_line_input()
        self._output.write_line("")
        if purpose is LinePurpose.FILTER:
            self._apply_filter(text)
        elif purpose is LinePurpose.EVAL:
            self._evaluate(text)

    def _apply_filter(self, text: str) -> None:
        if not text:
            self._config.clear_content_filter()
            self._notice(NO_FILTER_NOTICE)
            return
        try:
            pattern = re.compile(text, re.IGNORECASE)
        except re.error as exc:
            self._error(f"Invalid filter {text!r}: {exc}")
            return
        self._config.set_content_filter(pattern)
        self._notice(f"Filtering on {text}")

    def _evaluate(self, statement: str) -> None:
        if not statement:
            return
        try:
            result = eval(statement, {"__builtins__": builtins}, self.namespace())  # noqa: S307
        except Exception as exc:
            logger.debug("evaluation of %r failed", statement, exc_info=True)
            self._error(f"{type(exc).__name__}: {exc}")
            return
        self._output.write_line(self._inspector.inspect(result, compact=False))


__all__ = [
    "EVAL_PROMPT",
    "FILTER_PROMPT",
    "InteractiveController",
    "KEY_HELP",
    "NO_FILTER_NOTICE",
    "PAUSE_NOTICE",
]
