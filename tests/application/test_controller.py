from __future__ import annotations

import re

import pytest

from hub_console.adapters.styling import PlainStyler, RichInspector
from hub_console.application.use_cases.controller import (
    EVAL_PROMPT,
    FILTER_PROMPT,
    NO_FILTER_NOTICE,
    PAUSE_NOTICE,
    InteractiveController,
)
from hub_console.domain import ControllerState, DisplayConfig, LinePurpose


@pytest.fixture
def config() -> DisplayConfig:
    return DisplayConfig()


@pytest.fixture
def state() -> ControllerState:
    return ControllerState()


@pytest.fixture
def controller(hub, config, state, output) -> InteractiveController:
    return InteractiveController(
        hub=hub,
        config=config,
        state=state,
        output=output,
        styler=PlainStyler(),
        inspector=RichInspector(colors=False),
        stats_provider=lambda: {"lines_rendered": 7},
    )


def _type(controller: InteractiveController, text: str) -> None:
    for key in text:
        controller.handle_key(key)


def test_q_requests_shutdown(controller, hub) -> None:
    controller.handle_key("q")

    assert hub.shutdown_requested


def test_ctrl_c_requests_shutdown(controller, hub) -> None:
    controller.handle_key("\x03")

    assert hub.shutdown_requested


def test_t_and_c_toggle_display_options(controller, config) -> None:
    controller.handle_key("t")
    controller.handle_key("C")

    assert config.show_timestamp is True
    assert config.compact_inspect is False


def test_p_pauses_with_notice_and_resumes_silently(controller, config, output) -> None:
    controller.handle_key("p")
    assert config.paused is True
    assert output.lines == [PAUSE_NOTICE]

    controller.handle_key("p")
    assert config.paused is False
    assert output.lines == [PAUSE_NOTICE]


def test_s_prints_expanded_status(controller, hub, output) -> None:
    hub.register("Worker1").stats["jobs"] = 2

    controller.handle_key("s")

    assert len(output.lines) == 1
    assert "'Worker1'" in output.lines[0]
    assert "'jobs': 2" in output.lines[0]
    assert "\n" in output.lines[0]


def test_unbound_keys_are_ignored(controller, config, output) -> None:
    controller.handle_key("x")
    controller.handle_key("\x1b[A")

    assert output.lines == []
    assert config == DisplayConfig()


def test_filter_prompt_compiles_case_insensitive_pattern(controller, config, state, output) -> None:
    controller.handle_key("f")
    assert state.line_purpose is LinePurpose.FILTER
    assert output.fragments == [f"{FILTER_PROMPT} "]

    _type(controller, "worker")
    controller.handle_key("\r")

    assert state.awaiting_line_input is False
    assert isinstance(config.content_filter, re.Pattern)
    assert config.content_filter.pattern == "worker"
    assert config.content_filter.flags & re.IGNORECASE
    assert output.lines[-1] == "Filtering on worker"


def test_bindings_do_not_fire_while_typing(controller, config, hub) -> None:
    controller.handle_key("f")
    _type(controller, "tqp")

    assert config.show_timestamp is False
    assert config.paused is False
    assert not hub.shutdown_requested


def test_empty_filter_clears_existing_filter(controller, config, output) -> None:
    config.set_content_filter("old")

    controller.handle_key("f")
    controller.handle_key("\n")

    assert config.content_filter is None
    assert output.lines[-1] == NO_FILTER_NOTICE


def test_invalid_filter_keeps_previous_filter(controller, config, output) -> None:
    config.set_content_filter("old")

    controller.handle_key("f")
    _type(controller, "([")
    controller.handle_key("\r")

    assert config.content_filter == "old"
    assert output.lines[-1].startswith("Invalid filter '(['")


def test_backspace_edits_buffer(controller, state, output) -> None:
    controller.handle_key("f")
    _type(controller, "ab")
    controller.handle_key("\x7f")
    controller.handle_key("\x7f")
    controller.handle_key("\x7f")

    assert state.line_buffer == ""
    assert output.backspaces == 2


def test_escape_cancels_prompt(controller, config, state) -> None:
    controller.handle_key("f")
    _type(controller, "abc")
    controller.handle_key("\x1b")

    assert state.awaiting_line_input is False
    assert config.content_filter is None


def test_eval_prints_result(controller, output) -> None:
    controller.handle_key("e")
    assert output.fragments == [f"{EVAL_PROMPT} "]

    _type(controller, "config.source_width + 1")
    controller.handle_key("\r")

    assert output.lines[-1] == "17"


def test_eval_namespace_exposes_stats(controller, output) -> None:
    controller.handle_key("e")
    _type(controller, "stats()")
    controller.handle_key("\r")

    assert output.lines[-1] == "{\n    'lines_rendered': 7\n}"


def test_eval_errors_are_reported(controller, output) -> None:
    controller.handle_key("e")
    _type(controller, "1/0")
    controller.handle_key("\r")

    assert output.lines[-1] == "ZeroDivisionError: division by zero"


def test_eval_can_be_disabled(hub, config, state, output) -> None:
    controller = InteractiveController(
        hub=hub,
        config=config,
        state=state,
        output=output,
        styler=PlainStyler(),
        inspector=RichInspector(colors=False),
        eval_enabled=False,
    )

    controller.handle_key("e")

    assert controller.eval_enabled is False
    assert state.awaiting_line_input is False
