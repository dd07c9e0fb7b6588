"""CLI behaviour coverage for the click command group."""

from __future__ import annotations

import re

import lib_cli_exit_tools
import pytest
from click.testing import CliRunner

from hub_console import __init__conf__
from hub_console import cli as cli_mod
from hub_console.cli import summary_info
from hub_console.runtime import ConsoleSettings

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Return ``text`` without ANSI control sequences.

    Examples
    --------
    >>> strip_ansi("\x1b[31mred\x1b[0m")
    'red'
    """

    return ANSI_RE.sub("", text)


def run_cli(args: list[str] | None = None, env: dict[str, str] | None = None) -> tuple[int, str, BaseException | None]:
    """Invoke the click group with ``CliRunner`` and capture output."""

    runner = CliRunner()
    result = runner.invoke(cli_mod.cli, args or [], prog_name=__init__conf__.shell_command, env=env)
    return result.exit_code, result.output, result.exception


def test_cli_without_subcommand_prints_summary() -> None:
    exit_code, stdout, _ = run_cli()

    assert exit_code == 0
    assert stdout == summary_info()


def test_cli_info_command_matches_summary() -> None:
    exit_code, stdout, _ = run_cli(["info"])

    assert exit_code == 0
    assert stdout.startswith("Info for hub_console:")
    assert f"version       = {__init__conf__.version}" in stdout


def test_cli_version_option() -> None:
    exit_code, stdout, _ = run_cli(["--version"])

    assert exit_code == 0
    assert stdout.strip() == __init__conf__.version


def test_cli_no_traceback_option(monkeypatch: pytest.MonkeyPatch) -> None:
    """`--no-traceback` should disable verbose tracebacks for subsequent commands."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    exit_code, _stdout, _exception = run_cli(["--no-traceback", "info"])

    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback is False
    assert lib_cli_exit_tools.config.traceback_force_color is False


def test_demo_options_become_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    async def fake_demo(settings: ConsoleSettings, *, hub_name: str, duration: float) -> None:
        captured.update(settings=settings, hub_name=hub_name, duration=duration)

    monkeypatch.setattr(cli_mod, "_run_demo", fake_demo)

    exit_code, _stdout, exception = run_cli(
        [
            "demo",
            "--timestamp",
            "--expanded",
            "--level",
            "error",
            "--stats",
            "Worker1",
            "--stats",
            "Worker2",
            "--source-width",
            "10",
            "--no-eval",
            "--hub-name",
            "Orders",
            "--duration",
            "1.5",
        ],
        env={"HUB_CONSOLE_SOURCE_WIDTH": "4", "HUB_CONSOLE_STATS_INTERVAL": "0.5"},
    )

    assert exit_code == 0, exception
    settings = captured["settings"]
    assert isinstance(settings, ConsoleSettings)
    assert settings.show_timestamp is True
    assert settings.compact_inspect is False
    assert settings.level_filter == "error"
    assert settings.stats_sources == ("Worker1", "Worker2")
    assert settings.source_width == 10
    assert settings.stats_interval == 0.5
    assert settings.eval_enabled is False
    assert captured["hub_name"] == "Orders"
    assert captured["duration"] == 1.5


def test_demo_rejects_unknown_level() -> None:
    exit_code, stdout, _ = run_cli(["demo", "--level", "loud"])

    assert exit_code == 2
    assert "Invalid value for '--level'" in stdout


def test_demo_renders_sample_spoke() -> None:
    exit_code, stdout, exception = run_cli(["demo", "--monochrome", "--duration", "0.05", "--source-width", "10"])

    assert exit_code == 0, exception
    text = strip_ansi(stdout)
    assert "Powered by hub v" in text
    assert "|LOG|TestSpoke |example log msg" in text
    assert "|ERR|TestSpoke |example error msg" in text
    assert "|LOG|TestSpoke |example with lots of arguments, 1, 2, 3, 4, 5, six" in text


def test_main_restores_traceback_preferences(monkeypatch: pytest.MonkeyPatch) -> None:
    """main() must leave the global traceback configuration as it found it."""

    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback", True, raising=False)
    monkeypatch.setattr(lib_cli_exit_tools.config, "traceback_force_color", True, raising=False)

    recorded: dict[str, object] = {}

    def fake_run_cli(command, argv=None, *, prog_name=None, **_):
        lib_cli_exit_tools.config.traceback = False
        lib_cli_exit_tools.config.traceback_force_color = False
        recorded.update(command=command, argv=argv, prog_name=prog_name)
        return 0

    monkeypatch.setattr(lib_cli_exit_tools, "run_cli", fake_run_cli)

    assert cli_mod.main(["info"]) == 0
    assert recorded == {"command": cli_mod.cli, "argv": ["info"], "prog_name": __init__conf__.shell_command}
    assert lib_cli_exit_tools.config.traceback is True
    assert lib_cli_exit_tools.config.traceback_force_color is True
