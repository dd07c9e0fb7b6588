"""Click command line for the hub console.

Purpose
-------
Expose ``hub-console`` / ``python -m hub_console`` with an ``info`` banner and
a ``demo`` command that attaches the console to an in-process hub driven by a
sample spoke.

Contents
--------
* :func:`cli` - root group with ``--version``, ``--traceback`` and ``--verbose``.
* :func:`demo` - run the console against :class:`LocalHub` and the demo spoke.
* :func:`main` - entry point delegating exit-code handling to
  :mod:`lib_cli_exit_tools`.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Any, Sequence

import click
import lib_cli_exit_tools
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler

from . import __init__conf__
from . import config as console_config
from .adapters.hub import DEFAULT_HUB_NAME, LocalHub
from .demo import run_demo_spoke
from .domain import LogLevel
from .runtime import ConsolePlugin, ConsoleSettings, build_settings, environment_overrides

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LEVEL_CHOICES = ["any", *(level.value for level in LogLevel)]


def summary_info() -> str:
    """Return the metadata banner printed by ``info``."""

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log diagnostics to stderr.")
@click.pass_context
def cli(ctx: click.Context, traceback: bool, verbose: bool) -> None:
    """Render hub log events on the terminal."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    _configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--timestamp/--no-timestamp", "show_timestamp", default=None, help="Show the timestamp column.")
@click.option("--compact/--expanded", "compact_inspect", default=None, help="Inspect objects on one line or expanded.")
@click.option("--level", "level_filter", type=click.Choice(LEVEL_CHOICES, case_sensitive=False), default=None, help="Only show this level.")
@click.option("--filter", "content_filter", default=None, help="Only show events whose JSON contains this text.")
@click.option("--exit-on-error/--no-exit-on-error", default=None, help="Exit with status 1 after an error line.")
@click.option("--source-width", type=click.IntRange(min=0), default=None, help="Width of the source column.")
@click.option(
    "--stats-interval",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds between STATS dumps.",
)
@click.option("--stats", "stats_sources", multiple=True, help="Spoke to dump stats for; 'all' for every spoke.")
@click.option("--monochrome/--color", default=None, help="Disable colours.")
@click.option("--eval/--no-eval", "eval_enabled", default=None, help="Allow the 'e' evaluation prompt.")
@click.option("--dotenv/--no-dotenv", "use_dotenv", default=None, help="Load HUB_CONSOLE_* settings from the nearest .env.")
@click.option("--hub-name", default=DEFAULT_HUB_NAME, show_default=True, help="Name of the demo hub.")
@click.option(
    "--duration",
    type=click.FloatRange(min=0),
    default=0.0,
    show_default=True,
    help="Stop after this many seconds (0 runs until 'q' or Ctrl-C).",
)
@click.pass_context
def demo(ctx: click.Context, use_dotenv: bool | None, hub_name: str, duration: float, **options: Any) -> None:
    """Attach the console to a demo hub with one sample spoke."""

    if console_config.dotenv_requested(use_dotenv if _given(ctx, "use_dotenv") else None):
        console_config.enable_dotenv()
    settings = _settings_from_options({name: value for name, value in options.items() if _given(ctx, name)})
    asyncio.run(_run_demo(settings, hub_name=hub_name, duration=duration))


def _given(ctx: click.Context, name: str) -> bool:
    return ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE


def _settings_from_options(options: dict[str, Any]) -> ConsoleSettings:
    """Explicit command-line options win over ``HUB_CONSOLE_*`` variables."""

    values = {key: value for key, value in options.items() if value is not None}
    return build_settings(environ={}, **{**environment_overrides(), **values})


async def _run_demo(settings: ConsoleSettings, *, hub_name: str, duration: float) -> None:
    hub = LocalHub(name=hub_name, version=__init__conf__.version)
    plugin = ConsolePlugin(hub, settings)
    loop = asyncio.get_running_loop()
    with contextlib.suppress(NotImplementedError, RuntimeError):
        loop.add_signal_handler(signal.SIGINT, hub.request_shutdown)
    plugin.start()
    spoke_task = asyncio.create_task(run_demo_spoke(hub))
    try:
        if duration > 0:
            with contextlib.suppress(asyncio.TimeoutError):
                await asyncio.wait_for(hub.wait_for_shutdown(), timeout=duration)
        else:
            await hub.wait_for_shutdown()
    finally:
        spoke_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await spoke_task
        plugin.stop()
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.remove_signal_handler(signal.SIGINT)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code; traceback preferences are restored afterwards."""

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
