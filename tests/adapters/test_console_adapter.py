from __future__ import annotations

from io import StringIO

from rich.console import Console

from hub_console.adapters.console.rich_console import RichConsoleAdapter


def test_write_line_keeps_ansi_styling(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)

    adapter.write_line("\x1b[41m✓|ERR|Worker1 |\x1b[0mboom")

    assert record_console.export_text() == "✓|ERR|Worker1 |boom\n"


def test_write_line_does_not_interpret_markup(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)

    adapter.write_line("[bold]literal[/bold] {'a': 1}")

    assert record_console.export_text() == "[bold]literal[/bold] {'a': 1}\n"


def test_write_has_no_newline(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)

    adapter.write("Enter new filter: ")
    adapter.write("ab")

    assert record_console.export_text() == "Enter new filter: ab"


def test_long_lines_are_not_wrapped() -> None:
    console = Console(file=StringIO(), record=True, width=20)
    adapter = RichConsoleAdapter(console=console)

    adapter.write_line("x" * 50)

    assert console.export_text() == "x" * 50 + "\n"


def test_backspace_moves_cursor_on_terminals() -> None:
    stream = StringIO()
    console = Console(file=stream, force_terminal=True, width=80)
    adapter = RichConsoleAdapter(console=console)

    adapter.write("ab")
    adapter.backspace()

    assert "\x1b[1D" in stream.getvalue()


def test_no_color_strips_styles() -> None:
    adapter = RichConsoleAdapter(no_color=True)

    assert adapter.console.no_color is True
