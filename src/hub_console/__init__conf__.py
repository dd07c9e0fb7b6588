"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "hub_console"
title = "Rich console plugin rendering log events from a publish/subscribe hub"
version = "0.1.0"
homepage = "https://pypi.org/project/hub_console/"
author = "hub_console contributors"
shell_command = "hub-console"


def print_info(writer: Callable[[str], None] = print) -> None:
    """Emit the metadata banner through ``writer``, one newline-terminated line at a time."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label.ljust(pad)} = {value}\n")
