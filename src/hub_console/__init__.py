"""Public package surface of the hub console.

Attach the console to a hub with :func:`attach` (or build a
:class:`ConsolePlugin` directly) from within a running event loop::

    hub = LocalHub(name="Orders")
    plugin = attach(hub, show_timestamp=True)
"""

from __future__ import annotations

from .adapters.hub import LocalHub, Spoke
from .domain import DisplayConfig, LogEvent, LogLevel, SpokeStatus, StatusSnapshot
from .runtime import ConsolePlugin, ConsoleSettings, attach, build_settings

__all__ = [
    "ConsolePlugin",
    "ConsoleSettings",
    "DisplayConfig",
    "LocalHub",
    "LogEvent",
    "LogLevel",
    "Spoke",
    "SpokeStatus",
    "StatusSnapshot",
    "attach",
    "build_settings",
]
