"""Port describing the hub the console plugin attaches to.

Purpose
-------
Narrow the host hub to the four capabilities the console needs, so the
plugin receives its collaborator explicitly instead of reaching into global
state.

Contents
--------
* :class:`HubPort` - runtime-checkable protocol implemented by hubs.
* :data:`LogHandler` - callback signature for log-event subscribers.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from hub_console.domain.status import StatusSnapshot

LogHandler = Callable[[Any], None]


@runtime_checkable
class HubPort(Protocol):
    """Event hub producing log events and answering status queries."""

    name: str
    version: str

    def subscribe(self, handler: LogHandler) -> None:
        """Register ``handler`` for every log event published on the hub."""

    def get_status(self) -> StatusSnapshot:
        """Return a side-effect free snapshot of all spokes."""

    def request_shutdown(self) -> None:
        """Ask the hub to shut the process down gracefully."""

    def signal_ready(self, message: str) -> None:
        """Report that the calling plugin finished its startup."""


__all__ = ["HubPort", "LogHandler"]
