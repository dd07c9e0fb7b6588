"""In-process hub implementing :class:`HubPort`.

Purpose
-------
Provide a small publish/subscribe hub with named spokes so the console can be
exercised from the CLI ``demo`` command and from tests without a real host
application.

Contents
--------
* :class:`Spoke` - named event producer with a status and a stats mapping.
* :class:`LocalHub` - subscriber fan-out, status snapshots, shutdown signal.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from hub_console.application.ports.hub import HubPort, LogHandler
from hub_console.domain import SpokeStatus, StatusSnapshot

logger = logging.getLogger(__name__)

DEFAULT_HUB_NAME = "Hub"


class Spoke:
    """Named component attached to a :class:`LocalHub`.

    ``error`` moves the spoke into the ``error`` status and ``ready`` into
    ``ready``; ``stats`` is a plain dict the spoke updates as it likes.
    """

    def __init__(self, hub: "LocalHub", name: str) -> None:
        self.hub = hub
        self.name = name
        self.status = "initialized"
        self.stats: dict[str, Any] = {}

    def log(self, *items: Any) -> None:
        self.hub.publish_log("log", self.name, items)

    def debug(self, *items: Any) -> None:
        self.hub.publish_log("debug", self.name, items)

    def warn(self, *items: Any) -> None:
        self.hub.publish_log("warning", self.name, items)

    def error(self, *items: Any) -> None:
        self.status = "error"
        self.hub.publish_log("error", self.name, items)

    def ready(self, *items: Any) -> None:
        self.status = "ready"
        self.hub.publish_log("ready", self.name, items)

    def to_status(self) -> SpokeStatus:
        return SpokeStatus(name=self.name, status=self.status, stats=self.stats)


class LocalHub(HubPort):
    """Synchronous fan-out hub living on the caller's event loop.

    Examples
    --------
    >>> hub = LocalHub(name="Demo", version="1.0")
    >>> seen = []
    >>> hub.subscribe(seen.append)
    >>> worker = hub.register("Worker1")
    >>> worker.error("boom")
    >>> seen[0]["level"], seen[0]["source"], seen[0]["message"]
    ('error', 'Worker1', ('boom',))
    >>> hub.get_status().error_count
    1
    """

    def __init__(
        self,
        *,
        name: str = DEFAULT_HUB_NAME,
        version: str = "0.0.0",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.name = name
        self.version = version
        self._clock = clock if clock is not None else (lambda: datetime.now(timezone.utc))
        self._subscribers: list[LogHandler] = []
        self._spokes: dict[str, Spoke] = {}
        self._shutdown = asyncio.Event()
        self.ready_messages: list[str] = []

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown.is_set()

    def register(self, name: str) -> Spoke:
        """Return the spoke called ``name``, creating it on first use."""

        spoke = self._spokes.get(name)
        if spoke is None:
            spoke = Spoke(self, name)
            self._spokes[name] = spoke
        return spoke

    def subscribe(self, handler: LogHandler) -> None:
        self._subscribers.append(handler)

    def publish(self, payload: Any) -> None:
        """Deliver ``payload`` to every subscriber in registration order."""

        for handler in list(self._subscribers):
            handler(payload)

    def publish_log(self, level: str, source: str, items: tuple[Any, ...]) -> None:
        self.publish({"level": level, "timestamp": self._clock(), "source": source, "message": items})

    def get_status(self) -> StatusSnapshot:
        spokes = tuple(spoke.to_status() for spoke in self._spokes.values())
        counts = Counter(spoke.status for spoke in spokes)
        return StatusSnapshot(status_counts=dict(counts), spokes=spokes)

    def request_shutdown(self) -> None:
        if not self._shutdown.is_set():
            logger.info("hub %s shutting down", self.name)
        self._shutdown.set()

    def signal_ready(self, message: str) -> None:
        self.ready_messages.append(message)
        self.publish_log("ready", self.name, (message,))

    async def wait_for_shutdown(self) -> None:
        await self._shutdown.wait()


__all__ = ["DEFAULT_HUB_NAME", "LocalHub", "Spoke"]
