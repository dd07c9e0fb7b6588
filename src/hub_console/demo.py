"""Demo spoke driving the CLI ``demo`` command.

Emits one message per level, an object message, a multi-argument message,
and then increments two counters every second so STATS lines have something
to show.
"""

from __future__ import annotations

import asyncio

from hub_console.adapters.hub import LocalHub, Spoke

DEMO_SPOKE_NAME = "TestSpoke"


def emit_samples(spoke: Spoke) -> None:
    spoke.log("example log msg")
    spoke.ready("example ready msg")
    spoke.debug("example debug msg")
    spoke.warn("example warning msg")
    spoke.error("example error msg")
    spoke.log("example object", {"testVal": 1, "testString": "hello"})
    spoke.log("example with lots of arguments", 1, 2, 3, 4, 5, "six")


async def run_demo_spoke(hub: LocalHub, *, tick: float = 1.0) -> None:
    """Register the demo spoke, emit samples, then count until cancelled."""

    spoke = hub.register(DEMO_SPOKE_NAME)
    spoke.stats.update(exampleCounter=0, exampleCounter2=0)
    emit_samples(spoke)
    while True:
        await asyncio.sleep(tick)
        spoke.stats["exampleCounter"] += 1
        spoke.stats["exampleCounter2"] += 2


__all__ = ["DEMO_SPOKE_NAME", "emit_samples", "run_demo_spoke"]
