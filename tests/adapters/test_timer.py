from __future__ import annotations

import asyncio

import pytest

from hub_console.adapters.timer import PeriodicTimer


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError, match="positive"):
        PeriodicTimer(0, lambda: None)


@pytest.mark.asyncio
async def test_timer_repeats_until_cancelled() -> None:
    ticks: list[int] = []
    timer = PeriodicTimer(0.01, lambda: ticks.append(1))

    timer.start()
    assert timer.active is True
    await asyncio.sleep(0.055)
    timer.cancel()
    seen = len(ticks)
    await asyncio.sleep(0.03)

    assert seen >= 2
    assert len(ticks) == seen
    assert timer.active is False


@pytest.mark.asyncio
async def test_failing_callback_keeps_timer_running(caplog: pytest.LogCaptureFixture) -> None:
    calls: list[int] = []

    def callback() -> None:
        calls.append(1)
        raise RuntimeError("poll failed")

    timer = PeriodicTimer(0.01, callback)
    timer.start()
    await asyncio.sleep(0.045)
    timer.cancel()

    assert len(calls) >= 2
    assert "periodic timer callback failed" in caplog.text


@pytest.mark.asyncio
async def test_start_twice_keeps_single_schedule() -> None:
    ticks: list[int] = []
    timer = PeriodicTimer(0.02, lambda: ticks.append(1))

    timer.start()
    timer.start()
    await asyncio.sleep(0.03)
    timer.cancel()

    assert len(ticks) == 1
