"""Tests for the single-slot coordinator, independent of any store."""

from __future__ import annotations

import asyncio

import pytest

from pytriple.state.execution import ExecutionSlot


def _frozen_clock() -> int:
    return 1_000


@pytest.mark.asyncio
async def test_timestamps_strictly_increase_with_a_frozen_clock() -> None:
    slot = ExecutionSlot(clock=_frozen_clock)

    async def producer() -> int:
        return 1

    await slot.run(producer, delay=0)
    first = slot.last_request_timestamp
    await slot.run(producer, delay=0)

    assert first == 1_000
    assert slot.last_request_timestamp == 1_001


@pytest.mark.asyncio
async def test_run_returns_finished_task() -> None:
    slot = ExecutionSlot()
    started: list[bool] = []

    async def producer() -> str:
        return "done"

    task = await slot.run(producer, delay=0, on_start=lambda: started.append(True))

    assert task is not None
    assert task.result() == "done"
    assert started == [True]
    assert slot.pending is None
    assert slot.is_busy is False


@pytest.mark.asyncio
async def test_run_returns_failed_task_without_raising() -> None:
    slot = ExecutionSlot()

    async def producer() -> str:
        raise RuntimeError("boom")

    task = await slot.run(producer, delay=0)
    assert task is not None
    assert isinstance(task.exception(), RuntimeError)


@pytest.mark.asyncio
async def test_superseded_request_skips_on_start() -> None:
    slot = ExecutionSlot()
    starts: list[str] = []

    async def producer() -> None:
        return None

    first, second = await asyncio.gather(
        slot.run(producer, delay=0.02, on_start=lambda: starts.append("first")),
        slot.run(producer, delay=0.02, on_start=lambda: starts.append("second")),
    )

    assert first is None
    assert second is not None
    assert starts == ["second"]


@pytest.mark.asyncio
async def test_cancel_without_pending_is_noop() -> None:
    slot = ExecutionSlot()
    await slot.cancel()
    assert slot.pending is None


@pytest.mark.asyncio
async def test_close_cancels_pending_task() -> None:
    slot = ExecutionSlot()
    started = asyncio.Event()

    async def slow() -> None:
        started.set()
        await asyncio.Event().wait()

    runner = asyncio.create_task(slot.run(slow, delay=0))
    await started.wait()
    assert slot.is_busy is True

    await slot.close()

    assert await runner is None
    assert slot.is_busy is False
