"""Tests for the bounded background side-effect runner."""

from __future__ import annotations

import logging
import threading

import anyio
import pytest

from social_api.infrastructure.realtime import BackgroundTaskRunner

pytestmark = pytest.mark.anyio


async def test_jobs_run_off_the_event_loop_thread() -> None:
    runner = BackgroundTaskRunner(workers=2, max_queue_size=10)
    await runner.start()
    seen: list[tuple[str, int]] = []

    threads: set[threading.Thread] = set()

    def job(label: str, *, value: int) -> None:
        seen.append((label, value))
        threads.add(threading.current_thread())

    runner.submit(job, "a", value=1)
    runner.submit(job, "b", value=2)
    await runner.drain()
    await runner.stop()

    assert sorted(seen) == [("a", 1), ("b", 2)]
    assert threading.current_thread() not in threads


async def test_failing_job_is_logged_and_dropped(caplog) -> None:
    runner = BackgroundTaskRunner(workers=1, max_queue_size=10)
    await runner.start()
    ran: list[str] = []

    def explode() -> None:
        raise RuntimeError("database unavailable")

    with caplog.at_level(logging.ERROR):
        runner.submit(explode)
        runner.submit(ran.append, "after")
        await runner.drain()
    await runner.stop()

    assert ran == ["after"]
    assert "Background job explode failed" in caplog.text


async def test_full_queue_drops_new_jobs(caplog) -> None:
    runner = BackgroundTaskRunner(workers=1, max_queue_size=1)
    await runner.start()
    ran: list[int] = []

    with caplog.at_level(logging.WARNING):
        # No await between submissions, so the worker cannot pick up the first job.
        runner.submit(ran.append, 1)
        runner.submit(ran.append, 2)
        await runner.drain()
    await runner.stop()

    assert ran == [1]
    assert "queue is full" in caplog.text


async def test_stop_finishes_queued_jobs_then_refuses_new_ones(caplog) -> None:
    runner = BackgroundTaskRunner(workers=1, max_queue_size=10)
    await runner.start()
    ran: list[int] = []

    for value in range(3):
        runner.submit(ran.append, value)
    await runner.stop()

    with caplog.at_level(logging.WARNING):
        runner.submit(ran.append, 99)

    assert ran == [0, 1, 2]
    assert runner.is_running is False
    assert "not running" in caplog.text


async def test_stop_right_after_start_still_runs_queued_jobs() -> None:
    runner = BackgroundTaskRunner(workers=3, max_queue_size=10)
    await runner.start()
    ran: list[int] = []

    # Workers have not been scheduled yet when stop() begins.
    for value in range(3):
        runner.submit(ran.append, value)
    with anyio.fail_after(5):
        await runner.stop()

    assert sorted(ran) == [0, 1, 2]
    assert runner.is_running is False


async def test_invalid_sizes_are_rejected() -> None:
    with pytest.raises(ValueError):
        BackgroundTaskRunner(workers=0)
    with pytest.raises(ValueError):
        BackgroundTaskRunner(max_queue_size=0)
