"""Bounded worker pool for best-effort side effects of a successful write."""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Callable

import anyio

logger = logging.getLogger(__name__)


class BackgroundTaskRunner:
    """Run blocking jobs off the request path with at-most-once semantics.

    Jobs are plain callables executed in a worker thread through
    :func:`anyio.to_thread.run_sync`. A job that raises is logged and dropped;
    nothing is retried. When the queue is full, or the runner is not running,
    new jobs are dropped with a warning instead of blocking the caller.
    """

    def __init__(self, *, workers: int = 4, max_queue_size: int = 1000) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be at least 1")
        self.workers = workers
        self.max_queue_size = max_queue_size
        self._loop: asyncio.AbstractEventLoop | None = None
        self._queue: asyncio.Queue | None = None
        self._tasks: list[asyncio.Task] = []

    @property
    def is_running(self) -> bool:
        return self._queue is not None

    async def start(self) -> None:
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._queue = asyncio.Queue(maxsize=self.max_queue_size)
        self._tasks = [
            self._loop.create_task(self._work(self._queue), name=f"background-worker-{index}")
            for index in range(self.workers)
        ]
        logger.info("Background runner started with %s workers", self.workers)

    async def stop(self) -> None:
        """Finish the jobs already queued, then stop the workers."""

        queue = self._queue
        if queue is None:
            return
        self._queue = None
        self._loop = None
        await queue.join()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        logger.info("Background runner stopped")

    async def drain(self) -> None:
        """Wait until every job queued so far has finished."""

        if self._queue is not None:
            await self._queue.join()

    def submit(self, job: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Queue ``job(*args, **kwargs)``; safe to call from any thread."""

        name = getattr(job, "__name__", repr(job))
        bound = functools.partial(job, *args, **kwargs)
        loop = self._loop
        if loop is None:
            logger.warning("Background runner is not running; dropping job %s", name)
            return

        try:
            running_loop = asyncio.get_running_loop()
        except RuntimeError:
            running_loop = None

        if running_loop is loop:
            self._enqueue(name, bound)
            return

        try:
            loop.call_soon_threadsafe(self._enqueue, name, bound)
        except RuntimeError:
            logger.warning("Background runner loop is closed; dropping job %s", name)

    def _enqueue(self, name: str, job: Callable[[], Any]) -> None:
        queue = self._queue
        if queue is None:
            logger.warning("Background runner is not running; dropping job %s", name)
            return
        try:
            queue.put_nowait((name, job))
        except asyncio.QueueFull:
            logger.warning("Background queue is full; dropping job %s", name)

    async def _work(self, queue: asyncio.Queue) -> None:
        # Bound at creation so stop() can drain it after new submissions are refused.
        while True:
            name, job = await queue.get()
            try:
                await anyio.to_thread.run_sync(job)
            except Exception:
                logger.exception("Background job %s failed", name)
            finally:
                queue.task_done()


__all__ = ["BackgroundTaskRunner"]
