"""Ownership of long-running background coroutines."""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Coroutine


def log_task_crash(task: asyncio.Task, *, logger: logging.Logger) -> None:
    """Log ``task`` if it ended with an exception other than cancellation."""
    with contextlib.suppress(asyncio.CancelledError):
        exc = task.exception()
        if exc is not None:
            logger.error("Background task %s crashed: %s", task.get_name(), exc, exc_info=exc)


class LifecycleManager:
    """Spawns named background tasks for a service and cancels them on shutdown."""

    def __init__(self, *, name: str, logger: logging.Logger) -> None:
        self._name = name
        self._logger = logger
        self._tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return any(not task.done() for task in self._tasks)

    def spawn(self, coro: Coroutine, *, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=f"{self._name}:{name}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        log_task_crash(task, logger=self._logger)

    async def cancel_all(self) -> None:
        pending = [task for task in self._tasks if not task.done()]
        if not pending:
            return
        self._logger.debug("%s cancelling %d task(s)", self._name, len(pending))
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
