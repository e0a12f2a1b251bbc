from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class DropTask:
    """Single-flight asyncio task: a perform() while one is in flight is dropped.

    The dropped request neither queues nor restarts the running one.
    """

    def __init__(self, fn: Callable[..., Awaitable[Any]], name: str):
        self._fn = fn
        self.name = name
        self._task: asyncio.Task | None = None
        self.performed = 0
        self.dropped = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def perform(self, *args: Any, **kwargs: Any) -> asyncio.Task | None:
        if self.is_running:
            self.dropped += 1
            logger.debug("%s already running; dropped duplicate perform()", self.name)
            return None
        self.performed += 1
        self._task = asyncio.create_task(self._fn(*args, **kwargs), name=self.name)
        return self._task

    def cancel_all(self) -> None:
        """Best effort; no error if nothing is running or it already finished."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
