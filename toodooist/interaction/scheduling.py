"""
Deletion Scheduling.

Trashed notes are removed after a short cosmetic delay so the exit
animation can finish. Scheduling is fire-and-forget with no cancellation.

Schedulers:
    ImmediateScheduler - runs the callback right away (no animation)
    LoopScheduler      - asyncio loop.call_later on the UI event loop
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

from toodooist.core.logging import get_logger

logger = get_logger(__name__)


class Scheduler(ABC):
    """Runs a callback after a delay in seconds."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], object]) -> None:
        ...


class ImmediateScheduler(Scheduler):
    """Ignores the delay."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> None:
        callback()


class LoopScheduler(Scheduler):
    """Schedules on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], object]) -> None:
        logger.debug("Deferred callback scheduled", extra={"delay": delay})
        self.loop.call_later(delay, callback)
