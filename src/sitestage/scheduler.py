"""Deferred execution on the interaction loop."""

import asyncio
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class Scheduler(Protocol):
    """Runs callbacks later on the single interaction thread.

    Every asynchronous step of the pipeline (readiness polls, serialization
    yields, storage continuations) goes through this seam.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` after ``delay`` seconds."""
        ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        """The bound loop, or the running one when none was given."""
        if self._loop is None:
            return asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> None:
        if delay <= 0:
            self.loop.call_soon(callback)
        else:
            self.loop.call_later(delay, callback)
