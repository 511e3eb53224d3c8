"""Single-slot coordinator for a store's asynchronous work.

Owns:
- the debounce timestamp shared by every ``execute*`` call on one store
- the one in-flight producer task, cancelled before a new one starts

The slot never touches the triple. It hands a finished task back to the
store, which folds the outcome into ``update``/``set_error``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ExecutionSlot:
    """Runs at most one producer at a time and drops superseded requests.

    A request is superseded as soon as a newer one is issued. Superseded
    requests are abandoned during their debounce window, while waiting for
    the previous task to be cancelled, or after their own task finishes;
    in all three cases they report no outcome.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], int] = time.monotonic_ns,
        name: str = "store",
    ) -> None:
        self._clock = clock
        self._name = name
        self._pending: asyncio.Future[Any] | None = None
        self._last_request_timestamp: int = 0

    @property
    def last_request_timestamp(self) -> int:
        """Timestamp (clock units) of the most recent request."""
        return self._last_request_timestamp

    @property
    def pending(self) -> asyncio.Future[Any] | None:
        return self._pending

    @property
    def is_busy(self) -> bool:
        """Whether a producer task is currently running."""
        return self._pending is not None and not self._pending.done()

    def _issue(self) -> int:
        # Timestamps must be unique even when the clock does not advance
        # between two calls in the same loop iteration.
        now = self._clock()
        if now <= self._last_request_timestamp:
            now = self._last_request_timestamp + 1
        self._last_request_timestamp = now
        return now

    def _is_current(self, issued_at: int) -> bool:
        return issued_at == self._last_request_timestamp

    async def cancel(self) -> None:
        """Cancel the pending task, if any, and wait until it has finished."""
        task = self._pending
        if task is None:
            return
        if not task.done():
            _logger.debug("%s: cancelling pending operation", self._name)
            task.cancel()
            await asyncio.wait([task])
        if self._pending is task:
            self._pending = None

    async def close(self) -> None:
        """Supersede every request still in flight and cancel the pending task."""
        self._issue()
        await self.cancel()

    async def run(
        self,
        producer: Callable[[], Awaitable[T]],
        *,
        delay: float,
        on_start: Callable[[], None] | None = None,
    ) -> asyncio.Future[T] | None:
        """Debounce, cancel the previous task, then run *producer*.

        Returns the finished task, or ``None`` when this request was
        superseded or its task was cancelled. ``on_start`` is called once
        the debounce window has passed and before any cancellation.
        """
        issued_at = self._issue()
        await asyncio.sleep(delay)
        if not self._is_current(issued_at):
            _logger.debug("%s: request superseded during debounce", self._name)
            return None

        if on_start is not None:
            on_start()

        await self.cancel()
        if not self._is_current(issued_at):
            _logger.debug("%s: request superseded while cancelling previous operation", self._name)
            return None

        task: asyncio.Future[T] = asyncio.ensure_future(producer())
        self._pending = task
        try:
            await asyncio.wait([task])
        except asyncio.CancelledError:
            # The caller went away; the producer must not outlive it.
            task.cancel()
            raise
        finally:
            if self._pending is task and task.done():
                self._pending = None

        if task.cancelled():
            _logger.debug("%s: operation cancelled before completion", self._name)
            return None
        if not self._is_current(issued_at):
            # Mark the exception as retrieved; the outcome is discarded.
            task.exception()
            _logger.debug("%s: discarding outcome of superseded operation", self._name)
            return None
        return task
