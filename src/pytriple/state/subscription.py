"""Handle for a stream consumed by ``Store.execute_stream``."""

from __future__ import annotations

import asyncio


class StreamSubscription:
    """Cancellable handle around the task consuming one stream.

    Each subscription is independent: it is not debounced and does not
    share the store's execution slot.
    """

    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    async def cancel(self) -> None:
        """Stop consuming the stream and wait for the consumer to finish."""
        if not self._task.done():
            self._task.cancel()
            await asyncio.wait([self._task])

    async def wait(self) -> None:
        """Wait for the stream to end.

        Re-raises a contract violation raised while folding the stream.
        Returns quietly if the subscription was cancelled.
        """
        await asyncio.wait([self._task])
        if not self._task.cancelled():
            self._task.result()
