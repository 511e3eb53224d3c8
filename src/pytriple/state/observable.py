"""Ready-to-use store with per-store segmented observers."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic

from pytriple.config import StoreConfig
from pytriple.models.triple import Triple, TripleEvent
from pytriple.observer import TripleObserver
from pytriple.state.store import Disposer, ErrorT, StateT, Store

_logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class _SegmentListener(Generic[ErrorT, StateT]):
    """Callbacks registered through one ``observer()`` call.

    Only the callback matching the triple's ``event`` is invoked.
    """

    on_state: Callable[[StateT], None] | None = None
    on_loading: Callable[[bool], None] | None = None
    on_error: Callable[[ErrorT], None] | None = None

    def deliver(self, triple: Triple[ErrorT, StateT]) -> None:
        if triple.event is TripleEvent.STATE:
            if self.on_state is not None:
                self.on_state(triple.state)
        elif triple.event is TripleEvent.LOADING:
            if self.on_loading is not None:
                self.on_loading(triple.is_loading)
        elif triple.event is TripleEvent.ERROR:
            if self.on_error is not None:
                self.on_error(triple.error)  # type: ignore[arg-type]


class ObservableStore(Store[ErrorT, StateT]):
    """Store implementing :meth:`observer` and :meth:`destroy`.

    Usage::

        class CounterStore(ObservableStore[ValueError, int]):
            def __init__(self) -> None:
                super().__init__(0)

            async def increment(self) -> None:
                await self.execute(self._next_value)

        store = CounterStore()
        dispose = store.observer(on_state=print, on_error=log_error)
        ...
        await dispose()
    """

    def __init__(
        self,
        initial_state: StateT,
        *,
        config: StoreConfig | None = None,
        observer: TripleObserver | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        # Must exist before Store.__init__ runs init_store(), which may propagate.
        self._listeners: list[_SegmentListener[ErrorT, StateT]] = []
        super().__init__(initial_state, config=config, observer=observer, clock=clock)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def propagate(self, triple: Triple[ErrorT, StateT]) -> None:
        super().propagate(triple)
        for listener in list(self._listeners):
            try:
                listener.deliver(triple)
            except Exception:
                _logger.warning("%s observer callback failed", type(self).__name__, exc_info=True)

    def observer(
        self,
        *,
        on_state: Callable[[StateT], None] | None = None,
        on_loading: Callable[[bool], None] | None = None,
        on_error: Callable[[ErrorT], None] | None = None,
    ) -> Disposer:
        listener: _SegmentListener[ErrorT, StateT] = _SegmentListener(
            on_state=on_state,
            on_loading=on_loading,
            on_error=on_error,
        )
        self._listeners.append(listener)

        async def dispose() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return dispose

    async def destroy(self) -> None:
        await self.release()
        self._listeners.clear()
