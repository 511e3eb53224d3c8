"""Process-wide triple listeners.

Every accepted transition of every store is dispatched to a
:class:`TripleObserver`. Stores use the shared default registry unless
one is passed explicitly, which keeps tests isolated from each other.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pytriple.models.triple import DispatchedTriple, Triple

_logger = logging.getLogger(__name__)

TripleCallback = Callable[[DispatchedTriple], None]


class TripleObserver:
    """Set of callbacks notified on every accepted transition.

    Listeners are kept with set semantics: registering the same callable
    twice keeps a single entry. No invocation order is guaranteed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        # dict keys give set semantics with stable iteration.
        self._callbacks: dict[TripleCallback, None] = {}

    def add_listener(self, callback: TripleCallback) -> None:
        with self._lock:
            self._callbacks[callback] = None

    def remove_listener(self, callback: TripleCallback) -> None:
        with self._lock:
            self._callbacks.pop(callback, None)

    def clear(self) -> None:
        with self._lock:
            self._callbacks.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        with self._lock:
            return callback in self._callbacks

    def dispatch(self, triple: Triple[Any, Any], store_type: type[Any]) -> None:
        """Synchronously deliver *triple* to every registered listener.

        A listener that raises is logged and skipped; the remaining
        listeners are still called.
        """
        with self._lock:
            callbacks = list(self._callbacks)
        if not callbacks:
            return

        dispatched = DispatchedTriple(triple=triple, store_type=store_type)
        for callback in callbacks:
            try:
                callback(dispatched)
            except Exception:
                _logger.warning(
                    "Triple listener %r failed for store=%s",
                    callback,
                    store_type.__name__,
                    exc_info=True,
                )


_default_observer = TripleObserver()


def default_observer() -> TripleObserver:
    """Registry used by stores constructed without an explicit ``observer``."""
    return _default_observer


def add_triple_listener(callback: TripleCallback) -> None:
    _default_observer.add_listener(callback)


def remove_triple_listener(callback: TripleCallback) -> None:
    _default_observer.remove_listener(callback)


def reset_default_observer() -> None:
    """Drop every listener from the default registry (test teardown)."""
    _default_observer.clear()
