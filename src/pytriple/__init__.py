"""pytriple - Reactive state stores for asyncio applications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytriple")
except PackageNotFoundError:
    __version__ = "0+local"
from pytriple.config import StoreConfig
from pytriple.exceptions import TripleConfigError, TripleError, TripleTypeMismatchError
from pytriple.models import DispatchedTriple, Failure, Result, Success, Triple, TripleEvent
from pytriple.observer import (
    TripleCallback,
    TripleObserver,
    add_triple_listener,
    default_observer,
    remove_triple_listener,
    reset_default_observer,
)
from pytriple.resolver import get_resolved, reset_resolver, set_resolver
from pytriple.state.execution import ExecutionSlot
from pytriple.state.observable import ObservableStore
from pytriple.state.store import Disposer, Store
from pytriple.state.subscription import StreamSubscription

__all__ = [
    "__version__",
    "DispatchedTriple",
    "Disposer",
    "ExecutionSlot",
    "Failure",
    "ObservableStore",
    "Result",
    "Store",
    "StoreConfig",
    "StreamSubscription",
    "Success",
    "Triple",
    "TripleCallback",
    "TripleConfigError",
    "TripleError",
    "TripleEvent",
    "TripleObserver",
    "TripleTypeMismatchError",
    "add_triple_listener",
    "default_observer",
    "get_resolved",
    "remove_triple_listener",
    "reset_default_observer",
    "reset_resolver",
    "set_resolver",
]
