"""Abstract reactive store.

A store owns one current :class:`~pytriple.models.triple.Triple` and is
the only component allowed to replace it. All three mutation primitives
run the same pipeline:

1. build a candidate triple with one field replaced and ``event`` tagged
2. pass it through :meth:`Store.middleware`
3. accept it if forced or if that one field actually changed
4. :meth:`Store.propagate` it to the observer registry

The ``execute*`` helpers translate asynchronous work into calls to the
same primitives.
"""

from __future__ import annotations

import asyncio
import logging
import types
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, Awaitable, Callable
from typing import Any, ClassVar, Generic, TypeAlias, TypeVar, Union, get_args, get_origin

from pytriple._format import describe_triple, summarize_for_log
from pytriple.config import StoreConfig
from pytriple.exceptions import TripleTypeMismatchError
from pytriple.models.result import Failure, Result, Success
from pytriple.models.triple import Triple, TripleEvent
from pytriple.observer import TripleObserver, default_observer
from pytriple.state.execution import ExecutionSlot
from pytriple.state.subscription import StreamSubscription

_logger = logging.getLogger(__name__)

ErrorT = TypeVar("ErrorT")
StateT = TypeVar("StateT")
R = TypeVar("R")

Disposer: TypeAlias = Callable[[], Awaitable[None]]
Shape: TypeAlias = type | tuple[type, ...]


def _runtime_shape(annotation: Any) -> Shape | None:
    """Reduce a type argument to something ``isinstance`` accepts.

    Returns ``None`` for arguments that cannot be checked at runtime
    (``Any``, type variables, ``Literal``, forward references).
    """
    if annotation is Any or isinstance(annotation, TypeVar):
        return None
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members: list[type] = []
        for arg in get_args(annotation):
            shape = _runtime_shape(arg)
            if shape is None:
                return None
            members.extend(shape if isinstance(shape, tuple) else (shape,))
        return tuple(members)
    if origin is not None:
        annotation = origin
    return annotation if isinstance(annotation, type) else None


def _shape_name(shape: Shape | None) -> str:
    if shape is None:
        return "Any"
    if isinstance(shape, tuple):
        return " | ".join(t.__name__ for t in shape)
    return shape.__name__


class Store(ABC, Generic[ErrorT, StateT]):
    """Holder of one ``Triple[ErrorT, StateT]``.

    Subclass with concrete type arguments to declare the shapes that
    asynchronous outcomes are checked against::

        class CounterStore(ObservableStore[ValueError, int]):
            async def increment(self) -> None:
                await self.execute(self._fetch_next)

    Here ``error_type`` becomes ``ValueError`` and ``state_type`` becomes
    ``int``. Without type arguments any ``Exception`` counts as a domain
    error and states are not checked.

    ``update``, ``set_loading`` and ``set_error`` are meant to be called
    by the store's own methods, not by its consumers.
    """

    error_type: ClassVar[Shape] = Exception
    state_type: ClassVar[Shape | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, Store)):
                continue
            args = get_args(base)
            if len(args) != 2:
                continue
            error_shape = _runtime_shape(args[0])
            state_shape = _runtime_shape(args[1])
            # Explicit class attributes win over inferred ones.
            if error_shape is not None and "error_type" not in cls.__dict__:
                cls.error_type = error_shape
            if state_shape is not None and "state_type" not in cls.__dict__:
                cls.state_type = state_shape
            break

    def __init__(
        self,
        initial_state: StateT,
        *,
        config: StoreConfig | None = None,
        observer: TripleObserver | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._config = config if config is not None else StoreConfig()
        self._observer = observer if observer is not None else default_observer()
        self._triple: Triple[ErrorT, StateT] = Triple(state=initial_state)
        self._last_stable: Triple[ErrorT, StateT] = self._triple
        if clock is None:
            self._slot = ExecutionSlot(name=type(self).__name__)
        else:
            self._slot = ExecutionSlot(clock=clock, name=type(self).__name__)
        self._subscriptions: set[StreamSubscription] = set()
        self.init_store()

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def triple(self) -> Triple[ErrorT, StateT]:
        """The complete current snapshot."""
        return self._triple

    @property
    def last_stable(self) -> Triple[ErrorT, StateT]:
        """Snapshot of the last accepted ``update``, with loading cleared."""
        return self._last_stable

    @property
    def state(self) -> StateT:
        return self._triple.state

    @property
    def error(self) -> ErrorT | None:
        return self._triple.error

    @property
    def is_loading(self) -> bool:
        return self._triple.is_loading

    @property
    def is_executing(self) -> bool:
        """Whether an ``execute``/``execute_result`` producer is running."""
        return self._slot.is_busy

    @property
    def config(self) -> StoreConfig:
        return self._config

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def init_store(self) -> None:
        """Called once at the end of ``__init__``."""

    def middleware(self, candidate: Triple[ErrorT, StateT]) -> Triple[ErrorT, StateT]:
        """Rewrite a candidate triple before it is accepted or rejected."""
        return candidate

    def propagate(self, triple: Triple[ErrorT, StateT]) -> None:
        """Make *triple* current and broadcast it.

        Overrides must call ``super().propagate(triple)``.
        """
        self._triple = triple
        if self._config.trace_transitions:
            _logger.debug(
                "%s transition %s",
                type(self).__name__,
                describe_triple(triple, max_string=self._config.log_max_repr),
            )
        self._observer.dispatch(triple, type(self))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, new_state: StateT, *, force: bool = False) -> None:
        """Replace the state; clears any error and refreshes ``last_stable``."""
        current = self._triple
        candidate = self.middleware(current.with_state(new_state).clearing_error())
        if force or candidate.state != current.state:
            self._last_stable = candidate.copy_with(is_loading=False)
            self.propagate(candidate)

    def set_loading(self, is_loading: bool, *, force: bool = False) -> None:
        current = self._triple
        candidate = self.middleware(current.with_loading(is_loading))
        if force or candidate.is_loading != current.is_loading:
            self.propagate(candidate)

    def set_error(self, error: ErrorT, *, force: bool = False) -> None:
        current = self._triple
        candidate = self.middleware(current.with_error(error))
        if force or candidate.error != current.error:
            self.propagate(candidate)

    # ------------------------------------------------------------------
    # Outcome shape checks
    # ------------------------------------------------------------------

    def _checked_state(self, value: Any) -> StateT:
        shape = type(self).state_type
        if shape is not None and not isinstance(value, shape):
            raise TripleTypeMismatchError(
                f"{type(self).__name__} expected a {_shape_name(shape)} state, "
                f"received {type(value).__name__}",
                expected=shape,
                actual=type(value),
            )
        return value  # type: ignore[no-any-return]

    def _checked_error(self, error: BaseException) -> ErrorT:
        shape = type(self).error_type
        if not isinstance(error, shape):
            raise TripleTypeMismatchError(
                f"{type(self).__name__} expected a {_shape_name(shape)} error, "
                f"received {type(error).__name__}: {summarize_for_log(str(error), max_string=self._config.log_max_repr)}",
                expected=shape,
                actual=type(error),
            ) from error
        return error  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Asynchronous execution
    # ------------------------------------------------------------------

    def _resolve_delay(self, delay: float | None) -> float:
        return self._config.execute_delay if delay is None else delay

    def _start_loading(self) -> None:
        self.set_loading(True)

    async def execute(
        self,
        producer: Callable[[], Awaitable[StateT]],
        *,
        delay: float | None = None,
    ) -> None:
        """Run *producer* and fold its outcome into the triple.

        A returned value becomes the new state, a raised ``error_type``
        becomes the error; both are forced so the outcome is always
        observed. Any other exception is a contract violation and raises
        :class:`~pytriple.exceptions.TripleTypeMismatchError`.

        Calls arriving within *delay* seconds of each other are debounced
        to the last one, and a still-running producer is cancelled before
        the next one starts.
        """
        task = await self._slot.run(producer, delay=self._resolve_delay(delay), on_start=self._start_loading)
        if task is None:
            return

        failure = task.exception()
        if failure is None:
            self.update(self._checked_state(task.result()), force=True)
        else:
            self.set_error(self._checked_error(failure), force=True)
        self.set_loading(False)

    async def execute_result(
        self,
        producer: Callable[[], Awaitable[Result[ErrorT, StateT]]],
        *,
        delay: float | None = None,
    ) -> None:
        """Like :meth:`execute` for producers returning ``Success``/``Failure``.

        The branch decides between ``update`` and ``set_error``; exceptions
        are not inspected and propagate unchanged to the caller.
        """
        task = await self._slot.run(producer, delay=self._resolve_delay(delay), on_start=self._start_loading)
        if task is None:
            return

        outcome = task.result()
        if not isinstance(outcome, (Success, Failure)):
            raise TripleTypeMismatchError(
                f"{type(self).__name__}.execute_result expected Success or Failure, received {type(outcome).__name__}",
                expected=(Success, Failure),
                actual=type(outcome),
            )
        outcome.fold(
            lambda error: self.set_error(error, force=True),
            lambda value: self.update(value, force=True),
        )
        self.set_loading(False)

    def execute_stream(self, stream: AsyncIterable[StateT]) -> StreamSubscription:
        """Consume *stream* in the background.

        Every item becomes the new state. An exception raised by the stream
        becomes the error and ends it. Either way the end of the stream
        clears the loading flag. Exceptions raised while applying an item
        (middleware, propagate) are not domain errors: they end the
        subscription and re-raise from ``StreamSubscription.wait()``.
        Must be called with a running event loop.
        """
        task = asyncio.create_task(self._consume(stream))
        subscription = StreamSubscription(task)
        self._subscriptions.add(subscription)

        def _on_done(done: asyncio.Task[None]) -> None:
            self._subscriptions.discard(subscription)
            if not done.cancelled() and done.exception() is not None:
                _logger.error("%s stream subscription failed", type(self).__name__, exc_info=done.exception())

        task.add_done_callback(_on_done)
        return subscription

    async def _consume(self, stream: AsyncIterable[StateT]) -> None:
        _logger.debug("%s stream subscription started", type(self).__name__)
        iterator = aiter(stream)
        while True:
            # Only failures raised by the stream itself are domain errors;
            # faults in update/middleware/propagate propagate to the subscription.
            try:
                item = await anext(iterator)
            except StopAsyncIteration:
                break
            except Exception as exc:
                self.set_error(self._checked_error(exc), force=True)
                _logger.debug("%s stream ended with error", type(self).__name__)
                break
            self.update(self._checked_state(item))
        self.set_loading(False)
        _logger.debug("%s stream subscription finished", type(self).__name__)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def when(
        self,
        *,
        on_state: Callable[[StateT], R],
        on_loading: Callable[[bool], R] | None = None,
        on_error: Callable[[ErrorT], R] | None = None,
    ) -> R:
        """Project the current triple onto one of three callbacks.

        ``on_loading`` is used only while loading is actually on;
        ``on_state`` is the fallback for every other case.
        """
        triple = self._triple
        if triple.event is TripleEvent.LOADING and on_loading is not None and triple.is_loading:
            return on_loading(triple.is_loading)
        if triple.event is TripleEvent.ERROR and on_error is not None:
            return on_error(triple.error)  # type: ignore[arg-type]
        return on_state(triple.state)

    @abstractmethod
    def observer(
        self,
        *,
        on_state: Callable[[StateT], None] | None = None,
        on_loading: Callable[[bool], None] | None = None,
        on_error: Callable[[ErrorT], None] | None = None,
    ) -> Disposer:
        """Subscribe to segmented transitions; await the returned disposer to stop."""

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    async def release(self) -> None:
        """Cancel in-flight work: the pending operation and every stream subscription."""
        await self._slot.close()
        subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            await subscription.cancel()
        self._subscriptions.clear()

    @abstractmethod
    async def destroy(self) -> None:
        """Discard the store. Implementations must at least ``await self.release()``."""
