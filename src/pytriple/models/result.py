"""Two-branch result type for ``Store.execute_result``.

Producers that prefer returning failures over raising them return either
``Success(value)`` or ``Failure(error)``. The store folds the branch into
``update`` or ``set_error`` without inspecting exceptions.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

ErrorT = TypeVar("ErrorT")
StateT = TypeVar("StateT")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class Success(Generic[StateT]):
    value: StateT

    @property
    def is_success(self) -> bool:
        return True

    def fold(self, on_failure: Callable[[object], R], on_success: Callable[[StateT], R]) -> R:
        return on_success(self.value)


@dataclass(frozen=True, slots=True)
class Failure(Generic[ErrorT]):
    error: ErrorT

    @property
    def is_success(self) -> bool:
        return False

    def fold(self, on_failure: Callable[[ErrorT], R], on_success: Callable[[object], R]) -> R:
        return on_failure(self.error)


# Parameter order follows Store: Result[ErrorT, StateT].
Result: TypeAlias = Failure[ErrorT] | Success[StateT]
