"""The immutable state triple.

A :class:`Triple` is the complete snapshot of a store at one point in
time: the domain ``state``, the last domain ``error``, the ``is_loading``
flag, and the ``event`` tag naming which of the three the most recent
transition targeted. Every transition produces a new instance; the
model is frozen so a published triple can be shared freely with
observers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

ErrorT = TypeVar("ErrorT")
StateT = TypeVar("StateT")


class TripleEvent(StrEnum):
    STATE = "state"
    LOADING = "loading"
    ERROR = "error"


class Triple(BaseModel, Generic[ErrorT, StateT]):
    """Immutable ``(state, error, is_loading, event)`` snapshot."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    state: StateT
    error: ErrorT | None = None
    is_loading: bool = False
    event: TripleEvent = TripleEvent.STATE

    def with_state(self, state: StateT) -> Triple[ErrorT, StateT]:
        return self.model_copy(update={"state": state, "event": TripleEvent.STATE})

    def with_loading(self, is_loading: bool) -> Triple[ErrorT, StateT]:
        return self.model_copy(update={"is_loading": is_loading, "event": TripleEvent.LOADING})

    def with_error(self, error: ErrorT | None) -> Triple[ErrorT, StateT]:
        return self.model_copy(update={"error": error, "event": TripleEvent.ERROR})

    def clearing_error(self) -> Triple[ErrorT, StateT]:
        """Copy with ``error`` removed; ``event`` is left as it was."""
        return self.model_copy(update={"error": None})

    def copy_with(self, **fields: Any) -> Triple[ErrorT, StateT]:
        """Copy with arbitrary fields replaced.

        Intended for ``Store.middleware`` overrides. Unlike the ``with_*``
        helpers this does not touch ``event`` unless it is passed.
        """
        unknown = set(fields) - set(type(self).model_fields)
        if unknown:
            raise ValueError(f"Unknown triple field(s): {', '.join(sorted(unknown))}")
        return self.model_copy(update=fields)


@dataclass(frozen=True)
class DispatchedTriple:
    """A triple as delivered to process-wide listeners, tagged with its source store type."""

    triple: Triple[Any, Any]
    store_type: type[Any]
