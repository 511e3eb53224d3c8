"""Tests for the Triple value type and Result branches."""

from __future__ import annotations

import pydantic
import pytest

from pytriple.models.result import Failure, Success
from pytriple.models.triple import Triple, TripleEvent


class TestTriple:
    def test_defaults(self) -> None:
        triple = Triple(state=0)
        assert triple.state == 0
        assert triple.error is None
        assert triple.is_loading is False
        assert triple.event is TripleEvent.STATE

    def test_with_state_tags_event_and_keeps_other_fields(self) -> None:
        triple = Triple(state=1, error="boom", is_loading=True, event=TripleEvent.LOADING)
        updated = triple.with_state(2)
        assert updated.state == 2
        assert updated.error == "boom"
        assert updated.is_loading is True
        assert updated.event is TripleEvent.STATE

    def test_with_loading_and_with_error_tag_event(self) -> None:
        triple = Triple(state=1)
        assert triple.with_loading(True).event is TripleEvent.LOADING
        assert triple.with_loading(True).is_loading is True
        assert triple.with_error("X").event is TripleEvent.ERROR
        assert triple.with_error("X").error == "X"

    def test_clearing_error_keeps_event(self) -> None:
        triple = Triple(state=1).with_error("X")
        cleared = triple.clearing_error()
        assert cleared.error is None
        assert cleared.event is TripleEvent.ERROR

    def test_transitions_never_mutate_the_receiver(self) -> None:
        original = Triple(state=[1, 2])
        original.with_state([3]).with_loading(True).with_error("X")
        assert original == Triple(state=[1, 2])

    def test_frozen(self) -> None:
        triple = Triple(state=1)
        with pytest.raises(pydantic.ValidationError):
            triple.state = 2  # type: ignore[misc]

    def test_copy_with_rejects_unknown_fields(self) -> None:
        triple = Triple(state=1)
        assert triple.copy_with(is_loading=True).is_loading is True
        assert triple.copy_with(is_loading=True).event is TripleEvent.STATE
        with pytest.raises(ValueError, match="loading"):
            triple.copy_with(loading=True)

    def test_equality_is_by_value(self) -> None:
        assert Triple(state=5, event=TripleEvent.STATE) == Triple(state=5)
        assert Triple(state=5) != Triple(state=5, is_loading=True)


def test_result_fold_picks_branch() -> None:
    success: Success[int] = Success(3)
    failure: Failure[str] = Failure("nope")

    assert success.fold(lambda e: f"err:{e}", lambda v: f"ok:{v}") == "ok:3"
    assert failure.fold(lambda e: f"err:{e}", lambda v: f"ok:{v}") == "err:nope"
    assert success.is_success is True
    assert failure.is_success is False
