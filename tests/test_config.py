from __future__ import annotations

import pytest

from pytriple.config import DEFAULT_EXECUTE_DELAY, StoreConfig
from pytriple.exceptions import TripleConfigError


def test_defaults() -> None:
    config = StoreConfig()
    assert config.execute_delay == DEFAULT_EXECUTE_DELAY == 0.05
    assert config.trace_transitions is False
    assert config.log_max_repr == 200


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIPLE_EXECUTE_DELAY_MS", "125")
    monkeypatch.setenv("TRIPLE_TRACE_TRANSITIONS", "yes")
    monkeypatch.setenv("TRIPLE_LOG_MAX_REPR", "64")

    config = StoreConfig.from_env()
    assert config.execute_delay == pytest.approx(0.125)
    assert config.trace_transitions is True
    assert config.log_max_repr == 64


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIPLE_EXECUTE_DELAY_MS", "125")
    monkeypatch.setenv("TRIPLE_TRACE_TRANSITIONS", "1")

    config = StoreConfig.from_env(execute_delay=0.0, trace_transitions=False)
    assert config.execute_delay == 0.0
    assert config.trace_transitions is False


def test_from_env_unrecognised_bool_falls_back_to_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIPLE_TRACE_TRANSITIONS", "maybe")
    assert StoreConfig.from_env().trace_transitions is False


def test_from_env_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRIPLE_EXECUTE_DELAY_MS", "soon")
    with pytest.raises(TripleConfigError, match="TRIPLE_EXECUTE_DELAY_MS"):
        StoreConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"execute_delay": -0.01},
        {"log_max_repr": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, float]) -> None:
    with pytest.raises(TripleConfigError):
        StoreConfig(**kwargs)  # type: ignore[arg-type]
