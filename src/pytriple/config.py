"""Store configuration for pytriple."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytriple.exceptions import TripleConfigError

#: Default debounce window for ``execute*`` calls, in seconds.
DEFAULT_EXECUTE_DELAY: float = 0.05


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Store configuration.

    Parameters
    ----------
    execute_delay : float
        Debounce window in seconds used by ``execute`` and
        ``execute_result`` when no explicit ``delay`` is passed.
        A newer call arriving inside the window supersedes the older one.
    trace_transitions : bool
        Emit a DEBUG record for every accepted transition.
    log_max_repr : int
        Maximum length of a value rendered into a log record before it
        is truncated.
    """

    execute_delay: float = DEFAULT_EXECUTE_DELAY
    trace_transitions: bool = False
    log_max_repr: int = 200

    def __post_init__(self) -> None:
        if self.execute_delay < 0:
            raise TripleConfigError(f"execute_delay must be >= 0, got {self.execute_delay!r}")
        if self.log_max_repr <= 0:
            raise TripleConfigError(f"log_max_repr must be > 0, got {self.log_max_repr!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``TRIPLE_EXECUTE_DELAY_MS``, ``TRIPLE_TRACE_TRANSITIONS`` and
        ``TRIPLE_LOG_MAX_REPR``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        StoreConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        # The env var is in milliseconds to match how delays are usually quoted.
        delay_env = env.get("TRIPLE_EXECUTE_DELAY_MS")
        if delay_env is not None and "execute_delay" not in overrides:
            try:
                config_kwargs["execute_delay"] = float(delay_env) / 1000.0
            except ValueError as exc:
                raise TripleConfigError(f"TRIPLE_EXECUTE_DELAY_MS is not a number: {delay_env!r}") from exc

        if "trace_transitions" not in overrides:
            config_kwargs["trace_transitions"] = _env_bool(env.get("TRIPLE_TRACE_TRANSITIONS"), False)

        repr_env = env.get("TRIPLE_LOG_MAX_REPR")
        if repr_env is not None and "log_max_repr" not in overrides:
            try:
                config_kwargs["log_max_repr"] = int(repr_env)
            except ValueError as exc:
                raise TripleConfigError(f"TRIPLE_LOG_MAX_REPR is not an integer: {repr_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
