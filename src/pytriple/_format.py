"""Helpers for safe debug logging of store values.

Store states are arbitrary application objects and may be large or carry
credentials. Everything pytriple renders into a log record goes through
:func:`summarize_for_log` first.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

if TYPE_CHECKING:
    from pytriple.models.triple import Triple

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "accesstoken",
        "refreshtoken",
        "apikey",
        "authorization",
        "cookie",
    }
)


def _normalize_key(key: Any) -> str:
    return str(key).lower().replace("_", "").replace("-", "")


def _truncate(text: str, max_string: int) -> str:
    if len(text) > max_string:
        return f"{text[:max_string]}…<truncated>"
    return text


def summarize_for_log(value: Any, *, max_string: int = 200, _depth: int = 0) -> Any:
    """Return a redacted, size-bounded copy of *value* suitable for debug logs."""
    if _depth > 8:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        return _truncate(value, max_string)

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, BaseException):
        return _truncate(f"{type(value).__name__}({value})", max_string)

    if isinstance(value, BaseModel):
        value = value.model_dump()
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)

    if isinstance(value, Mapping):
        summarized: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if _normalize_key(key) in _SENSITIVE_VALUE_KEYS:
                summarized[key] = "<redacted>"
            else:
                summarized[key] = summarize_for_log(v, max_string=max_string, _depth=_depth + 1)
        return summarized

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [summarize_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return _truncate(repr(value), max_string)


def describe_triple(triple: Triple[Any, Any], *, max_string: int = 200) -> str:
    """One-line rendering of a triple for transition traces."""
    return (
        f"event={triple.event.value} loading={triple.is_loading} "
        f"state={summarize_for_log(triple.state, max_string=max_string)!r} "
        f"error={summarize_for_log(triple.error, max_string=max_string)!r}"
    )
