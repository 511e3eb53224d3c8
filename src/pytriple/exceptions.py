"""Custom exception hierarchy for pytriple."""

from __future__ import annotations

from typing import Any


class TripleError(Exception):
    """Base exception for all pytriple errors."""


class TripleConfigError(TripleError):
    """Invalid or missing configuration.

    Raised for wiring faults detected at startup: no resolver installed,
    a resolver returning something that is not a store, or an invalid
    :class:`~pytriple.config.StoreConfig` value.
    """


class TripleTypeMismatchError(TripleError, TypeError):
    """An asynchronous outcome did not match the store's declared shape.

    This is a contract violation, not a domain error: it is raised to the
    caller of ``execute*`` and never folded into the triple.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: Any = None,
        actual: Any = None,
    ) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)
