"""Pluggable store lookup.

pytriple does not ship a dependency-injection container. Applications
install a factory once at startup and look stores up by type::

    set_resolver(container.get)
    counter = get_resolved(CounterStore)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pytriple.exceptions import TripleConfigError
from pytriple.state.store import Store

_logger = logging.getLogger(__name__)

TStore = TypeVar("TStore", bound=Store[Any, Any])

Resolver = Callable[[type[Any]], Any]

_INSTALL_HINT = """\
Add a resolver before looking up stores, e.g.:

    from pytriple import set_resolver

    set_resolver(lambda store_type: container.get(store_type))
"""

_resolver: Resolver | None = None


def set_resolver(resolver: Resolver) -> None:
    """Install the process-wide store factory, replacing any previous one."""
    global _resolver
    _resolver = resolver
    _logger.debug("Triple resolver installed: %r", resolver)


def reset_resolver() -> None:
    """Remove the installed resolver (test teardown)."""
    global _resolver
    _resolver = None


def get_resolved(store_type: type[TStore]) -> TStore:
    """Resolve an instance of *store_type* through the installed resolver.

    Raises
    ------
    TripleConfigError
        If no resolver is installed or it returned something that is not
        an instance of *store_type*.
    """
    resolver = _resolver
    if resolver is None:
        raise TripleConfigError(f"No resolver installed; cannot resolve {store_type.__name__}.\n{_INSTALL_HINT}")

    store = resolver(store_type)
    if not isinstance(store, Store) or not isinstance(store, store_type):
        raise TripleConfigError(
            f"Resolver returned {type(store).__name__} for {store_type.__name__}; "
            f"expected a {store_type.__name__} store.\n{_INSTALL_HINT}"
        )
    return store
