"""Correct push-delivered values against still-live local writes."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pylancache.state.policy import resolve_incoming
from pylancache.state.store import MISSING, PendingStore

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Reconciler:
    """Decide whether an incoming value is trusted or overridden.

    A push snapshot computed just before a local change was saved would
    otherwise snap the control back to its old value.  While the pending
    entry is live the local value wins; once it expires the incoming value
    is trusted again.  A matching incoming value does not clear the guard,
    so a later stale snapshot inside the cooldown is still overridden.
    """

    def __init__(self, store: PendingStore) -> None:
        self._store = store

    def correct(self, key: str, incoming: T) -> T:
        pending = self._store.get(key)
        if pending is MISSING:
            return incoming
        resolved = resolve_incoming(pending, incoming)
        if resolved is not incoming:
            _logger.debug("Overriding incoming key=%s incoming=%r pending=%r", key, incoming, pending)
        return resolved  # type: ignore[no-any-return]
