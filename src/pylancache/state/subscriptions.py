"""Listener registry for pending preference changes."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

_logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class SubscriptionRegistry:
    """Zero-argument listeners notified whenever a pending value is set.

    UI bindings use this to re-render before the save round-trip
    completes.  Notification order is unspecified.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: dict[int, Listener] = {}
        self._next_token = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        with self._lock:
            token = self._next_token
            self._next_token += 1
            self._listeners[token] = listener

        def unsubscribe() -> None:
            with self._lock:
                self._listeners.pop(token, None)

        return unsubscribe

    def notify(self) -> None:
        # Snapshot so listeners may (un)subscribe while being notified.
        with self._lock:
            listeners = list(self._listeners.values())
        for listener in listeners:
            try:
                listener()
            except Exception:
                _logger.debug("Pending preference listener failed", exc_info=True)
