"""In-memory store of locally set, not yet confirmed preference values.

Entries expire lazily: liveness is checked when a key is read and an
expired entry is dropped at that moment.  There is no background sweep.
"""

from __future__ import annotations

import enum
import logging
import threading
import time
from collections.abc import Callable
from typing import Any, Final

from pydantic import BaseModel, ConfigDict

from pylancache.config import DEFAULT_COOLDOWN_SECONDS
from pylancache.state.policy import is_expired
from pylancache.state.subscriptions import SubscriptionRegistry

_logger = logging.getLogger(__name__)

Scalar = bool | int | float | str | None


class _Missing(enum.Enum):
    MISSING = "MISSING"

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing.MISSING
"""Returned by :meth:`PendingStore.get` when no live entry exists.

``None`` is a legal pending value, so it cannot double as "absent".
"""


class PendingEntry(BaseModel):
    """Most recent unconfirmed local write for one key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Stored as given; no validation or coercion.
    value: Any
    set_at: float


class PendingStore:
    """Keyed store of pending values with a fixed cooldown.

    ``clock`` returns seconds as a float and defaults to
    :func:`time.monotonic`.  Every :meth:`set` notifies ``registry``
    after the store lock is released, so listeners may read the store.
    """

    def __init__(
        self,
        *,
        registry: SubscriptionRegistry | None = None,
        clock: Callable[[], float] = time.monotonic,
        cooldown: float = DEFAULT_COOLDOWN_SECONDS,
    ) -> None:
        self._registry = registry if registry is not None else SubscriptionRegistry()
        self._clock = clock
        self._cooldown = cooldown
        self._lock = threading.Lock()
        self._entries: dict[str, PendingEntry] = {}

    @property
    def registry(self) -> SubscriptionRegistry:
        return self._registry

    @property
    def cooldown(self) -> float:
        return self._cooldown

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def set(self, key: str, value: Scalar) -> None:
        """Record *value* for *key* and restart its cooldown."""
        with self._lock:
            self._entries[key] = PendingEntry(value=value, set_at=self._clock())
        _logger.debug("Pending preference set key=%s value=%r", key, value)
        self._registry.notify()

    def _live_entry(self, key: str) -> PendingEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if is_expired(self._clock(), entry.set_at, self._cooldown):
                del self._entries[key]
                _logger.debug("Pending preference expired key=%s", key)
                return None
            return entry

    def has(self, key: str) -> bool:
        return self._live_entry(key) is not None

    def get(self, key: str) -> Scalar | _Missing:
        """Return the live value for *key*, or :data:`MISSING`."""
        entry = self._live_entry(key)
        if entry is None:
            return MISSING
        return entry.value

    def entry(self, key: str) -> PendingEntry | None:
        # Frozen model; handing it out cannot mutate the store.
        return self._live_entry(key)
