"""Optimistic preference service.

:class:`PendingPreferences` is created once per process and handed to
every consumer.  Settings controls call :meth:`set_pending_preference`
right before firing the save request; the push-channel handler calls
:meth:`get_corrected_value` for each editable field of every snapshot
before committing it.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

from pylancache.config import PreferencesConfig
from pylancache.models.preferences import TimeSetting, TimezoneFlags
from pylancache.state.compound import TimezoneAdapter
from pylancache.state.reconciler import Reconciler
from pylancache.state.store import PendingStore, Scalar
from pylancache.state.subscriptions import Listener, SubscriptionRegistry

T = TypeVar("T")


class PendingPreferences:
    """Boundary for the optimistic preference layer.

    Parameters
    ----------
    config : PreferencesConfig or None
        Cooldown configuration.  Defaults to :class:`PreferencesConfig`.
    clock : callable
        Seconds clock used for expiry.  Defaults to :func:`time.monotonic`.
    """

    def __init__(
        self,
        config: PreferencesConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or PreferencesConfig()
        self._registry = SubscriptionRegistry()
        self._store = PendingStore(
            registry=self._registry,
            clock=clock,
            cooldown=self._config.cooldown_seconds,
        )
        self._reconciler = Reconciler(self._store)
        self._timezone = TimezoneAdapter(self._store, self._reconciler)

    @property
    def config(self) -> PreferencesConfig:
        return self._config

    @property
    def store(self) -> PendingStore:
        return self._store

    def set_pending_preference(self, key: str, value: Scalar) -> None:
        self._store.set(key, value)

    def has_pending_preference(self, key: str) -> bool:
        return self._store.has(key)

    def get_corrected_value(self, key: str, incoming: T) -> T:
        return self._reconciler.correct(key, incoming)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._registry.subscribe(listener)

    def set_pending_timezone(self, value: TimeSetting | str | None) -> None:
        self._timezone.set_compound(value)

    def get_corrected_timezone(self, use_local: bool, use_24_hour: bool) -> TimezoneFlags:
        return self._timezone.get_corrected_compound(use_local, use_24_hour)
