"""Compound preference adapter for the timezone/time-format setting.

One control edits two independent booleans.  Each is guarded under its
own key with its own cooldown, so one expiring or converging never
affects the other.
"""

from __future__ import annotations

from pylancache.models.preferences import (
    USE_24_HOUR_FORMAT,
    USE_LOCAL_TIMEZONE,
    TimeSetting,
    TimezoneFlags,
)
from pylancache.state.reconciler import Reconciler
from pylancache.state.store import PendingStore


class TimezoneAdapter:
    def __init__(self, store: PendingStore, reconciler: Reconciler) -> None:
        self._store = store
        self._reconciler = reconciler

    def set_compound(self, value: TimeSetting | str | None) -> None:
        """Mark both underlying booleans as pending.

        ``None`` is ignored.  Unknown tags raise
        :class:`~pylancache.exceptions.InvalidTimeSettingError`.
        """
        if value is None:
            return
        flags = TimeSetting.parse(value).flags
        self._store.set(USE_LOCAL_TIMEZONE, flags.use_local)
        self._store.set(USE_24_HOUR_FORMAT, flags.use_24_hour)

    def get_corrected_compound(self, use_local: bool, use_24_hour: bool) -> TimezoneFlags:
        return TimezoneFlags(
            use_local=self._reconciler.correct(USE_LOCAL_TIMEZONE, use_local),
            use_24_hour=self._reconciler.correct(USE_24_HOUR_FORMAT, use_24_hour),
        )
