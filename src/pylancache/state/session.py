"""Per-session preference snapshots fed by REST loads and push updates.

The server rebroadcasts a full snapshot whenever any session saves its
preferences.  Snapshots for the current session pass through the pending
layer first so a stale broadcast cannot revert a control the user just
changed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from pylancache.ingestion.push import UserPreferencesUpdatedEvent
from pylancache.models.preferences import (
    DEFAULT_PREFERENCES,
    SHOW_YEAR_IN_DATES,
    USE_24_HOUR_FORMAT,
    USE_LOCAL_TIMEZONE,
    UserPreferences,
    field_for_key,
)
from pylancache.preferences import PendingPreferences
from pylancache.state.events import PreferenceChange

_logger = logging.getLogger(__name__)

WATCHED_KEYS: tuple[str, ...] = (
    USE_LOCAL_TIMEZONE,
    USE_24_HOUR_FORMAT,
    SHOW_YEAR_IN_DATES,
    "selectedTheme",
    "sharpCorners",
    "disableTooltips",
    "picsAlwaysVisible",
    "disableStickyNotifications",
    "showDatasourceLabels",
    "allowedTimeFormats",
)
"""Keys that produce :class:`PreferenceChange` events for the current session."""


class SessionPreferencesStore:
    """In-memory preferences for every session the dashboard has seen."""

    def __init__(
        self,
        pending: PendingPreferences,
        *,
        current_session_id: str | None = None,
        on_preference_changed: Callable[[PreferenceChange], None] | None = None,
    ) -> None:
        self._pending = pending
        self._current_session_id = current_session_id or pending.config.current_session_id
        self._on_preference_changed = on_preference_changed
        self._lock = threading.Lock()
        self._sessions: dict[str, UserPreferences] = {}
        self._loaded: set[str] = set()

    @property
    def current_session_id(self) -> str | None:
        return self._current_session_id

    @current_session_id.setter
    def current_session_id(self, value: str | None) -> None:
        self._current_session_id = value

    @property
    def current_preferences(self) -> UserPreferences | None:
        if self._current_session_id is None:
            return None
        return self.get_session_preferences(self._current_session_id)

    def get_session_preferences(self, session_id: str) -> UserPreferences | None:
        with self._lock:
            return self._sessions.get(session_id)

    def is_loaded(self, session_id: str) -> bool:
        with self._lock:
            return session_id in self._loaded

    def set_loaded(self, session_id: str, payload: UserPreferences | dict[str, Any]) -> UserPreferences:
        """Store the result of the initial REST load for *session_id*."""
        prefs = payload if isinstance(payload, UserPreferences) else UserPreferences.model_validate(payload)
        with self._lock:
            self._sessions[session_id] = prefs
            self._loaded.add(session_id)
        return prefs

    def _corrected(self, prefs: UserPreferences) -> UserPreferences:
        timezone = self._pending.get_corrected_timezone(prefs.use_local_timezone, prefs.use_24_hour_format)
        show_year = self._pending.get_corrected_value(SHOW_YEAR_IN_DATES, prefs.show_year_in_dates)
        return prefs.model_copy(
            update={
                "use_local_timezone": timezone.use_local,
                "use_24_hour_format": timezone.use_24_hour,
                "show_year_in_dates": show_year,
            }
        )

    def _diff(self, session_id: str, baseline: UserPreferences, prefs: UserPreferences) -> list[PreferenceChange]:
        changes: list[PreferenceChange] = []
        for key in WATCHED_KEYS:
            # Already applied optimistically by the control that set it.
            if key == SHOW_YEAR_IN_DATES and self._pending.has_pending_preference(SHOW_YEAR_IN_DATES):
                continue
            field_name = field_for_key(key)
            value = getattr(prefs, field_name)
            if getattr(baseline, field_name) != value:
                changes.append(PreferenceChange(session_id=session_id, key=key, value=value))
        return changes

    def apply_update(self, event: UserPreferencesUpdatedEvent) -> list[PreferenceChange]:
        """Apply a pushed snapshot and return the user-visible changes.

        Only the current session is corrected against pending values and
        only the current session produces change events.  A snapshot equal
        to the stored one is ignored entirely.
        """
        session_id = event.session_id
        is_current = session_id == self._current_session_id
        prefs = self._corrected(event.preferences) if is_current else event.preferences

        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is not None and existing == prefs:
                return []
            changes = self._diff(session_id, existing or DEFAULT_PREFERENCES, prefs) if is_current else []
            self._sessions[session_id] = prefs
            self._loaded.add(session_id)

        for change in changes:
            _logger.debug("Preference changed session=%s key=%s value=%r", session_id, change.key, change.value)
            if self._on_preference_changed is None:
                continue
            try:
                self._on_preference_changed(change)
            except Exception:
                _logger.debug("on_preference_changed callback failed", exc_info=True)
        return changes

    def set_optimistic_preference(self, key: str, value: Any) -> None:
        """Patch the current session's snapshot before the save completes."""
        session_id = self._current_session_id
        if session_id is None:
            return
        with self._lock:
            base = self._sessions.get(session_id, DEFAULT_PREFERENCES)
            self._sessions[session_id] = base.with_value(key, value)

    def update_session_preference(self, session_id: str, key: str, value: Any) -> None:
        """Patch one key of an already known session."""
        with self._lock:
            existing = self._sessions.get(session_id)
            if existing is None:
                return
            self._sessions[session_id] = existing.with_value(key, value)
