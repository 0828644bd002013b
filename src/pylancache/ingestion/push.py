"""Push-channel ingestion helpers.

Translates raw ``UserPreferencesUpdated`` broadcasts into typed events.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pylancache.models.preferences import UserPreferences

_logger = logging.getLogger(__name__)

#: Hub method name the server broadcasts preference snapshots under.
USER_PREFERENCES_UPDATED = "UserPreferencesUpdated"


class UserPreferencesUpdatedEvent(BaseModel):
    """A full preference snapshot for one session."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    session_id: str = Field(..., alias="sessionId")
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    @field_validator("session_id")
    @classmethod
    def _normalize_session_id(cls, value: str) -> str:
        session_id = value.strip()
        if not session_id:
            raise ValueError("sessionId must be non-empty")
        return session_id

    @field_validator("preferences", mode="before")
    @classmethod
    def _null_preferences(cls, value: Any) -> Any:
        return {} if value is None else value


def parse_preferences_updated(payload: Any) -> UserPreferencesUpdatedEvent | None:
    """Validate a raw broadcast payload, or return ``None`` if it is unusable."""
    try:
        return UserPreferencesUpdatedEvent.model_validate(payload)
    except ValidationError:
        _logger.debug("Ignoring malformed %s payload", USER_PREFERENCES_UPDATED, exc_info=True)
        return None
