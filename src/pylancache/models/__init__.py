"""Pydantic models for pylancache."""

from pylancache.models.preferences import (
    DEFAULT_PREFERENCES,
    SHOW_YEAR_IN_DATES,
    USE_24_HOUR_FORMAT,
    USE_LOCAL_TIMEZONE,
    TimeSetting,
    TimezoneFlags,
    UserPreferences,
    field_for_key,
)

__all__ = [
    "DEFAULT_PREFERENCES",
    "SHOW_YEAR_IN_DATES",
    "USE_24_HOUR_FORMAT",
    "USE_LOCAL_TIMEZONE",
    "TimeSetting",
    "TimezoneFlags",
    "UserPreferences",
    "field_for_key",
]
