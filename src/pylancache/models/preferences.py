"""User preference models shared by the REST load path and push updates."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pylancache.exceptions import InvalidTimeSettingError

#: Pending-store keys backing the compound time setting.
USE_LOCAL_TIMEZONE = "useLocalTimezone"
USE_24_HOUR_FORMAT = "use24HourFormat"
SHOW_YEAR_IN_DATES = "showYearInDates"


class TimezoneFlags(NamedTuple):
    """The two booleans behind a :class:`TimeSetting`."""

    use_local: bool
    use_24_hour: bool


class TimeSetting(StrEnum):
    """Combined clock source and hour format shown in one control."""

    SERVER_24H = "server-24h"
    SERVER_12H = "server-12h"
    LOCAL_24H = "local-24h"
    LOCAL_12H = "local-12h"

    @classmethod
    def parse(cls, value: TimeSetting | str) -> TimeSetting:
        try:
            return cls(value)
        except ValueError:
            raise InvalidTimeSettingError(value) from None

    @classmethod
    def from_flags(cls, use_local: bool, use_24_hour: bool) -> TimeSetting:
        if use_local:
            return cls.LOCAL_24H if use_24_hour else cls.LOCAL_12H
        return cls.SERVER_24H if use_24_hour else cls.SERVER_12H

    @property
    def flags(self) -> TimezoneFlags:
        return TimezoneFlags(
            use_local=self.value.startswith("local"),
            use_24_hour=self.value.endswith("24h"),
        )


class UserPreferences(BaseModel):
    """Normalized per-session preferences.

    Accepts the camelCase payload sent by the server.  Missing or ``null``
    fields fall back to the defaults below, so two payloads that differ
    only in omitted keys compare equal.  Boolean fields are strict: a
    string such as ``"true"`` is rejected rather than coerced.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    selected_theme: str | None = None
    sharp_corners: StrictBool = False
    disable_focus_outlines: StrictBool = True
    disable_tooltips: StrictBool = False
    pics_always_visible: StrictBool = False
    disable_sticky_notifications: StrictBool = False
    use_local_timezone: StrictBool = False
    use_24_hour_format: StrictBool = Field(default=True, alias=USE_24_HOUR_FORMAT)
    show_datasource_labels: StrictBool = True
    show_year_in_dates: StrictBool = False
    refresh_rate: str | None = None
    allowed_time_formats: list[str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        return {key: value for key, value in values.items() if value is not None}

    @field_validator("selected_theme", mode="before")
    @classmethod
    def _empty_theme_is_none(cls, value: Any) -> Any:
        return value or None

    @property
    def time_setting(self) -> TimeSetting:
        return TimeSetting.from_flags(self.use_local_timezone, self.use_24_hour_format)

    def to_api(self) -> dict[str, Any]:
        """Dump using the server's camelCase keys."""
        return self.model_dump(by_alias=True)

    def with_value(self, key: str, value: Any) -> UserPreferences:
        """Return a copy with one camelCase (or snake_case) key replaced."""
        data = self.to_api()
        field_name = field_for_key(key)
        alias = type(self).model_fields[field_name].alias or field_name
        data[alias] = value
        return type(self).model_validate(data)


DEFAULT_PREFERENCES = UserPreferences()


def field_for_key(key: str) -> str:
    """Map a camelCase preference key to its model field name."""
    fields = UserPreferences.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    raise KeyError(key)
