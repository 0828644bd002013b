"""Events emitted by the state layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class PreferenceChange(BaseModel):
    """A user-visible preference of the current session changed value."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    key: str
    value: Any
