"""Preference subsystem configuration for pylancache."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from pylancache.exceptions import LancacheConfigError

#: Default protection window after a local preference write, in seconds.
DEFAULT_COOLDOWN_SECONDS: float = 2.0


def _env_cooldown_ms(value: str) -> float:
    try:
        millis = float(value.strip())
    except ValueError as exc:
        raise LancacheConfigError(f"LANCACHE_PREFERENCE_COOLDOWN_MS is not a number: {value!r}") from exc
    return millis / 1000.0


@dataclasses.dataclass(frozen=True)
class PreferencesConfig:
    """Configuration for the optimistic preference layer.

    Parameters
    ----------
    cooldown_seconds : float
        How long a locally set preference overrides conflicting values
        delivered by the push channel.  Defaults to 2 seconds.
    current_session_id : str or None
        Device or guest session id of this dashboard instance.  Push
        snapshots are only corrected for this session.
    """

    cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS
    current_session_id: str | None = None

    def __post_init__(self) -> None:
        cooldown = self.cooldown_seconds
        if isinstance(cooldown, bool) or not isinstance(cooldown, (int, float)):
            raise LancacheConfigError(f"cooldown_seconds must be a number, got {cooldown!r}")
        if math.isnan(cooldown) or cooldown <= 0:
            raise LancacheConfigError(f"cooldown_seconds must be positive, got {cooldown!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> PreferencesConfig:
        """Create configuration from environment variables.

        Reads ``LANCACHE_PREFERENCE_COOLDOWN_MS`` (milliseconds) and
        ``LANCACHE_SESSION_ID``.  Explicit keyword arguments override
        environment values.

        Returns
        -------
        PreferencesConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        cooldown_env = env.get("LANCACHE_PREFERENCE_COOLDOWN_MS")
        if cooldown_env is not None and "cooldown_seconds" not in overrides:
            config_kwargs["cooldown_seconds"] = _env_cooldown_ms(cooldown_env)

        session_env = env.get("LANCACHE_SESSION_ID")
        if session_env is not None and session_env.strip():
            config_kwargs["current_session_id"] = session_env.strip()

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
