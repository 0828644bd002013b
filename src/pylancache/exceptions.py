"""Custom exception hierarchy for pylancache."""

from __future__ import annotations


class LancacheError(Exception):
    """Base exception for all pylancache errors."""


class LancacheConfigError(LancacheError):
    """Invalid or missing configuration."""


class InvalidTimeSettingError(LancacheError, ValueError):
    """Unknown compound time setting tag.

    Valid tags are ``server-24h``, ``server-12h``, ``local-24h`` and
    ``local-12h``.  Raised before any pending state is touched.
    """

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unknown time setting: {value!r}")
