"""pylancache - Optimistic preference reconciliation for the LANCache dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pylancache")
except PackageNotFoundError:
    __version__ = "0+local"
from pylancache.config import DEFAULT_COOLDOWN_SECONDS, PreferencesConfig
from pylancache.exceptions import InvalidTimeSettingError, LancacheConfigError, LancacheError
from pylancache.ingestion.push import UserPreferencesUpdatedEvent, parse_preferences_updated
from pylancache.models import TimeSetting, TimezoneFlags, UserPreferences
from pylancache.preferences import PendingPreferences
from pylancache.state.events import PreferenceChange
from pylancache.state.session import SessionPreferencesStore
from pylancache.state.store import MISSING, PendingEntry, PendingStore

__all__ = [
    "__version__",
    "DEFAULT_COOLDOWN_SECONDS",
    "InvalidTimeSettingError",
    "LancacheConfigError",
    "LancacheError",
    "MISSING",
    "PendingEntry",
    "PendingPreferences",
    "PendingStore",
    "PreferenceChange",
    "PreferencesConfig",
    "SessionPreferencesStore",
    "TimeSetting",
    "TimezoneFlags",
    "UserPreferences",
    "UserPreferencesUpdatedEvent",
    "parse_preferences_updated",
]
