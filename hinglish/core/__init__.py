"""Core platform-agnostic application logic."""

from hinglish.core.capture import CapturePhase, CaptureSession
from hinglish.core.config import (
    CONFIG_DIR,
    CONFIG_FILE,
    DEFAULT_CONFIG,
    get_api_key,
    load_config,
    normalize_config,
    save_config,
)
from hinglish.core.errors import CaptureError, PersistenceError, ServiceError, TransliteratorError
from hinglish.core.history import MAX_ENTRIES, HistoryEntry, HistoryLedger
from hinglish.core.preferences import PreferenceState
from hinglish.core.session import SessionController
from hinglish.core.state import (
    STATE_DESCRIPTIONS,
    STATE_ICONS,
    AppState,
    SessionState,
    TransliterationCandidate,
)
from hinglish.core.store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "AppState",
    "STATE_ICONS",
    "STATE_DESCRIPTIONS",
    "SessionState",
    "TransliterationCandidate",
    "HistoryEntry",
    "HistoryLedger",
    "MAX_ENTRIES",
    "SessionController",
    "CaptureSession",
    "CapturePhase",
    "PreferenceState",
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "TransliteratorError",
    "ServiceError",
    "CaptureError",
    "PersistenceError",
    "CONFIG_DIR",
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "get_api_key",
    "load_config",
    "normalize_config",
    "save_config",
]
