"""Error types shared across the transliterator core and its adapters."""


class TransliteratorError(Exception):
    """Base class for recoverable application errors."""


class ServiceError(TransliteratorError):
    """The remote transliteration service failed (network, quota, bad response)."""


class CaptureError(TransliteratorError):
    """Voice capture failed (microphone unavailable, permission, stream error)."""


class PersistenceError(TransliteratorError):
    """The persistent store could not be read or written."""
