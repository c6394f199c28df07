"""Speech-to-text backend abstractions and implementations."""

from hinglish.stt.base import AudioFormat, LiveCallbacks, LiveTranscriptionBackend, SessionHandle
from hinglish.stt.gemini_live import GeminiLiveBackend

__all__ = ["AudioFormat", "LiveCallbacks", "LiveTranscriptionBackend", "SessionHandle", "GeminiLiveBackend"]
