"""Shared application state values."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AppState(str, Enum):
    """High-level user-visible app states."""

    READY = "ready"
    CONVERTING = "converting"
    LISTENING = "listening"
    ERROR = "error"


STATE_ICONS = {
    AppState.READY: "🔤",
    AppState.CONVERTING: "⚙️",
    AppState.LISTENING: "🎙",
    AppState.ERROR: "❌",
}

STATE_DESCRIPTIONS = {
    AppState.READY: "Type Hinglish text or use the mic",
    AppState.CONVERTING: "Converting...",
    AppState.LISTENING: "Live voice - speak in Hinglish",
    AppState.ERROR: "Error - check the debug log",
}


@dataclass(frozen=True)
class TransliterationCandidate:
    """One Devanagari rendering of the input with a short context label."""

    text: str
    label: str

    def to_dict(self) -> dict:
        return {"hindi": self.text, "context": self.label}

    @classmethod
    def from_dict(cls, data) -> "TransliterationCandidate":
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        text = data.get("hindi")
        label = data.get("context")
        if not isinstance(text, str) or not isinstance(label, str):
            raise ValueError(f"Candidate needs string 'hindi' and 'context': {data!r}")
        return cls(text=text, label=label)


@dataclass
class SessionState:
    """Transient state of one user session. Never persisted."""

    input_text: str = ""
    candidates: tuple[TransliterationCandidate, ...] = field(default_factory=tuple)
    is_request_in_flight: bool = False
    is_capture_active: bool = False

    @property
    def app_state(self) -> AppState:
        if self.is_request_in_flight:
            return AppState.CONVERTING
        if self.is_capture_active:
            return AppState.LISTENING
        return AppState.READY
