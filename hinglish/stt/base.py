"""Live transcription backend protocol."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True)
class AudioFormat:
    """Raw PCM layout of the frames pushed into a live session."""

    sample_rate: int = 16000
    channels: int = 1
    sample_width: int = 2

    @classmethod
    def from_config(cls, config) -> "AudioFormat":
        return cls(sample_rate=config["rate"], channels=config["channels"])

    @property
    def mime_type(self) -> str:
        return f"audio/pcm;rate={self.sample_rate}"


@dataclass
class LiveCallbacks:
    """Event hooks a live session invokes on the event loop thread."""

    on_open: Callable[[], None]
    on_fragment: Callable[[str], None]
    on_error: Callable[[BaseException], None]
    on_close: Callable[[], None]


class SessionHandle(Protocol):
    """An open streaming transcription session."""

    async def send(self, frame: bytes) -> None:
        """Push one raw audio frame."""

    async def close(self) -> None:
        """Terminate the session. Safe to call more than once."""


class LiveTranscriptionBackend(Protocol):
    """Opens streaming speech-to-text sessions."""

    async def open(self, audio_format: AudioFormat, callbacks: LiveCallbacks) -> SessionHandle:
        """Connect and return a handle; raise CaptureError if the handshake fails.

        After on_error or on_close fires, no further on_fragment calls are made.
        """
