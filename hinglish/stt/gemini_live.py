"""Gemini Live streaming transcription backend."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from google import genai
from google.genai import types
from websockets.exceptions import ConnectionClosedOK

from hinglish.core.errors import CaptureError

LOG = logging.getLogger("hinglish")

DEFAULT_LIVE_MODEL = "gemini-2.5-flash-native-audio-preview-09-2025"
DEFAULT_VOICE = "Zephyr"

SYSTEM_INSTRUCTION = (
    "You are a transcription assistant. Only transcribe the user speech into "
    "Romanized Hindi (Hinglish). Do not talk back."
)


def build_live_config(voice_name=DEFAULT_VOICE):
    return types.LiveConnectConfig(
        response_modalities=[types.Modality.AUDIO],
        input_audio_transcription=types.AudioTranscriptionConfig(),
        speech_config=types.SpeechConfig(
            voice_config=types.VoiceConfig(
                prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice_name),
            ),
        ),
        system_instruction=SYSTEM_INSTRUCTION,
    )


def extract_input_transcription(message):
    """Return the user-speech transcription text carried by a server message, if any."""
    content = getattr(message, "server_content", None)
    if content is None:
        return None
    transcription = getattr(content, "input_transcription", None)
    if transcription is None:
        return None
    return transcription.text or None


class GeminiLiveSession:
    """Handle over one connected Gemini Live session."""

    def __init__(self, session, exit_stack, audio_format, callbacks):
        self.session = session
        self.audio_format = audio_format
        self.callbacks = callbacks
        self._exit_stack = exit_stack
        self._closed = False
        self._receiver = asyncio.create_task(self._receive_loop())

    async def _receive_loop(self):
        try:
            # receive() ends at every turn boundary, so keep re-entering it.
            while not self._closed:
                async for message in self.session.receive():
                    text = extract_input_transcription(message)
                    if text:
                        self.callbacks.on_fragment(text)
        except asyncio.CancelledError:
            raise
        except ConnectionClosedOK:
            if not self._closed:
                LOG.info("Live session closed by server")
                self.callbacks.on_close()
        except Exception as exc:
            if not self._closed:
                LOG.error(f"Live session error: {exc}", exc_info=True)
                self.callbacks.on_error(exc)

    async def send(self, frame):
        if self._closed:
            return
        await self.session.send_realtime_input(
            audio=types.Blob(data=frame, mime_type=self.audio_format.mime_type),
        )

    async def close(self):
        if self._closed:
            return
        self._closed = True
        if self._receiver is not asyncio.current_task():
            self._receiver.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._receiver
        try:
            await self._exit_stack.aclose()
        except Exception as exc:
            LOG.debug(f"Error while closing live session: {exc}")


class GeminiLiveBackend:
    """Opens Gemini Live sessions that transcribe microphone audio."""

    def __init__(self, api_key=None, model=DEFAULT_LIVE_MODEL, voice_name=DEFAULT_VOICE, client=None):
        self.model = model
        self.voice_name = voice_name
        self.client = client or genai.Client(api_key=api_key)

    async def open(self, audio_format, callbacks):
        exit_stack = contextlib.AsyncExitStack()
        try:
            session = await exit_stack.enter_async_context(
                self.client.aio.live.connect(model=self.model, config=build_live_config(self.voice_name))
            )
        except Exception as exc:
            await exit_stack.aclose()
            raise CaptureError(f"Failed to connect live session: {exc}") from exc

        LOG.info(f"Live session opened with {self.model}")
        handle = GeminiLiveSession(session, exit_stack, audio_format, callbacks)
        callbacks.on_open()
        return handle
