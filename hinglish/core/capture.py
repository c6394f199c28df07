"""Voice capture session: microphone audio in, transcript fragments into the input buffer.

The session moves Idle -> Starting -> Active -> Idle. Each start bumps a
generation counter and every callback carries the generation it was created
for, so callbacks from a torn-down session are dropped instead of touching
the current one. The microphone and the session handle are detached from the
object synchronously and released exactly once, by whichever path detached
them.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from functools import partial

from hinglish.core.errors import CaptureError
from hinglish.core.state import SessionState
from hinglish.stt.base import AudioFormat, LiveCallbacks

LOG = logging.getLogger("hinglish")

VOICE_STOPPED = "Voice input stopped."

# Upper bound on waiting for the audio pump to notice a stop; one chunk read is ~0.25 s.
PUMP_JOIN_TIMEOUT = 2.0


class CapturePhase(str, Enum):
    IDLE = "idle"
    STARTING = "starting"
    ACTIVE = "active"


def append_fragment(text, fragment):
    """Append a transcript fragment, adding one space only where needed."""
    if text and not text[-1].isspace():
        return f"{text} {fragment}"
    return text + fragment


class CaptureSession:
    """Owns the microphone and the live transcription session while capturing."""

    def __init__(
        self,
        state: SessionState,
        backend,
        audio_factory,
        audio_format: AudioFormat | None = None,
        on_notification=None,
        on_state_change=None,
    ):
        self.state = state
        self.backend = backend
        self.audio_factory = audio_factory
        self.audio_format = audio_format or AudioFormat()
        self.on_notification = on_notification
        self.on_state_change = on_state_change
        self.phase = CapturePhase.IDLE
        self._generation = 0
        self._audio = None
        self._handle = None
        self._pump_task: asyncio.Task | None = None
        self._releases: set[asyncio.Task] = set()

    @property
    def is_active(self) -> bool:
        return self.phase is not CapturePhase.IDLE

    def _notify(self, message):
        if self.on_notification is not None:
            self.on_notification(message)

    def _announce(self):
        if self.on_state_change is not None:
            self.on_state_change(self.state.app_state)

    def _callbacks(self, generation) -> LiveCallbacks:
        return LiveCallbacks(
            on_open=partial(self._on_open, generation),
            on_fragment=partial(self._on_fragment, generation),
            on_error=partial(self._on_error, generation),
            on_close=partial(self._on_close, generation),
        )

    async def start(self) -> None:
        """Open the microphone and a live session; no-op if busy."""
        if self.phase is not CapturePhase.IDLE:
            return
        if self.state.is_request_in_flight:
            LOG.debug("Capture start ignored while a conversion is in flight")
            return

        self._generation += 1
        generation = self._generation
        self.phase = CapturePhase.STARTING
        self.state.is_capture_active = True
        self._announce()

        audio = self.audio_factory()
        try:
            await asyncio.to_thread(audio.open)
        except Exception as exc:
            if generation != self._generation:
                return
            self._detach()
            LOG.error(f"Microphone open failed: {exc}")
            if isinstance(exc, CaptureError):
                raise
            raise CaptureError(f"Microphone unavailable: {exc}") from exc

        if generation != self._generation:
            # stop() ran while the device was opening.
            await self._release(None, None, audio)
            return
        self._audio = audio

        try:
            handle = await self.backend.open(self.audio_format, self._callbacks(generation))
        except Exception as exc:
            if generation != self._generation:
                # Already torn down by stop() or an error callback.
                return
            await self._release(*self._detach())
            LOG.error(f"Live session handshake failed: {exc}", exc_info=True)
            if isinstance(exc, CaptureError):
                raise
            raise CaptureError(f"Failed to open live session: {exc}") from exc

        if generation != self._generation:
            LOG.debug("Live session opened after stop; closing it")
            await self._release(None, handle, None)
            return

        self._handle = handle
        self.phase = CapturePhase.ACTIVE
        self._pump_task = asyncio.create_task(self._pump(generation, audio, handle))
        LOG.info("Voice capture active")

    async def stop(self) -> None:
        """Stop capturing and release everything. Safe to call at any time."""
        if self.phase is CapturePhase.IDLE:
            return
        await self._release(*self._detach())
        LOG.info("Voice capture stopped")

    async def toggle(self) -> None:
        if self.is_active:
            await self.stop()
        else:
            await self.start()

    async def wait_released(self) -> None:
        """Wait for background releases scheduled by error or close callbacks."""
        while self._releases:
            await asyncio.gather(*list(self._releases), return_exceptions=True)

    def _detach(self):
        """Move to Idle and hand back the resources that still need releasing."""
        self._generation += 1
        was_active = self.phase is not CapturePhase.IDLE
        self.phase = CapturePhase.IDLE
        self.state.is_capture_active = False
        pump, self._pump_task = self._pump_task, None
        handle, self._handle = self._handle, None
        audio, self._audio = self._audio, None
        if was_active:
            self._announce()
        return pump, handle, audio

    async def _release(self, pump, handle, audio):
        if pump is not None and pump is not asyncio.current_task():
            _, pending = await asyncio.wait({pump}, timeout=PUMP_JOIN_TIMEOUT)
            for task in pending:
                # The blocked read thread cannot be interrupted; it finishes or
                # errors on its own once the stream below is closed.
                LOG.warning("Audio pump did not stop in time; abandoning its read thread")
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
        if handle is not None:
            try:
                await handle.close()
            except Exception as exc:
                LOG.warning(f"Error closing live session: {exc}")
        if audio is not None:
            try:
                await asyncio.to_thread(audio.close)
            except Exception as exc:
                LOG.warning(f"Error releasing microphone: {exc}")

    def _schedule_release(self, resources):
        task = asyncio.get_running_loop().create_task(self._release(*resources))
        self._releases.add(task)
        task.add_done_callback(self._releases.discard)

    def _fail(self, generation, exc, notify=True):
        if generation != self._generation:
            return
        LOG.warning(f"Voice capture ended: {exc}")
        self._schedule_release(self._detach())
        if notify:
            self._notify(VOICE_STOPPED)

    async def _pump(self, generation, audio, handle):
        try:
            while generation == self._generation:
                frame = await asyncio.to_thread(audio.read)
                if generation != self._generation:
                    break
                await handle.send(frame)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            LOG.error(f"Audio streaming failed: {exc}", exc_info=True)
            self._fail(generation, exc)

    def _on_open(self, generation):
        if generation != self._generation:
            LOG.debug("Ignoring open event from a stale live session")
            return
        LOG.debug("Live session open")

    def _on_fragment(self, generation, text):
        if generation != self._generation or self.phase is CapturePhase.IDLE:
            LOG.debug(f"Dropping fragment from inactive session: {text!r}")
            return
        if not text:
            return
        self.state.input_text = append_fragment(self.state.input_text, text)

    def _on_error(self, generation, exc):
        self._fail(generation, exc)

    def _on_close(self, generation):
        self._fail(generation, "live session closed", notify=False)
