"""Wires the session components together for a front end."""

from __future__ import annotations

import logging

from hinglish.core.capture import CaptureSession
from hinglish.core.config import get_api_key
from hinglish.core.history import HistoryLedger
from hinglish.core.preferences import PreferenceState
from hinglish.core.session import SessionController
from hinglish.core.state import SessionState
from hinglish.core.store import JsonFileStore
from hinglish.stt.base import AudioFormat

LOG = logging.getLogger("hinglish")


class TransliteratorApp:
    """One user session: history, input state, voice capture and theme."""

    def __init__(
        self,
        config,
        store,
        transliterator,
        live_backend,
        audio_factory,
        clipboard=None,
        system_theme=None,
        shell=None,
    ):
        self.config = config
        self.shell = shell
        self.state = SessionState()
        self.ledger = HistoryLedger.load(store)
        self.preferences = PreferenceState(store, system_theme=system_theme)
        self.controller = SessionController(
            transliterator,
            self.ledger,
            state=self.state,
            clipboard=clipboard,
            on_notification=self._show_notification,
            on_state_change=self._set_state,
        )
        self.capture = CaptureSession(
            self.state,
            live_backend,
            audio_factory,
            audio_format=AudioFormat.from_config(config),
            on_notification=self._show_notification,
            on_state_change=self._set_state,
        )

    @classmethod
    def from_config(cls, config, shell=None):
        """Build an app talking to Gemini, the default microphone and the desktop."""
        from hinglish.core.audio import MicrophoneSource
        from hinglish.llm.gemini import GeminiTransliterator
        from hinglish.platform.desktop import DesktopThemeProvider, PyperclipClipboard
        from hinglish.stt.gemini_live import GeminiLiveBackend

        api_key = get_api_key()
        if not api_key:
            LOG.warning("No GEMINI_API_KEY or API_KEY set; remote calls will fail")
        return cls(
            config,
            JsonFileStore(),
            GeminiTransliterator(api_key=api_key, model=config["model"]),
            GeminiLiveBackend(api_key=api_key, model=config["live_model"], voice_name=config["voice_name"]),
            lambda: MicrophoneSource(config),
            clipboard=PyperclipClipboard(),
            system_theme=DesktopThemeProvider(),
            shell=shell,
        )

    def _show_notification(self, message):
        if self.shell is not None:
            self.shell.show_notification(message)

    def _set_state(self, state):
        if self.shell is not None:
            self.shell.set_state(state)

    def start(self):
        """Load persisted preferences; returns the active theme."""
        theme = self.preferences.load()
        self._set_state(self.state.app_state)
        return theme

    async def shutdown(self):
        await self.capture.stop()
        await self.capture.wait_released()
