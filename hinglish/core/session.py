"""Session controller: input buffer, conversion requests and their results."""

from __future__ import annotations

import logging

from hinglish.core.history import HistoryEntry
from hinglish.core.state import SessionState

LOG = logging.getLogger("hinglish")

CONVERSION_FAILED = "Conversion failed. Please try again."
COPIED = "Copied to clipboard!"
COPY_FAILED = "Could not copy to clipboard."


class SessionController:
    """Runs at most one transliteration request at a time and records its results.

    All methods must be called from the event loop thread that owns ``state``.
    """

    def __init__(self, backend, ledger, state=None, clipboard=None, on_notification=None, on_state_change=None):
        self.backend = backend
        self.ledger = ledger
        self.state = state if state is not None else SessionState()
        self.clipboard = clipboard
        self.on_notification = on_notification
        self.on_state_change = on_state_change

    def _notify(self, message):
        LOG.debug(f"Notification: {message}")
        if self.on_notification is not None:
            self.on_notification(message)

    def _announce(self):
        if self.on_state_change is not None:
            self.on_state_change(self.state.app_state)

    @property
    def can_submit(self):
        state = self.state
        return bool(state.input_text.strip()) and not state.is_request_in_flight and not state.is_capture_active

    def set_input(self, text):
        self.state.input_text = text

    def clear_input(self):
        if self.state.is_request_in_flight or self.state.is_capture_active:
            return
        self.state.input_text = ""

    async def submit(self):
        """Convert the current input and report whether new candidates arrived.

        A no-op returning False unless ``can_submit`` holds.
        """
        if not self.can_submit:
            LOG.debug("Submit ignored (empty input, request in flight, or capture active)")
            return False

        # Claim the in-flight slot before the first await.
        self.state.is_request_in_flight = True
        self._announce()
        source_text = self.state.input_text
        try:
            candidates = await self.backend.transliterate(source_text)
        except Exception as exc:
            LOG.error(f"Transliteration failed for {source_text!r}: {exc}", exc_info=True)
            self._notify(CONVERSION_FAILED)
            return False
        else:
            self.state.candidates = tuple(candidates)
            if candidates:
                self.ledger.append(HistoryEntry.create(source_text, candidates))
            LOG.info(f"Converted {source_text!r} into {len(candidates)} candidates")
            return True
        finally:
            self.state.is_request_in_flight = False
            self._announce()

    def select_history_entry(self, entry):
        self.state.input_text = entry.source_text
        self.state.candidates = entry.candidates

    def clear_history(self):
        self.ledger.clear()

    def copy_candidate(self, candidate):
        """Copy a candidate's Devanagari text and acknowledge it."""
        if self.clipboard is None:
            self._notify(COPY_FAILED)
            return False
        try:
            self.clipboard.copy(candidate.text)
        except Exception as exc:
            LOG.warning(f"Clipboard copy failed: {exc}")
            self._notify(COPY_FAILED)
            return False
        self._notify(COPIED)
        return True
