"""Platform adapter interfaces."""

from __future__ import annotations

from typing import Protocol

from hinglish.core.state import AppState


class UiShell(Protocol):
    """User-facing surface (window, terminal, notifications, state indicators)."""

    def set_state(self, state: AppState, message: str | None = None) -> None:
        """Render a new app state and optional status message."""

    def show_notification(self, message: str) -> None:
        """Display a transient notification (toast)."""


class Clipboard(Protocol):
    """System clipboard access."""

    def copy(self, text: str) -> None:
        """Place text on the clipboard. Raises on failure."""


class SystemThemeProvider(Protocol):
    """Reports the operating system's light/dark preference."""

    def preferred_theme(self) -> str | None:
        """Return "light", "dark", or None when unknown."""
