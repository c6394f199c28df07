"""Platform adapter interfaces and desktop implementations."""

from hinglish.platform.base import Clipboard, SystemThemeProvider, UiShell

__all__ = ["UiShell", "Clipboard", "SystemThemeProvider"]
