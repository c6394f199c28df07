"""Desktop clipboard and system appearance adapters."""

from __future__ import annotations

import logging
import subprocess
import sys

import pyperclip

LOG = logging.getLogger("hinglish")


class PyperclipClipboard:
    """Clipboard adapter backed by pyperclip."""

    def copy(self, text):
        pyperclip.copy(text)


class DesktopThemeProvider:
    """Reads the light/dark appearance setting of the desktop session."""

    def __init__(self, platform=None):
        self.platform = platform or sys.platform

    def _run(self, cmd):
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=False, timeout=2)
        except Exception as exc:
            LOG.debug(f"theme query {cmd[0]} failed: {exc}")
            return None

    def preferred_theme(self):
        """Return "dark", "light", or None when the platform gives no answer."""
        if self.platform == "darwin":
            # AppleInterfaceStyle only exists while dark mode is on.
            result = self._run(["defaults", "read", "-g", "AppleInterfaceStyle"])
            if result is None:
                return None
            return "dark" if "dark" in result.stdout.lower() else "light"

        if self.platform.startswith("linux"):
            result = self._run(["gsettings", "get", "org.gnome.desktop.interface", "color-scheme"])
            if result is None or result.returncode != 0:
                return None
            output = result.stdout.lower()
            if "dark" in output:
                return "dark"
            if "light" in output or "default" in output:
                return "light"
            return None

        return None
