"""Theme preference with a persisted override and a system-default fallback."""

from __future__ import annotations

import logging

from hinglish.core.errors import PersistenceError
from hinglish.core.store import THEME_KEY

LOG = logging.getLogger("hinglish")

LIGHT = "light"
DARK = "dark"
VALID_THEMES = {LIGHT, DARK}


class PreferenceState:
    """Holds the light/dark theme and writes every change to the store."""

    def __init__(self, store, system_theme=None):
        self.store = store
        self.system_theme = system_theme
        self.theme = LIGHT

    def _system_default(self):
        if self.system_theme is None:
            return None
        try:
            theme = self.system_theme.preferred_theme()
        except Exception as exc:
            LOG.debug(f"System theme lookup failed: {exc}")
            return None
        return theme if theme in VALID_THEMES else None

    def load(self):
        """Read the persisted theme, else the system default, else light."""
        saved = None
        try:
            saved = self.store.get(THEME_KEY)
        except PersistenceError as exc:
            LOG.warning(f"Failed to load theme preference: {exc}")

        if isinstance(saved, str) and saved in VALID_THEMES:
            self.theme = saved
        else:
            if saved is not None:
                LOG.warning(f"Ignoring unknown stored theme {saved!r}")
            self.theme = self._system_default() or LIGHT
        return self.theme

    def toggle(self):
        """Flip the theme, persist it and return the new value."""
        self.theme = DARK if self.theme == LIGHT else LIGHT
        try:
            self.store.set(THEME_KEY, self.theme)
        except PersistenceError as exc:
            LOG.warning(f"Failed to save theme preference: {exc}")
        return self.theme
