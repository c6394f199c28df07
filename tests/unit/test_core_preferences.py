import unittest

from hinglish.core.errors import PersistenceError
from hinglish.core.preferences import PreferenceState
from hinglish.core.store import THEME_KEY, MemoryStore


class StubSystemTheme:
    def __init__(self, theme):
        self.theme = theme
        self.calls = 0

    def preferred_theme(self):
        self.calls += 1
        if isinstance(self.theme, Exception):
            raise self.theme
        return self.theme


class BrokenStore(MemoryStore):
    def get(self, key):
        raise PersistenceError("unreadable")

    def set(self, key, value):
        raise PersistenceError("read-only")


class PreferenceStateTests(unittest.TestCase):
    def test_system_dark_then_toggle_persists_light(self):
        store = MemoryStore()
        prefs = PreferenceState(store, system_theme=StubSystemTheme("dark"))

        self.assertEqual(prefs.load(), "dark")
        self.assertEqual(prefs.toggle(), "light")

        reloaded = PreferenceState(store, system_theme=StubSystemTheme("dark"))
        self.assertEqual(reloaded.load(), "light")

    def test_persisted_value_wins_over_system(self):
        system = StubSystemTheme("light")
        prefs = PreferenceState(MemoryStore({THEME_KEY: "dark"}), system_theme=system)
        self.assertEqual(prefs.load(), "dark")
        self.assertEqual(system.calls, 0)

    def test_defaults_to_light_without_any_source(self):
        self.assertEqual(PreferenceState(MemoryStore()).load(), "light")
        self.assertEqual(PreferenceState(MemoryStore(), system_theme=StubSystemTheme(None)).load(), "light")

    def test_system_lookup_error_falls_back_to_light(self):
        prefs = PreferenceState(MemoryStore(), system_theme=StubSystemTheme(OSError("no gsettings")))
        self.assertEqual(prefs.load(), "light")

    def test_unknown_stored_value_is_ignored(self):
        prefs = PreferenceState(MemoryStore({THEME_KEY: "sepia"}), system_theme=StubSystemTheme("dark"))
        with self.assertLogs("hinglish", level="WARNING"):
            self.assertEqual(prefs.load(), "dark")

    def test_malformed_stored_value_counts_as_absent(self):
        for saved in (["dark"], {"theme": "dark"}, 1):
            with self.subTest(saved=saved):
                prefs = PreferenceState(MemoryStore({THEME_KEY: saved}), system_theme=StubSystemTheme("dark"))
                with self.assertLogs("hinglish", level="WARNING"):
                    self.assertEqual(prefs.load(), "dark")
        with self.assertLogs("hinglish", level="WARNING"):
            self.assertEqual(PreferenceState(MemoryStore({THEME_KEY: ["dark"]})).load(), "light")

    def test_toggle_writes_every_change(self):
        store = MemoryStore()
        prefs = PreferenceState(store)
        prefs.load()
        self.assertEqual(prefs.toggle(), "dark")
        self.assertEqual(store.get(THEME_KEY), "dark")
        self.assertEqual(prefs.toggle(), "light")
        self.assertEqual(store.get(THEME_KEY), "light")
        self.assertEqual(store.writes, 2)

    def test_store_failures_do_not_raise(self):
        prefs = PreferenceState(BrokenStore(), system_theme=StubSystemTheme("dark"))
        with self.assertLogs("hinglish", level="WARNING"):
            self.assertEqual(prefs.load(), "dark")
        with self.assertLogs("hinglish", level="WARNING"):
            self.assertEqual(prefs.toggle(), "light")
        self.assertEqual(prefs.theme, "light")


if __name__ == "__main__":
    unittest.main()
