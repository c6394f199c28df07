import json
import tempfile
import unittest
from pathlib import Path

from hinglish.core.errors import PersistenceError
from hinglish.core.store import JsonFileStore, MemoryStore


class JsonFileStoreTests(unittest.TestCase):
    def test_missing_key_returns_none(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertIsNone(JsonFileStore(tmpdir).get("theme"))

    def test_set_writes_json_document_atomically(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(Path(tmpdir) / "nested")
            store.set("hinglish_history", [{"input": "namaste", "results": [{"hindi": "नमस्ते"}]}])

            path = Path(tmpdir) / "nested" / "hinglish_history.json"
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            self.assertEqual(data[0]["results"][0]["hindi"], "नमस्ते")
            self.assertFalse(path.with_suffix(".json.tmp").exists())

    def test_set_overwrites_previous_value(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(tmpdir)
            store.set("theme", "dark")
            store.set("theme", "light")
            self.assertEqual(store.get("theme"), "light")

    def test_corrupt_file_raises_persistence_error(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(tmpdir)
            (Path(tmpdir) / "theme.json").write_text("not json", encoding="utf-8")
            with self.assertRaises(PersistenceError):
                store.get("theme")

    def test_unserializable_value_raises_persistence_error(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(PersistenceError):
                JsonFileStore(tmpdir).set("theme", object())

    def test_rejects_path_like_keys(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                JsonFileStore(tmpdir).get("../escape")


class MemoryStoreTests(unittest.TestCase):
    def test_values_are_copied(self):
        store = MemoryStore()
        value = [{"id": "1"}]
        store.set("k", value)
        value.append({"id": "2"})
        fetched = store.get("k")
        fetched.append({"id": "3"})
        self.assertEqual(store.get("k"), [{"id": "1"}])
        self.assertEqual(store.writes, 1)

    def test_unserializable_value_raises(self):
        with self.assertRaises(PersistenceError):
            MemoryStore().set("k", {1, 2})


if __name__ == "__main__":
    unittest.main()
