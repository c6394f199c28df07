import tempfile
import unittest

from hinglish.core.errors import PersistenceError
from hinglish.core.history import MAX_ENTRIES, HistoryEntry, HistoryLedger
from hinglish.core.state import TransliterationCandidate
from hinglish.core.store import HISTORY_KEY, JsonFileStore, MemoryStore


def make_entry(text):
    return HistoryEntry.create(text, [TransliterationCandidate(f"{text}-hi", "Formal")])


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise PersistenceError("disk full")


class HistoryLedgerTests(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore()
        self.ledger = HistoryLedger(self.store)

    def test_append_puts_newest_first(self):
        self.ledger.append(make_entry("one"))
        self.ledger.append(make_entry("two"))
        self.assertEqual([e.source_text for e in self.ledger.all()], ["two", "one"])

    def test_length_never_exceeds_cap(self):
        for i in range(25):
            self.ledger.append(make_entry(f"entry {i}"))
            self.assertLessEqual(len(self.ledger.all()), MAX_ENTRIES)
        self.assertEqual(len(self.ledger), 10)
        self.assertEqual(self.ledger.all()[0].source_text, "entry 24")

    def test_eleventh_append_evicts_only_the_tail(self):
        for i in range(10):
            self.ledger.append(make_entry(f"entry {i}"))
        before = self.ledger.all()

        newest = make_entry("entry 10")
        self.ledger.append(newest)

        after = self.ledger.all()
        self.assertEqual(after[0], newest)
        self.assertEqual(after[1:], before[:-1])
        self.assertNotIn(before[-1], after)

    def test_append_persists_before_returning(self):
        entry = make_entry("namaste")
        self.ledger.append(entry)
        stored = self.store.get(HISTORY_KEY)
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]["input"], "namaste")
        self.assertEqual(stored[0]["results"], [{"hindi": "namaste-hi", "context": "Formal"}])
        self.assertEqual(stored[0]["id"], entry.id)

    def test_clear_empties_and_persists(self):
        self.ledger.append(make_entry("a"))
        self.ledger.append(make_entry("b"))
        self.ledger.clear()
        self.assertEqual(self.ledger.all(), ())
        self.assertEqual(self.store.get(HISTORY_KEY), [])

    def test_all_is_a_snapshot(self):
        self.ledger.append(make_entry("a"))
        snapshot = self.ledger.all()
        self.ledger.append(make_entry("b"))
        self.assertEqual(len(snapshot), 1)

    def test_get_by_id(self):
        entry = make_entry("a")
        self.ledger.append(entry)
        self.assertIs(self.ledger.get(entry.id), entry)
        self.assertIsNone(self.ledger.get("missing"))

    def test_entry_ids_are_unique(self):
        ids = {make_entry("same").id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_store_failure_keeps_memory_state(self):
        ledger = HistoryLedger(FailingStore())
        with self.assertLogs("hinglish", level="WARNING") as logs:
            ledger.append(make_entry("kept"))
        self.assertEqual(ledger.all()[0].source_text, "kept")
        self.assertTrue(any("Failed to save history" in line for line in logs.output))


class HistoryLoadTests(unittest.TestCase):
    def test_load_round_trips_through_file_store(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(tmpdir)
            ledger = HistoryLedger(store)
            ledger.append(make_entry("pehla"))
            ledger.append(make_entry("doosra"))

            reloaded = HistoryLedger.load(JsonFileStore(tmpdir))

            self.assertEqual(reloaded.all(), ledger.all())

    def test_load_skips_damaged_entries(self):
        good = make_entry("good").to_dict()
        store = MemoryStore({HISTORY_KEY: [good, {"id": 5}, "junk", {**good, "results": [{"hindi": 1}]}]})
        with self.assertLogs("hinglish", level="WARNING"):
            ledger = HistoryLedger.load(store)
        self.assertEqual([e.source_text for e in ledger.all()], ["good"])

    def test_load_truncates_oversized_history(self):
        entries = [make_entry(f"e{i}").to_dict() for i in range(15)]
        ledger = HistoryLedger.load(MemoryStore({HISTORY_KEY: entries}))
        self.assertEqual(len(ledger), 10)
        self.assertEqual(ledger.all()[0].source_text, "e0")

    def test_load_ignores_non_list_value(self):
        with self.assertLogs("hinglish", level="WARNING"):
            ledger = HistoryLedger.load(MemoryStore({HISTORY_KEY: {"not": "a list"}}))
        self.assertEqual(len(ledger), 0)

    def test_load_with_unreadable_file_starts_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = JsonFileStore(tmpdir)
            (store.directory / f"{HISTORY_KEY}.json").write_text("{broken", encoding="utf-8")
            with self.assertLogs("hinglish", level="WARNING"):
                ledger = HistoryLedger.load(store)
            self.assertEqual(len(ledger), 0)


if __name__ == "__main__":
    unittest.main()
