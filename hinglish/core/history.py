"""Bounded, persistent log of past conversions, newest first."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Iterator, Sequence

from hinglish.core.errors import PersistenceError
from hinglish.core.state import TransliterationCandidate
from hinglish.core.store import HISTORY_KEY, KeyValueStore

LOG = logging.getLogger("hinglish")

MAX_ENTRIES = 10


def _now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class HistoryEntry:
    """A successful conversion. Never mutated after creation."""

    id: str
    source_text: str
    candidates: tuple[TransliterationCandidate, ...]
    created_at_millis: int

    @classmethod
    def create(cls, source_text: str, candidates: Sequence[TransliterationCandidate]) -> "HistoryEntry":
        """Build a new entry with a fresh id and the current timestamp."""
        return cls(
            id=uuid.uuid4().hex[:12],
            source_text=source_text,
            candidates=tuple(candidates),
            created_at_millis=_now_millis(),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "input": self.source_text,
            "results": [c.to_dict() for c in self.candidates],
            "timestamp": self.created_at_millis,
        }

    @classmethod
    def from_dict(cls, data) -> "HistoryEntry":
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        entry_id = data.get("id")
        source_text = data.get("input")
        results = data.get("results")
        timestamp = data.get("timestamp")
        if not isinstance(entry_id, str) or not isinstance(source_text, str):
            raise ValueError("History entry needs string 'id' and 'input'")
        if not isinstance(results, list):
            raise ValueError("History entry 'results' must be a list")
        if isinstance(timestamp, bool) or not isinstance(timestamp, int):
            raise ValueError("History entry 'timestamp' must be an integer")
        return cls(
            id=entry_id,
            source_text=source_text,
            candidates=tuple(TransliterationCandidate.from_dict(r) for r in results),
            created_at_millis=timestamp,
        )


class HistoryLedger:
    """Most-recent-first history, capped at ``max_entries``.

    Every mutation writes the whole ledger back to the store before returning.
    A failed write is logged; the in-memory ledger stays authoritative.
    """

    def __init__(self, store: KeyValueStore, max_entries: int = MAX_ENTRIES):
        self.store = store
        self.max_entries = max_entries
        self._entries: list[HistoryEntry] = []

    @classmethod
    def load(cls, store: KeyValueStore, max_entries: int = MAX_ENTRIES) -> "HistoryLedger":
        """Build a ledger from whatever the store holds, skipping damaged items."""
        ledger = cls(store, max_entries=max_entries)
        try:
            raw = store.get(HISTORY_KEY)
        except PersistenceError as exc:
            LOG.warning("Failed to load history: %s", exc)
            return ledger

        if raw is None:
            return ledger
        if not isinstance(raw, list):
            LOG.warning("Ignoring stored history of type %s", type(raw).__name__)
            return ledger

        for item in raw:
            try:
                ledger._entries.append(HistoryEntry.from_dict(item))
            except ValueError as exc:
                LOG.warning("Skipping unreadable history entry: %s", exc)
        del ledger._entries[max_entries:]
        return ledger

    def append(self, entry: HistoryEntry) -> None:
        """Insert *entry* at the front, evicting the oldest entries past the cap."""
        self._entries.insert(0, entry)
        del self._entries[self.max_entries:]
        self._persist()

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()
        self._persist()

    def all(self) -> tuple[HistoryEntry, ...]:
        """Return a snapshot of all entries, newest first."""
        return tuple(self._entries)

    def get(self, entry_id: str) -> HistoryEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self.all())

    def _persist(self) -> None:
        try:
            self.store.set(HISTORY_KEY, [e.to_dict() for e in self._entries])
        except PersistenceError as exc:
            LOG.warning("Failed to save history: %s", exc)
