from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from smartdoc.analysis.exceptions import SchemaMismatchError
from smartdoc.analysis.validator import build_stats
from smartdoc.history.exceptions import PersistenceCorruptError
from smartdoc.history.models import HistoryEntry
from smartdoc.history.store_base import BaseKeyValueStore
from smartdoc.logging.logger import Log

MAX_HISTORY_ENTRIES = 10
DEFAULT_HISTORY_KEY = "smartdoc_history"


class HistoryLedger:
    """Bounded, most-recent-first record of past analyses.

    Loaded once from the store at construction; every mutation is written
    straight through to the store.
    """

    def __init__(
        self,
        store: BaseKeyValueStore,
        key: str = DEFAULT_HISTORY_KEY,
        max_entries: int = MAX_HISTORY_ENTRIES,
    ) -> None:
        self._store = store
        self._key = key
        self._max_entries = max_entries
        self._entries = self._load()

    def list(self) -> list[HistoryEntry]:
        return list(self._entries)

    def record(self, entry: HistoryEntry) -> None:
        """Insert at the front, replacing any entry for the same document.

        The in-memory list only changes once the store write succeeded.
        """
        others = [e for e in self._entries if e.id != entry.id]
        entries = [entry, *others][: self._max_entries]
        self._persist(entries)
        self._entries = entries
        Log.info(f"Recorded '{entry.file_name}' in history ({len(entries)} entries)")

    def clear(self) -> None:
        self._store.delete(self._key)
        self._entries = []
        Log.info("History cleared")

    def _persist(self, entries: list[HistoryEntry]) -> None:
        payload = json.dumps([e.to_dict() for e in entries])
        self._store.set(self._key, payload)

    def _load(self) -> list[HistoryEntry]:
        try:
            raw = self._store.get(self._key)
            if raw is None:
                return []
            return self._decode(raw)[: self._max_entries]
        except PersistenceCorruptError as exc:
            Log.warning(f"Discarding corrupt history: {exc}")
            return []

    @staticmethod
    def _decode(raw: str) -> list[HistoryEntry]:
        try:
            data = json.loads(raw)
        except ValueError as exc:
            raise PersistenceCorruptError(f"History is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise PersistenceCorruptError("History must be a JSON array")
        return [_entry_from_dict(item, i) for i, item in enumerate(data)]


def _entry_from_dict(raw: Any, index: int) -> HistoryEntry:
    if not isinstance(raw, dict):
        raise PersistenceCorruptError(f"History entry {index} must be an object")
    try:
        entry_id = raw["id"]
        file_name = raw["fileName"]
        summary = raw.get("summary", "")
        recorded_at = datetime.fromisoformat(raw["recordedAt"])
        stats = build_stats(raw["stats"])
    except (KeyError, TypeError, ValueError, OverflowError, SchemaMismatchError) as exc:
        raise PersistenceCorruptError(f"History entry {index} is malformed: {exc}") from exc
    if not all(isinstance(v, str) for v in (entry_id, file_name, summary)):
        raise PersistenceCorruptError(f"History entry {index} has non-string fields")
    return HistoryEntry(
        id=entry_id,
        file_name=file_name,
        recorded_at=recorded_at,
        summary=summary,
        stats=stats,
    )
