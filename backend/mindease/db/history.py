"""
Mood History Storage
====================
Load/save boundary for the check-in log plus the append-only wrapper the
rest of the app uses.

The log is a single JSON array of entries stored under one fixed key
(``history_namespace``, default ``mindease-entries``). Two backends:

    file      ``{history_dir}/{namespace}.json`` on local disk (default)
    supabase  one row in table ``kv_store``: key = namespace, value = array

Loading is forgiving per record and strict per store: a record that fails
validation is skipped with a warning, so one bad row never hides the rest
of the history. A store that cannot be read at all raises
HistoryStoreError instead of returning an empty list, so the next append
cannot overwrite it.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from mindease.config import get_settings
from mindease.db.supabase import get_supabase_client
from mindease.models.mood import GeneratedResponse, MoodEntry

logger = logging.getLogger(__name__)

KV_TABLE = "kv_store"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class HistoryStoreError(Exception):
    """The history could not be read or written."""


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------


def parse_records(records: Any) -> list[MoodEntry]:
    """Validate raw records, skipping any that are malformed."""
    if records is None:
        return []
    if not isinstance(records, list):
        raise HistoryStoreError(f"expected a JSON array of entries, got {type(records).__name__}")

    entries: list[MoodEntry] = []
    for index, record in enumerate(records):
        try:
            entries.append(MoodEntry.model_validate(record))
        except ValidationError as exc:
            logger.warning(
                "Skipping malformed history record %d: %s",
                index, exc.errors(include_url=False)[:3],
            )
    return entries


def dump_records(entries: list[MoodEntry]) -> list[dict]:
    return [entry.model_dump(mode="json") for entry in entries]


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------


class HistoryStore(ABC):
    """Load/save capability keyed by a fixed namespace."""

    namespace: str

    @abstractmethod
    def load(self) -> list[MoodEntry]:
        """Return every stored entry in insertion order."""

    @abstractmethod
    def save(self, entries: list[MoodEntry]) -> None:
        """Replace the stored history with *entries*."""


class JsonFileHistoryStore(HistoryStore):
    """History kept as a JSON array in a local file."""

    def __init__(self, directory: str | Path, namespace: str = "mindease-entries") -> None:
        self.namespace = namespace
        self.path = Path(directory) / f"{namespace}.json"

    def load(self) -> list[MoodEntry]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        except (OSError, ValueError) as exc:
            logger.error("Could not read mood history from %s: %s", self.path, exc)
            raise HistoryStoreError(f"could not read {self.path}") from exc
        return parse_records(raw)

    def save(self, entries: list[MoodEntry]) -> None:
        payload = json.dumps(dump_records(entries), ensure_ascii=False, indent=2)
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.error("Could not write mood history to %s: %s", self.path, exc)
            raise HistoryStoreError(f"could not write {self.path}") from exc


class SupabaseHistoryStore(HistoryStore):
    """History kept as one jsonb value in a Supabase key-value table."""

    def __init__(self, client: Any, namespace: str = "mindease-entries") -> None:
        self.namespace = namespace
        self._db = client

    def load(self) -> list[MoodEntry]:
        try:
            result = (
                self._db.table(KV_TABLE)
                .select("value")
                .eq("key", self.namespace)
                .maybe_single()
                .execute()
            )
        except Exception as exc:
            logger.exception("Supabase history load failed for %s", self.namespace)
            raise HistoryStoreError("could not load history from Supabase") from exc

        # maybe_single() yields no result at all when the row does not exist
        if not result or not result.data:
            return []
        value = result.data.get("value")
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError as exc:
                raise HistoryStoreError("stored history value is not valid JSON") from exc
        return parse_records(value)

    def save(self, entries: list[MoodEntry]) -> None:
        row = {
            "key": self.namespace,
            "value": dump_records(entries),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            self._db.table(KV_TABLE).upsert(row, on_conflict="key").execute()
        except Exception as exc:
            logger.exception("Supabase history save failed for %s", self.namespace)
            raise HistoryStoreError("could not save history to Supabase") from exc


# ---------------------------------------------------------------------------
# Append-only history
# ---------------------------------------------------------------------------


class MoodHistory:
    """Append-only view over a HistoryStore.

    Appends are serialised with a lock around load-append-save, so two
    concurrent check-ins in this process cannot drop each other's entry.
    """

    def __init__(self, store: HistoryStore) -> None:
        self._store = store
        self._lock = threading.Lock()

    @property
    def store(self) -> HistoryStore:
        return self._store

    def entries(self) -> list[MoodEntry]:
        """All entries in insertion order."""
        return self._store.load()

    def append(self, entry: MoodEntry) -> MoodEntry:
        with self._lock:
            entries = self._store.load()
            if any(existing.id == entry.id for existing in entries):
                raise HistoryStoreError(f"entry {entry.id} already exists")
            self._store.save([*entries, entry])
        return entry

    def record(
        self,
        mood_text: str,
        emoji: str,
        response: Optional[GeneratedResponse] = None,
        now: Optional[datetime] = None,
    ) -> MoodEntry:
        """Create, append and return a new entry stamped at *now*."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            entries = self._store.load()
            entry = MoodEntry(
                id=next_entry_id(now, entries),
                timestamp=now,
                mood_text=mood_text,
                emoji=emoji,
                reflection=response.reflection if response else None,
                affirmation=response.affirmation if response else None,
                provenance=response.provenance if response else None,
            )
            self._store.save([*entries, entry])

        logger.info("Recorded mood entry %s (%s)", entry.id, entry.provenance or "no response")
        return entry


def next_entry_id(now: datetime, entries: list[MoodEntry]) -> str:
    """Epoch-millisecond id, bumped past any existing numeric id."""
    candidate = int(now.timestamp() * 1000)
    highest = max((int(e.id) for e in entries if e.id.isdigit()), default=-1)
    return str(max(candidate, highest + 1))


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------


def build_store() -> HistoryStore:
    settings = get_settings()
    if settings.history_backend == "supabase":
        return SupabaseHistoryStore(get_supabase_client(), settings.history_namespace)
    return JsonFileHistoryStore(settings.history_dir, settings.history_namespace)


@lru_cache
def get_mood_history() -> MoodHistory:
    return MoodHistory(build_store())
