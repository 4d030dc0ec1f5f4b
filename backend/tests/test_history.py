"""
Tests for mood history storage
==============================
Covers:
- HistoryStore: a backend missing load/save fails at construction
- JsonFileHistoryStore: missing file, round trip through disk, atomic write
- Malformed records skipped, valid ones kept
- Records written with the legacy date/mood/response keys still load
- Unreadable store raises HistoryStoreError and is never overwritten
- SupabaseHistoryStore: select/upsert chain, missing row, string value,
  client errors wrapped
- MoodHistory: insertion order, id bumping, duplicate ids rejected,
  concurrent records all kept

Run: pytest tests/test_history.py -v
"""

from __future__ import annotations

import json
import threading
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from mindease.db.history import (
    KV_TABLE,
    HistoryStore,
    HistoryStoreError,
    JsonFileHistoryStore,
    MoodHistory,
    SupabaseHistoryStore,
    next_entry_id,
    parse_records,
)
from mindease.models.mood import GeneratedResponse, MoodEntry

NOW = datetime(2026, 3, 10, 15, 0, tzinfo=timezone.utc)


def _entry(entry_id: str = "1", emoji: str = "😊") -> MoodEntry:
    return MoodEntry(id=entry_id, timestamp=NOW, mood_text="Feeling fine", emoji=emoji)


def _response() -> GeneratedResponse:
    return GeneratedResponse(
        reflection="That sounds like a good day.",
        affirmation="I notice the good moments.",
        provenance="remote",
    )


# ---------------------------------------------------------------------------
# Record parsing
# ---------------------------------------------------------------------------

class TestParseRecords:

    def test_none_is_empty(self):
        assert parse_records(None) == []

    def test_non_list_raises(self):
        with pytest.raises(HistoryStoreError):
            parse_records({"id": "1"})

    def test_malformed_records_skipped(self):
        records = [
            {"id": "1", "timestamp": NOW.isoformat(), "mood_text": "ok", "emoji": "😊"},
            {"id": "2", "timestamp": "not a date", "mood_text": "bad", "emoji": "😊"},
            {"id": "3", "timestamp": NOW.isoformat(), "mood_text": "bad", "emoji": "🦄"},
            "not even a dict",
            {"id": "4", "timestamp": NOW.isoformat(), "mood_text": "ok", "emoji": "😭"},
        ]
        entries = parse_records(records)
        assert [e.id for e in entries] == ["1", "4"]

    def test_legacy_keys(self):
        records = [{
            "id": "1700000000000",
            "date": "2023-11-14T22:13:20.000Z",
            "mood": "Tired but okay",
            "emoji": "😐",
            "response": "Rest is productive too.",
            "affirmation": "I allow myself to rest.",
        }]
        [entry] = parse_records(records)

        assert entry.mood_text == "Tired but okay"
        assert entry.reflection == "Rest is productive too."
        assert entry.provenance == "fallback"
        assert entry.timestamp.tzinfo is not None


# ---------------------------------------------------------------------------
# Store interface
# ---------------------------------------------------------------------------

class TestHistoryStoreInterface:

    def test_backend_without_save_cannot_be_built(self):
        class LoadOnlyStore(HistoryStore):
            def load(self) -> list[MoodEntry]:
                return []

        with pytest.raises(TypeError):
            LoadOnlyStore()

    def test_base_class_cannot_be_built(self):
        with pytest.raises(TypeError):
            HistoryStore()


# ---------------------------------------------------------------------------
# File store
# ---------------------------------------------------------------------------

class TestJsonFileHistoryStore:

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonFileHistoryStore(tmp_path).load() == []

    def test_round_trip(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "nested", "custom-ns")
        entries = [_entry("1"), _entry("2", "😠")]

        store.save(entries)

        assert store.path == tmp_path / "nested" / "custom-ns.json"
        assert store.load() == entries
        assert not store.path.with_suffix(".json.tmp").exists()

    def test_file_is_json_array(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path)
        store.save([_entry("1")])

        raw = json.loads(store.path.read_text(encoding="utf-8"))
        assert isinstance(raw, list)
        assert raw[0]["emoji"] == "😊"
        assert raw[0]["reflection"] is None

    def test_corrupt_file_raises_and_is_preserved(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path)
        store.path.write_text("{not json", encoding="utf-8")
        history = MoodHistory(store)

        with pytest.raises(HistoryStoreError):
            store.load()
        with pytest.raises(HistoryStoreError):
            history.record("Feeling fine", "😊", now=NOW)

        assert store.path.read_text(encoding="utf-8") == "{not json"

    def test_top_level_object_raises(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path)
        store.path.write_text('{"entries": []}', encoding="utf-8")
        with pytest.raises(HistoryStoreError):
            store.load()

    def test_empty_file_is_empty_history(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path)
        store.path.write_text("", encoding="utf-8")
        assert store.load() == []


# ---------------------------------------------------------------------------
# Supabase store
# ---------------------------------------------------------------------------

class TestSupabaseHistoryStore:

    def _client_returning(self, data):
        client = MagicMock()
        result = MagicMock()
        result.data = data
        (client.table.return_value.select.return_value.eq.return_value
         .maybe_single.return_value.execute.return_value) = result
        return client

    def test_load_reads_namespace_row(self):
        record = _entry("5").model_dump(mode="json")
        client = self._client_returning({"value": [record]})

        entries = SupabaseHistoryStore(client, "ns").load()

        assert [e.id for e in entries] == ["5"]
        client.table.assert_called_with(KV_TABLE)
        client.table.return_value.select.return_value.eq.assert_called_with("key", "ns")

    def test_missing_row_is_empty(self):
        client = MagicMock()
        (client.table.return_value.select.return_value.eq.return_value
         .maybe_single.return_value.execute.return_value) = None
        assert SupabaseHistoryStore(client).load() == []

    def test_string_value_decoded(self):
        record = _entry("7").model_dump(mode="json")
        client = self._client_returning({"value": json.dumps([record])})
        assert [e.id for e in SupabaseHistoryStore(client).load()] == ["7"]

    def test_load_error_wrapped(self):
        client = MagicMock()
        client.table.side_effect = RuntimeError("connection refused")
        with pytest.raises(HistoryStoreError):
            SupabaseHistoryStore(client).load()

    def test_save_upserts_on_key(self):
        client = MagicMock()
        SupabaseHistoryStore(client, "ns").save([_entry("1")])

        row = client.table.return_value.upsert.call_args.args[0]
        assert row["key"] == "ns"
        assert row["value"][0]["id"] == "1"
        assert "updated_at" in row
        assert client.table.return_value.upsert.call_args.kwargs == {"on_conflict": "key"}

    def test_save_error_wrapped(self):
        client = MagicMock()
        client.table.return_value.upsert.return_value.execute.side_effect = RuntimeError("down")
        with pytest.raises(HistoryStoreError):
            SupabaseHistoryStore(client).save([])


# ---------------------------------------------------------------------------
# MoodHistory
# ---------------------------------------------------------------------------

class TestMoodHistory:

    def test_record_appends_in_order(self, tmp_path):
        history = MoodHistory(JsonFileHistoryStore(tmp_path))

        first = history.record("First", "😊", _response(), now=NOW)
        second = history.record("Second", "😭", now=NOW)

        assert [e.mood_text for e in history.entries()] == ["First", "Second"]
        assert first.provenance == "remote"
        assert second.reflection is None and second.provenance is None

    def test_ids_unique_within_same_millisecond(self, tmp_path):
        history = MoodHistory(JsonFileHistoryStore(tmp_path))

        ids = [history.record("Again", "😐", now=NOW).id for _ in range(3)]

        base = int(NOW.timestamp() * 1000)
        assert ids == [str(base), str(base + 1), str(base + 2)]

    def test_next_entry_id_ignores_non_numeric_ids(self):
        entries = [_entry("legacy-abc")]
        assert next_entry_id(NOW, entries) == str(int(NOW.timestamp() * 1000))

    def test_append_rejects_duplicate_id(self, tmp_path):
        history = MoodHistory(JsonFileHistoryStore(tmp_path))
        history.append(_entry("42"))

        with pytest.raises(HistoryStoreError):
            history.append(_entry("42", "😭"))
        assert len(history.entries()) == 1

    def test_concurrent_records_all_kept(self, tmp_path):
        history = MoodHistory(JsonFileHistoryStore(tmp_path))

        threads = [
            threading.Thread(target=history.record, args=(f"entry {i}", "😊"), kwargs={"now": NOW})
            for i in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        entries = history.entries()
        assert len(entries) == 10
        assert len({e.id for e in entries}) == 10
