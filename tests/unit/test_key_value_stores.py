import json
from pathlib import Path

import pytest

from smartdoc.history.exceptions import PersistenceCorruptError
from smartdoc.history.json_file_store import JsonFileKeyValueStore
from smartdoc.history.memory_store import InMemoryKeyValueStore


class TestInMemoryKeyValueStore:
    def test_set_get_delete(self) -> None:
        store = InMemoryKeyValueStore()
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_key(self) -> None:
        InMemoryKeyValueStore().delete("absent")


class TestJsonFileKeyValueStore:
    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        assert store.get("k") is None

    def test_set_creates_parent_dirs(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "store.json"
        store = JsonFileKeyValueStore(path)

        store.set("k", "v")

        assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v"}

    def test_values_survive_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        JsonFileKeyValueStore(path).set("k", "v")
        assert JsonFileKeyValueStore(path).get("k") == "v"

    def test_keeps_other_keys(self, tmp_path: Path) -> None:
        store = JsonFileKeyValueStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert store.get("a") is None
        assert store.get("b") == "2"

    def test_corrupt_file_raises_on_get(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(PersistenceCorruptError):
            JsonFileKeyValueStore(path).get("k")

    def test_non_string_values_are_corrupt(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text('{"k": 5}', encoding="utf-8")

        with pytest.raises(PersistenceCorruptError):
            JsonFileKeyValueStore(path).get("k")

    def test_set_overwrites_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileKeyValueStore(path)

        store.set("k", "v")

        assert store.get("k") == "v"

    def test_delete_resets_corrupt_file(self, tmp_path: Path) -> None:
        path = tmp_path / "store.json"
        path.write_text("{broken", encoding="utf-8")
        store = JsonFileKeyValueStore(path)

        store.delete("k")

        assert store.get("k") is None
        assert json.loads(path.read_text(encoding="utf-8")) == {}
