import json
from pathlib import Path

from smartdoc.history.exceptions import PersistenceCorruptError
from smartdoc.history.store_base import BaseKeyValueStore


class JsonFileKeyValueStore(BaseKeyValueStore):
    """Keeps all keys in one JSON object on disk, rewritten on every change."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all_or_empty()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        try:
            data = self._read_all()
        except PersistenceCorruptError:
            # Nothing in a corrupt file is readable, so deleting resets it.
            self._write_all({})
            return
        if data.pop(key, None) is not None:
            self._write_all(data)

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceCorruptError(f"Cannot read store {self._path}: {exc}") from exc
        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise PersistenceCorruptError(f"Store {self._path} is not a string map")
        return data

    def _read_all_or_empty(self) -> dict[str, str]:
        # A corrupt file is overwritten by the next write.
        try:
            return self._read_all()
        except PersistenceCorruptError:
            return {}

    def _write_all(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        tmp_path.replace(self._path)
