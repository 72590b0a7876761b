from pathlib import Path

from smartdoc.config.settings import Settings
from smartdoc.database.connection import init_pool
from smartdoc.history.json_file_store import JsonFileKeyValueStore
from smartdoc.history.memory_store import InMemoryKeyValueStore
from smartdoc.history.postgres_store import PostgresKeyValueStore
from smartdoc.history.store_base import BaseKeyValueStore


class KeyValueStoreFactory:
    """Creates the configured persistence provider for history."""

    SUPPORTED = ("memory", "file", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.history_store.lower()
        if backend == "memory":
            return InMemoryKeyValueStore()
        if backend == "file":
            return JsonFileKeyValueStore(Path(settings.history_file_path).expanduser())
        if backend == "postgres":
            init_pool(settings)
            store = PostgresKeyValueStore()
            store.ensure_table()
            return store
        raise ValueError(
            f"Unknown history store '{settings.history_store}'. Choose from: {list(cls.SUPPORTED)}"
        )
