import os
from collections.abc import Generator

import pytest

from smartdoc.config.settings import Settings
from smartdoc.database.connection import close_pool, get_connection, init_pool
from smartdoc.history.postgres_store import PostgresKeyValueStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "smartdoc_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def pg_store(integration_pool: None) -> PostgresKeyValueStore:
    store = PostgresKeyValueStore()
    store.ensure_table()
    return store


@pytest.fixture
def kv_key(pg_store: PostgresKeyValueStore) -> Generator[str, None, None]:
    key = f"smartdoc_test_{os.getpid()}"
    yield key
    pg_store.delete(key)
