from psycopg.rows import dict_row

from smartdoc.database.connection import get_connection
from smartdoc.history.store_base import BaseKeyValueStore


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value operations on the kv_store table.

    Requires the connection pool to be initialized with init_pool().
    """

    def ensure_table(self) -> None:
        """Create the kv_store table if it does not exist."""
        with get_connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            )
            conn.commit()

    def get(self, key: str) -> str | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                row = cur.fetchone()

        if row is None:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (key)
                DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
                """,
                (key, value),
            )
            conn.commit()

    def delete(self, key: str) -> None:
        with get_connection() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = %s", (key,))
            conn.commit()
