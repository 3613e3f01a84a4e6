"""Key/value storage: SQLite on disk, or an in-memory dict for tests."""
import sqlite3
from contextlib import closing
from pathlib import Path

from tf_tutor.config import settings

DEFAULT_DB_PATH = settings.DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""


def get_connection(db_path: str = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Return a SQLite connection with row factory enabled."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize the database, creating the store table if it doesn't exist."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = get_connection(db_path)
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


class SqliteStore:
    """String key/value store backed by the ``kv_store`` table."""

    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        init_db(db_path)

    def get(self, key: str) -> str | None:
        with closing(get_connection(self.db_path)) as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.set_many([(key, value)])

    def set_many(self, items) -> None:
        """Write several keys in one transaction; nothing is written if any fails."""
        with closing(get_connection(self.db_path)) as conn:
            with conn:
                conn.executemany(
                    "INSERT INTO kv_store (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    list(items),
                )

    def remove(self, key: str) -> None:
        with closing(get_connection(self.db_path)) as conn:
            with conn:
                conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))


class MemoryStore:
    """Dict-backed store with the same interface as SqliteStore."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def set_many(self, items) -> None:
        self.data.update(dict(items))

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
