"""SQLite-backed key/value state for an installation."""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sitestage.storage.schema import SCHEMA


class StateStore:
    """Persistent key/value store kept in a single SQLite file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._initialized = False

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        if not self._initialized:
            self.initialize()
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create the state file and schema if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.path)
        try:
            conn.executescript(SCHEMA)
            conn.commit()
        finally:
            conn.close()
        self._initialized = True

    def get_item(self, key: str) -> Optional[str]:
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self.connection() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO settings (key, value, updated_at)
                   VALUES (?, ?, CURRENT_TIMESTAMP)""",
                (key, value),
            )

    def remove_item(self, key: str) -> None:
        with self.connection() as conn:
            conn.execute("DELETE FROM settings WHERE key = ?", (key,))

    def keys(self, prefix: str = "") -> list[str]:
        with self.connection() as conn:
            cursor = conn.execute(
                "SELECT key FROM settings WHERE key LIKE ? ORDER BY key",
                (f"{prefix}%",),
            )
            return [row["key"] for row in cursor]


class MemoryKeyValueStore:
    """Non-persistent key/value store."""

    def __init__(self, items: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)
