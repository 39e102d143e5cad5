# storage/sqlite_store.py
"""
SQLite key-value storage.

Each key holds one opaque text blob (the serialized card collection lives
under a single key). Writes replace the whole value in one statement, so a
reader never sees a half-written blob.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .migrations import ensure_current_schema

DEFAULT_DB = "data/bestcard.sqlite"


def open_conn(path: Union[str, Path] = DEFAULT_DB) -> sqlite3.Connection:
    """Open a database connection with row factory."""
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    return conn


class SQLiteStore:
    """Key-value access to the app_state table."""

    def __init__(self, db_path: Union[str, Path] = DEFAULT_DB):
        self.db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_conn(self.db_path)
            ensure_current_schema(self._conn)
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def ensure_schema(self) -> Dict[str, Any]:
        """Ensure database has current schema."""
        return ensure_current_schema(self.conn)

    def get_value(self, key: str) -> Optional[str]:
        row = self.conn.execute(
            "SELECT value FROM app_state WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set_value(self, key: str, value: str) -> None:
        with self.conn:
            self.conn.execute(
                """
                INSERT INTO app_state (key, value, updated_at) VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, datetime.now(timezone.utc).isoformat()),
            )

    def delete_value(self, key: str) -> bool:
        with self.conn:
            cur = self.conn.execute("DELETE FROM app_state WHERE key = ?", (key,))
        return cur.rowcount > 0

    def keys(self) -> List[str]:
        rows = self.conn.execute("SELECT key FROM app_state ORDER BY key").fetchall()
        return [r["key"] for r in rows]
