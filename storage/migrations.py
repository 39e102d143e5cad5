# storage/migrations.py
"""
Schema management for the card store database.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict

from .schema import ALL_TABLES, SCHEMA_VERSION


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Get current schema version, or 0 if not initialized."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT MAX(version) FROM schema_version")
        row = cur.fetchone()
        return row[0] if row and row[0] else 0
    except sqlite3.OperationalError:
        # schema_version table doesn't exist
        return 0


def set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Record schema version."""
    conn.execute(
        "INSERT OR REPLACE INTO schema_version (version, applied_at) VALUES (?, ?)",
        (version, datetime.now(timezone.utc).isoformat()),
    )
    conn.commit()


def table_exists(conn: sqlite3.Connection, table_name: str) -> bool:
    """Check if a table exists."""
    cur = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
        (table_name,),
    )
    return cur.fetchone() is not None


def ensure_current_schema(conn: sqlite3.Connection) -> Dict[str, Any]:
    """
    Ensure database has current schema. Creates tables on a fresh file.
    This is the main entry point for schema management.
    """
    current_version = get_schema_version(conn)
    if current_version == SCHEMA_VERSION and table_exists(conn, "app_state"):
        return {"status": "current", "version": SCHEMA_VERSION}

    for ddl in ALL_TABLES:
        conn.execute(ddl)
    conn.commit()
    set_schema_version(conn, SCHEMA_VERSION)
    return {"status": "initialized", "version": SCHEMA_VERSION}
