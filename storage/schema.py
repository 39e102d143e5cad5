# storage/schema.py
"""
Database schema definitions for the card store.

Schema version history:
  v1: app_state key/value table holding serialized blobs
"""
from __future__ import annotations

SCHEMA_VERSION = 1

CREATE_APP_STATE = """
CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""

# Schema version tracking
CREATE_SCHEMA_VERSION = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT DEFAULT CURRENT_TIMESTAMP
);
"""

ALL_TABLES = [
    CREATE_SCHEMA_VERSION,
    CREATE_APP_STATE,
]
