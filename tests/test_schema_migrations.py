# tests/test_schema_migrations.py
"""
Tests for database schema and the key-value store.
"""
import sqlite3

import pytest

from storage.migrations import (
    ensure_current_schema,
    get_schema_version,
    set_schema_version,
    table_exists,
)
from storage.schema import SCHEMA_VERSION
from storage.sqlite_store import SQLiteStore


@pytest.fixture
def fresh_conn(tmp_path):
    """Create a fresh database connection."""
    conn = sqlite3.connect(tmp_path / "fresh.sqlite")
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def store(tmp_path):
    with SQLiteStore(tmp_path / "kv.sqlite") as s:
        s.ensure_schema()
        yield s


class TestSchemaVersion:
    """Tests for schema version tracking."""

    def test_fresh_db_version_zero(self, fresh_conn):
        assert get_schema_version(fresh_conn) == 0

    def test_set_and_get_version(self, fresh_conn):
        fresh_conn.execute(
            "CREATE TABLE schema_version (version INTEGER PRIMARY KEY, applied_at TEXT)"
        )
        set_schema_version(fresh_conn, 4)
        assert get_schema_version(fresh_conn) == 4


class TestEnsureCurrentSchema:
    """Tests for ensure_current_schema entry point."""

    def test_fresh_db_gets_initialized(self, fresh_conn):
        result = ensure_current_schema(fresh_conn)

        assert result["status"] == "initialized"
        assert table_exists(fresh_conn, "app_state")
        assert get_schema_version(fresh_conn) == SCHEMA_VERSION

    def test_current_db_stays_current(self, fresh_conn):
        ensure_current_schema(fresh_conn)
        result = ensure_current_schema(fresh_conn)

        assert result == {"status": "current", "version": SCHEMA_VERSION}

    def test_dropped_table_is_recreated(self, fresh_conn):
        ensure_current_schema(fresh_conn)
        fresh_conn.execute("DROP TABLE app_state")

        assert ensure_current_schema(fresh_conn)["status"] == "initialized"
        assert table_exists(fresh_conn, "app_state")


class TestSQLiteStore:
    """Tests for SQLiteStore key-value access."""

    def test_missing_key(self, store):
        assert store.get_value("nope") is None

    def test_set_replaces_whole_value(self, store):
        store.set_value("k", "first")
        store.set_value("k", "second")
        assert store.get_value("k") == "second"
        assert store.keys() == ["k"]

    def test_delete(self, store):
        store.set_value("k", "v")
        assert store.delete_value("k")
        assert not store.delete_value("k")
        assert store.get_value("k") is None

    def test_values_survive_reopen(self, tmp_path):
        path = tmp_path / "nested" / "kv.sqlite"
        with SQLiteStore(path) as s:
            s.set_value("saved_cards_v1", "[]")
        with SQLiteStore(path) as s:
            assert s.get_value("saved_cards_v1") == "[]"
