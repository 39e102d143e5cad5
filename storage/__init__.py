"""
Storage layer for the card store.

Provides SQLite-based key-value persistence and the card collection that
lives on top of it.
"""

from .sqlite_store import SQLiteStore, open_conn
from .migrations import ensure_current_schema, SCHEMA_VERSION
from .codec import encode_cards, decode_cards
from .card_store import CardStore, DEFAULT_KEY

__all__ = [
    "SQLiteStore",
    "open_conn",
    "ensure_current_schema",
    "SCHEMA_VERSION",
    "encode_cards",
    "decode_cards",
    "CardStore",
    "DEFAULT_KEY",
]
