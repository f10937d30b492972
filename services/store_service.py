"""
services.store_service - Whole-blob reads and writes on the kv_store table.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to write several blobs in one transaction.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import KVEntry

# Storage keys
DATA_KEY       = "artwork_data"
RECIPES_KEY    = "recipe_table"
COLORS_KEY     = "color_table"
KNOWN_KEYS_KEY = "known_keys"


class StoreService:

    @staticmethod
    def get(session: Session, key: str):
        """Return the decoded blob stored under `key`, or None."""
        entry = session.get(KVEntry, key)
        if entry is None:
            return None
        return entry.get_value()

    @staticmethod
    def set(session: Session, key: str, value) -> KVEntry:
        """Insert or overwrite the blob under `key`.  Last write wins."""
        entry = session.get(KVEntry, key)
        if entry is None:
            entry = KVEntry(key=key)
            session.add(entry)
        entry.set_value(value)
        session.flush()
        return entry
