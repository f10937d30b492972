"""
import_engine.tagger - Freshness tagging of parsed rows.

A row is "new" when its key field holds a value that was not seen in
the previous load.  The set of seen keys is explicit state owned by
the caller (a KnownKeys instance or a plain set), never a global.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from import_engine.csv_parser import ROW_NEW, ROW_ADDED


def tag_rows(
    rows: list[dict],
    previous_keys: Iterable[str],
    key_field: str,
    now: str,
) -> tuple[list[dict], set[str]]:
    """
    Stamp rows whose key is absent from `previous_keys`.

    Returns (tagged_rows, new_keys).  `new_keys` holds every non-empty
    key of `rows` and is meant to replace `previous_keys` outright.
    Input rows are copied, not mutated.
    """
    previous = set(previous_keys)
    tagged: list[dict] = []
    new_keys: set[str] = set()

    for row in rows:
        out = dict(row)
        key = out.get(key_field) or ""
        if key:
            new_keys.add(key)
            if key not in previous:
                out[ROW_NEW] = True
                out[ROW_ADDED] = now
        tagged.append(out)

    return tagged, new_keys


def utc_now_iso() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class KnownKeys:
    """
    Key set from the most recent load.

    Each tag() call replaces the set, so tagging the same rows twice
    in a row reports no new rows the second time.
    """

    def __init__(self, keys: Optional[Iterable[str]] = None, key_field: str = "Internal ID"):
        self.key_field = key_field
        self._keys: set[str] = set(keys or ())

    def __contains__(self, key: str) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def tag(self, rows: list[dict], now: Optional[str] = None) -> list[dict]:
        tagged, self._keys = tag_rows(rows, self._keys, self.key_field,
                                      now or utc_now_iso())
        return tagged

    def replace(self, keys: Iterable[str]) -> None:
        self._keys = set(keys)

    def to_list(self) -> list[str]:
        return sorted(self._keys)
