"""
services.query_service - In-memory search, column filters and sort.

Every call recomputes the result from the full row list; no index is
kept between calls.  Inputs are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import config
from import_engine.csv_parser import META_KEYS

# Filter sentinel matching cells that are empty after trimming
BLANK = "(Blank)"

ASC  = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortSpec:
    column: str
    direction: str = ASC

    def to_dict(self) -> dict:
        return {"key": self.column, "direction": self.direction}


def toggle_sort(current: Optional[SortSpec], column: str) -> Optional[SortSpec]:
    """
    Next sort state after a click on `column`.

    asc → desc → off on the same column; any other column starts at asc.
    """
    if current is not None and current.column == column:
        if current.direction == ASC:
            return SortSpec(column, DESC)
        return None
    return SortSpec(column, ASC)


def _cell(row: dict, column: str) -> str:
    value = row.get(column)
    return "" if value is None else str(value)


class QueryService:

    @staticmethod
    def apply(
        rows: list[dict],
        *,
        q: str = "",
        filters: Optional[dict] = None,
        sort: Optional[SortSpec] = None,
        enumerated: Iterable[str] = config.ENUM_COLUMNS,
    ) -> list[dict]:
        """
        Search, filter and sort `rows`.  Returns a new list.
        """
        result = list(rows)
        if q:
            result = QueryService._apply_search(result, q)
        if filters:
            result = QueryService._apply_column_filters(result, filters, set(enumerated))
        if sort is not None:
            result = QueryService._apply_sort(result, sort)
        return result

    @staticmethod
    def distinct_values(rows: list[dict], column: str) -> list[str]:
        """
        Picker values for an enumerated column filter.
        (Blank) leads the list when any row has an empty cell.
        """
        values = {_cell(r, column).strip() for r in rows}
        has_blank = "" in values
        values.discard("")
        options = sorted(values, key=str.lower)
        return [BLANK, *options] if has_blank else options

    @staticmethod
    def active_filter_count(q: str, filters: Optional[dict]) -> int:
        count = sum(1 for v in (filters or {}).values() if v)
        return count + (1 if q else 0)

    # ── Internal ───────────────────────────────────────────────────────

    @staticmethod
    def _apply_search(rows: list[dict], q: str) -> list[dict]:
        needle = q.lower()
        return [
            r for r in rows
            if any(needle in _cell(r, k).lower() for k in r if k not in META_KEYS)
        ]

    @staticmethod
    def _apply_column_filters(rows: list[dict], filters: dict, enumerated: set) -> list[dict]:
        for column, value in filters.items():
            if not value:
                continue
            if column in enumerated:
                target = "" if value == BLANK else value
                rows = [r for r in rows if _cell(r, column).strip() == target]
            else:
                needle = value.lower()
                rows = [r for r in rows if needle in _cell(r, column).lower()]
        return rows

    @staticmethod
    def _apply_sort(rows: list[dict], sort: SortSpec) -> list[dict]:
        # sorted() is stable, also with reverse=True
        return sorted(
            rows,
            key=lambda r: _cell(r, sort.column).lower(),
            reverse=(sort.direction == DESC),
        )
