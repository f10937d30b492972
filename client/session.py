"""
client.session - In-memory catalog session.

Holds the artwork rows, the recipe and color side tables, the known
Internal IDs of the last load and the current view state (search,
column filters, sort).  Edits are applied locally first and then
persisted through a DebouncedSaver per table.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

import requests

import config
from client.debounce import DebouncedSaver
from client.gateway import PersistenceGateway, fetch_text
from import_engine.csv_parser import serialize_csv, table_columns, ROW_ID
from import_engine.importer import parse_and_tag
from import_engine.report import ImportReport
from import_engine.tables import new_recipe_entry
from import_engine.tagger import KnownKeys
from services.query_service import QueryService, SortSpec, toggle_sort
from services.recipe_service import apply_recipe_edit

logger = logging.getLogger(__name__)

EDITABLE_URL_FIELDS = (
    "Production Folder",
    "AW_Front",
    "AW_Back",
    "AW_LS",
    "AW_RS",
    "AW_Neck",
    "Spec_Sheet",
    "Spec_Sheet 2",
)
EDITABLE_TEXT_FIELDS = (
    "Placement from Collar",
    "Back from Collar",
)

_SHEET_ID_RE = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_SHEET_GID_RE = re.compile(r"gid=([0-9]+)")


def is_editable(column: str) -> bool:
    return (column in EDITABLE_URL_FIELDS
            or column in EDITABLE_TEXT_FIELDS
            or column == config.RECIPE_FIELD)


def sheet_csv_url(url: str) -> str:
    """
    Rewrite a Google Sheets share URL to its CSV export URL.
    Raises ValueError when no sheet id is present.
    """
    sheet = _SHEET_ID_RE.search(url)
    if not sheet:
        raise ValueError("Invalid Google Sheets URL")
    gid = _SHEET_GID_RE.search(url)
    return (f"https://docs.google.com/spreadsheets/d/{sheet.group(1)}"
            f"/export?format=csv&gid={gid.group(1) if gid else '0'}")


class CatalogSession:

    def __init__(
        self,
        gateway: Optional[PersistenceGateway] = None,
        *,
        key_field: str = config.KEY_FIELD,
        enumerated=config.ENUM_COLUMNS,
        save_delay: float = config.SAVE_DEBOUNCE,
    ):
        self.gateway = gateway
        self.known_keys = KnownKeys(key_field=key_field)
        self.enumerated = tuple(enumerated)

        self.rows: list[dict] = []
        self.recipes: list[dict] = []
        self.colors: list[dict] = []

        self.search = ""
        self.filters: dict[str, str] = {}
        self.sort: Optional[SortSpec] = None

        self.savers: dict[str, DebouncedSaver] = {}
        if gateway is not None:
            self.savers = {
                "data": DebouncedSaver("data", lambda: list(self.rows),
                                       gateway.save_data, save_delay),
                "recipes": DebouncedSaver("recipes", lambda: list(self.recipes),
                                          gateway.save_recipes, save_delay),
                "colors": DebouncedSaver("colors", lambda: list(self.colors),
                                         gateway.save_colors, save_delay),
            }

    # ── Loading ────────────────────────────────────────────────────────

    def load_csv_text(self, text: str | bytes) -> ImportReport:
        """Replace the rows with parsed CSV and flag new Internal IDs."""
        rows, keys, report = parse_and_tag(text, self.known_keys.to_list(),
                                           key_field=self.known_keys.key_field)
        if not rows:
            logger.warning("CSV contained no rows - keeping current data")
            return report

        self.known_keys.replace(keys)
        self.rows = rows
        logger.info(f"Loaded {report.total_rows} rows ({report.new_rows} new)")
        self._schedule("data")
        return report

    def load_csv_file(self, path: str | Path) -> ImportReport:
        return self.load_csv_text(Path(path).read_bytes())

    def load_csv_url(self, url: str) -> ImportReport:
        """Fetch a CSV over HTTP.  Google Sheets share links are accepted."""
        try:
            if "docs.google.com/spreadsheets" in url and "export?format=csv" not in url:
                url = sheet_csv_url(url)
            text = fetch_text(url)
        except (requests.RequestException, ValueError) as e:
            logger.error(f"CSV fetch from {url} failed: {e}")
            report = ImportReport()
            report.add_error(0, f"Could not load CSV: {e}")
            return report
        return self.load_csv_text(text)

    def load_remote(self) -> bool:
        """
        Load all tables through the gateway.  A table that fails to
        load keeps its current in-memory content.
        """
        if self.gateway is None:
            return False

        ok = True
        rows = self.gateway.load_data()
        if rows is None:
            ok = False
        else:
            self.rows = rows
            self.known_keys.replace(
                r.get(self.known_keys.key_field) for r in rows
                if r.get(self.known_keys.key_field)
            )

        recipes = self.gateway.load_recipes()
        if recipes is None:
            ok = False
        else:
            self.recipes = recipes

        colors = self.gateway.load_colors()
        if colors is None:
            ok = False
        else:
            self.colors = colors
        return ok

    # ── View state ─────────────────────────────────────────────────────

    @property
    def columns(self) -> list[str]:
        return table_columns(self.rows)

    def view(self) -> list[dict]:
        return QueryService.apply(self.rows, q=self.search, filters=self.filters,
                                  sort=self.sort, enumerated=self.enumerated)

    def toggle_sort(self, column: str) -> Optional[SortSpec]:
        self.sort = toggle_sort(self.sort, column)
        return self.sort

    def set_filter(self, column: str, value: str) -> None:
        self.filters = {**self.filters, column: value}

    def clear_filters(self) -> None:
        self.search = ""
        self.filters = {}
        self.sort = None

    @property
    def active_filter_count(self) -> int:
        return QueryService.active_filter_count(self.search, self.filters)

    def filter_options(self, column: str) -> list[str]:
        return QueryService.distinct_values(self.rows, column)

    # ── Editing ────────────────────────────────────────────────────────

    def get_row(self, row_id: int) -> dict:
        for row in self.rows:
            if row.get(ROW_ID) == row_id:
                return row
        raise KeyError(f"No row with id {row_id}")

    def update_cell(self, row_id: int, column: str, value: str) -> dict:
        """
        Edit one cell.  Recipe cells take a slot letter and store the
        resolved recipe value.  Returns the updated row.
        """
        if not is_editable(column):
            raise ValueError(f"Column {column!r} is not editable")

        row = self.get_row(row_id)
        if column == config.RECIPE_FIELD:
            value = apply_recipe_edit(row, value, self.recipes)

        updated = {**row, column: value}
        self.rows = [updated if r.get(ROW_ID) == row_id else r for r in self.rows]
        self._schedule("data")
        return updated

    def set_recipes(self, recipes: list[dict]) -> None:
        self.recipes = list(recipes)
        self._schedule("recipes")

    def add_recipe(self) -> dict:
        entry = new_recipe_entry()
        self.set_recipes([*self.recipes, entry])
        return entry

    def update_recipe(self, entry: dict) -> None:
        self.set_recipes([dict(entry) if e.get("id") == entry.get("id") else e
                          for e in self.recipes])

    def delete_recipe(self, entry_id: str) -> None:
        self.set_recipes([e for e in self.recipes if e.get("id") != entry_id])

    def set_colors(self, colors: list[dict]) -> None:
        self.colors = list(colors)
        self._schedule("colors")

    # ── Export / shutdown ──────────────────────────────────────────────

    def export_csv(self, filtered: bool = True) -> str:
        rows = self.view() if filtered else self.rows
        return serialize_csv(rows, self.columns)

    def flush(self) -> None:
        """Push every pending save now."""
        for saver in self.savers.values():
            saver.flush()

    def close(self) -> None:
        self.flush()
        for saver in self.savers.values():
            saver.cancel()

    def _schedule(self, table: str) -> None:
        saver = self.savers.get(table)
        if saver is not None:
            saver.schedule()
