"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → tagger → key-value store and produces
a structured ImportReport.
"""

from __future__ import annotations

import logging
from typing import Optional

import config
from db.engine import get_session
from import_engine.csv_parser import parse_csv, table_columns, ROW_NEW
from import_engine.tagger import tag_rows, utc_now_iso
from import_engine.report import ImportReport
from services.store_service import StoreService, DATA_KEY, KNOWN_KEYS_KEY

logger = logging.getLogger(__name__)


def parse_and_tag(
    file_content: str | bytes,
    previous_keys,
    *,
    key_field: str = config.KEY_FIELD,
    now: Optional[str] = None,
) -> tuple[list[dict], set[str], ImportReport]:
    """
    Parse CSV content and tag fresh rows without touching storage.

    Returns (rows, new_known_keys, report).
    """
    report = ImportReport(added_date=now or utc_now_iso())
    parsed = parse_csv(file_content)
    if not parsed:
        report.add_error(0, "CSV has no data rows or is empty")
        return [], set(previous_keys), report

    rows, keys = tag_rows(parsed, previous_keys, key_field, report.added_date)
    report.total_rows = len(rows)
    report.new_rows = sum(1 for r in rows if r.get(ROW_NEW))
    report.columns = table_columns(rows)
    return rows, keys, report


def run_import(file_content: str | bytes, *, now: Optional[str] = None) -> ImportReport:
    """
    Import a CSV blob, replacing the stored artwork table.

    The stored known-keys set is used to flag new rows and is then
    replaced by the keys of this import.  An empty or header-only
    file leaves storage untouched.
    """
    session = get_session()
    try:
        previous = StoreService.get(session, KNOWN_KEYS_KEY) or []
        rows, keys, report = parse_and_tag(file_content, previous, now=now)
        if not rows:
            return report

        StoreService.set(session, DATA_KEY, rows)
        StoreService.set(session, KNOWN_KEYS_KEY, sorted(keys))
        session.commit()
        logger.info(f"Imported {report.total_rows} rows ({report.new_rows} new)")
    except Exception as exc:
        session.rollback()
        logger.error(f"Fatal import error: {exc}")
        report.add_error(0, f"Fatal import error: {exc}")
    finally:
        session.close()

    return report
