"""
services.report_service - Freshness and data-completion reports.

Both reports work on the plain row dicts of the artwork table.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from import_engine.csv_parser import ROW_NEW, ROW_ADDED

# Columns checked for an item's creation date, in order
DATE_FIELDS = ("Date Created", "Created Date", "Created", ROW_ADDED)

# Fields an item needs before it is production ready
CRITICAL_FIELDS = (
    ("AW_Front", "url"),
    ("Spec_Sheet", "url"),
    ("Placement from Collar", "numeric"),
)

_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%Y %H:%M:%S", "%m/%d/%y", "%Y/%m/%d")


def is_url(value) -> bool:
    if not value or not isinstance(value, str):
        return False
    s = value.lower().strip()
    return s.startswith(("http://", "https://", "www."))


def is_numeric(value) -> bool:
    """
    Finite-number test.  Blank text counts as 0, 0x/0o/0b integer
    literals are accepted, digit separators ("1_000") are not.
    """
    if value is None or value == "":
        return False
    if not isinstance(value, str):
        try:
            return math.isfinite(float(value))
        except (TypeError, ValueError):
            return False

    text = value.strip()
    if not text:
        return True
    if "_" in text:
        return False
    if text[:2].lower() in ("0x", "0o", "0b"):
        try:
            int(text, 0)
        except ValueError:
            return False
        return True
    try:
        return math.isfinite(float(text))
    except ValueError:
        return False


def parse_date(value) -> Optional[datetime]:
    """Parse ISO-8601 or US-style dates.  Naive results are taken as UTC."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    parsed = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _has_value(value, kind: str) -> bool:
    return is_url(value) if kind == "url" else is_numeric(value)


def is_ready(row: dict) -> bool:
    return all(_has_value(row.get(name), kind) for name, kind in CRITICAL_FIELDS)


def _added_since(row: dict, cutoff: datetime) -> bool:
    for name in DATE_FIELDS:
        when = parse_date(row.get(name))
        if when is not None and when >= cutoff:
            return True
    return row.get(ROW_NEW) is True


def _pct(part: int, whole: int) -> float:
    return round(part / whole * 100, 1) if whole else 0.0


def newly_added(rows: list[dict], now: Optional[datetime] = None, days: int = 10) -> dict:
    """
    Items created within `days` (or flagged new in this load), with
    ready / not-ready split on the critical fields.
    """
    now = now or datetime.now(timezone.utc)
    recent = [r for r in rows if _added_since(r, now - timedelta(days=days))]
    last_30 = sum(1 for r in rows if _added_since(r, now - timedelta(days=30)))
    ready = [r for r in recent if is_ready(r)]

    return {
        "days": days,
        "total_new": len(recent),
        "last_30_days": last_30,
        "ready": len(ready),
        "not_ready": len(recent) - len(ready),
        "ready_pct": _pct(len(ready), len(recent)),
        "not_ready_pct": _pct(len(recent) - len(ready), len(recent)),
        "items": [
            {"row": r, "ready": is_ready(r), "added_date": r.get(ROW_ADDED, "")}
            for r in recent
        ],
    }


def missing_data(rows: list[dict]) -> dict:
    """Per-field and overall completion of the critical fields."""
    total = len(rows)
    fields = []
    for name, kind in CRITICAL_FIELDS:
        with_value = sum(1 for r in rows if _has_value(r.get(name), kind))
        fields.append({
            "field": name,
            "type": kind,
            "total_rows": total,
            "with_value": with_value,
            "without_value": total - with_value,
            "pct_with_value": _pct(with_value, total),
            "pct_without_value": _pct(total - with_value, total),
        })

    total_fields = len(CRITICAL_FIELDS) * total
    filled = sum(f["with_value"] for f in fields)
    return {
        "fields": fields,
        "overall": {
            "total_fields": total_fields,
            "with_value": filled,
            "without_value": total_fields - filled,
            "pct_with_value": _pct(filled, total_fields),
            "pct_without_value": _pct(total_fields - filled, total_fields),
        },
    }
