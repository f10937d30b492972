"""
import_engine.csv_parser - Quote-aware CSV reading and writing.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Line splitting, blank-line skipping, quote-aware field splitting
  • Header-driven row dicts with sequential `_id`
  • Serialising row dicts back to CSV text

Known limitation: a doubled quote ("") inside a quoted field is not
unescaped, and the writer never escapes embedded quotes or newlines.
Round-trips are exact only for values without quotes or newlines.
"""

from __future__ import annotations

# Metadata keys carried on every row dict next to the data columns
ROW_ID     = "_id"
ROW_NEW    = "_isNew"
ROW_ADDED  = "_addedDate"
META_KEYS  = frozenset({ROW_ID, ROW_NEW, ROW_ADDED})


def parse_csv(raw: str | bytes) -> list[dict]:
    """
    Parse CSV text into a list of row dicts keyed by the header.

    Short rows are padded with "", surplus values are dropped.
    Returns [] for empty content; malformed lines never raise.
    """
    text = decode_text(raw)
    if not text or not text.strip():
        return []

    lines = text.split("\n")
    headers = parse_line(lines[0])

    rows: list[dict] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = parse_line(line)
        row: dict = {ROW_ID: len(rows)}
        for i, header in enumerate(headers):
            row[header] = values[i] if i < len(values) else ""
        rows.append(row)
    return rows


def parse_line(line: str) -> list[str]:
    """Split one CSV line on commas that sit outside double quotes."""
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_clean("".join(current)))
            current = []
        else:
            current.append(char)
    fields.append(_clean("".join(current)))
    return fields


def serialize_csv(rows: list[dict], columns: list[str]) -> str:
    """Render rows as CSV text, one line per row, in `columns` order."""
    lines = [",".join(columns)]
    for row in rows:
        lines.append(",".join(_format_value(row.get(col)) for col in columns))
    return "\n".join(lines)


def table_columns(rows: list[dict]) -> list[str]:
    """Data columns of a row set, taken from the first row."""
    if not rows:
        return []
    return [k for k in rows[0] if k not in META_KEYS]


def decode_text(raw: str | bytes) -> str:
    """Bytes → str (UTF-8, lossy), without a leading BOM."""
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw


# ── Private helpers ────────────────────────────────────────────────────

def _clean(field: str) -> str:
    field = field.strip()
    if field.startswith('"'):
        field = field[1:]
    if field.endswith('"'):
        field = field[:-1]
    return field


def _format_value(value) -> str:
    text = "" if value is None else str(value)
    return f'"{text}"' if "," in text else text
