"""
import_engine - CSV ingestion pipeline.

Public API:
    parse_csv(text) / serialize_csv(rows, columns)
    tag_rows(rows, previous_keys, key_field, now) → (rows, keys)
    run_import(file_content) → ImportReport
"""

from import_engine.csv_parser import parse_csv, serialize_csv       # noqa: F401
from import_engine.tagger import tag_rows, KnownKeys                # noqa: F401
from import_engine.importer import run_import, parse_and_tag        # noqa: F401
from import_engine.report import ImportReport                       # noqa: F401
