"""
api.routes_query - /query endpoint over the stored artwork table.

Query string:
    q       free-text search across all columns
    filters JSON object {column: value}
    sort    column name (optional)
    order   asc | desc
"""

import json

from flask import request, jsonify

from api import api_bp
from db import get_session
from import_engine.csv_parser import table_columns
from services.query_service import QueryService, SortSpec, ASC, DESC
from services.store_service import StoreService, DATA_KEY
import config


def parse_query_args(args) -> dict:
    """Turn request args into QueryService.apply keyword arguments."""
    q = args.get("q", "").strip()
    sort_by = args.get("sort", "").strip()
    sort_order = args.get("order", ASC).strip()
    if sort_order not in (ASC, DESC):
        sort_order = ASC

    filters = {}
    filters_str = args.get("filters", "").strip()
    if filters_str:
        try:
            filters = json.loads(filters_str)
        except json.JSONDecodeError:
            filters = {}
    if not isinstance(filters, dict):
        filters = {}
    filters = {str(k): str(v) for k, v in filters.items() if v}

    return {
        "q": q,
        "filters": filters,
        "sort": SortSpec(sort_by, sort_order) if sort_by else None,
    }


def load_rows() -> list[dict]:
    session = get_session()
    try:
        return StoreService.get(session, DATA_KEY) or []
    finally:
        session.close()


@api_bp.route("/query")
def query_rows():
    """
    GET /query?q=&filters=&sort=&order=

    Returns the matching rows plus totals and the column list.
    """
    params = parse_query_args(request.args)
    rows = load_rows()
    result = QueryService.apply(rows, enumerated=config.ENUM_COLUMNS, **params)
    return jsonify({
        "total": len(rows),
        "matched": len(result),
        "active_filters": QueryService.active_filter_count(params["q"], params["filters"]),
        "columns": table_columns(rows),
        "sort": params["sort"].to_dict() if params["sort"] else None,
        "rows": result,
    })


@api_bp.route("/columns/<path:column>/values")
def column_values(column: str):
    """GET /columns/{column}/values → distinct values for a filter picker."""
    rows = load_rows()
    return jsonify({
        "column": column,
        "enumerated": column in config.ENUM_COLUMNS,
        "values": QueryService.distinct_values(rows, column),
    })
