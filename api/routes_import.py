"""
api.routes_import - /import and /export endpoints for the artwork table.

Import accepts CSV via multipart file upload or raw request body.
"""

from datetime import date

from flask import request, jsonify, Response

from api import api_bp
from api.routes_query import parse_query_args, load_rows
from import_engine import run_import, serialize_csv
from import_engine.csv_parser import table_columns
from services.query_service import QueryService
import config


def _uploaded_content(field: str = "csv_file"):
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get(field)
        return f.read() if f else None
    return request.get_data()


@api_bp.route("/import", methods=["POST"])
def api_import_csv():
    """
    POST /import

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    Replaces the stored artwork table and flags rows whose
    Internal ID was not present in the previous import.
    """
    content = _uploaded_content()
    if not content:
        return jsonify({"error": "empty body"}), 400

    report = run_import(content)
    return jsonify(report.to_dict())


@api_bp.route("/export")
def api_export_csv():
    """
    GET /export?scope=filtered|all&q=&filters=&sort=&order=

    scope=all ignores the query parameters.
    """
    rows = load_rows()
    columns = table_columns(rows)
    if request.args.get("scope", "filtered") != "all":
        rows = QueryService.apply(rows, enumerated=config.ENUM_COLUMNS,
                                  **parse_query_args(request.args))

    filename = f"export-{date.today().isoformat()}.csv"
    return Response(
        serialize_csv(rows, columns),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
