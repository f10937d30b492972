"""
api.routes_reports - /reports/* endpoints.
"""

from flask import request, jsonify

from api import api_bp
from api.routes_query import load_rows
from services.report_service import newly_added, missing_data


@api_bp.route("/reports/newly-added")
def report_newly_added():
    """GET /reports/newly-added?days=10"""
    try:
        days = max(int(request.args.get("days", 10)), 1)
    except ValueError:
        days = 10
    return jsonify(newly_added(load_rows(), days=days))


@api_bp.route("/reports/missing-data")
def report_missing_data():
    """GET /reports/missing-data"""
    return jsonify(missing_data(load_rows()))
