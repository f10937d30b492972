"""
api.routes_tables - Recipe and color side tables.

Recipe lookups plus CSV import/export for both tables.
"""

import logging
from datetime import date

from flask import request, jsonify, Response

from api import api_bp
from db import get_session
from import_engine.tables import (
    recipes_from_csv, recipes_to_csv, colors_from_csv, colors_to_csv,
)
from import_engine.csv_parser import decode_text
from services.recipe_service import resolve, slot_options
from services.store_service import StoreService, RECIPES_KEY, COLORS_KEY
import config

logger = logging.getLogger(__name__)


def _csv_download(text: str, stem: str) -> Response:
    filename = f"{stem}-{date.today().isoformat()}.csv"
    return Response(text, mimetype="text/csv",
                    headers={"Content-Disposition": f"attachment; filename={filename}"})


def _body_text() -> str:
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        return decode_text(f.read()) if f else ""
    return decode_text(request.get_data())


@api_bp.route("/recipes/resolve")
def recipes_resolve():
    """
    GET /recipes/resolve?blank_silo=&slot=

    Returns the slot value plus all slot options for the Blank Silo.
    """
    row = {config.BLANK_SILO_FIELD: request.args.get("blank_silo", "")}
    slot = request.args.get("slot", "").strip().upper()

    session = get_session()
    try:
        recipes = StoreService.get(session, RECIPES_KEY) or []
    finally:
        session.close()

    return jsonify({
        "blank_silo": row[config.BLANK_SILO_FIELD],
        "slot": slot,
        "value": resolve(row, recipes, slot),
        "options": [{"slot": s, "value": v} for s, v in slot_options(row, recipes)],
    })


@api_bp.route("/recipes/import", methods=["POST"])
def recipes_import():
    """POST /recipes/import  CSV body; entries are appended to the table."""
    text = _body_text()
    if not text.strip():
        return jsonify({"error": "empty body"}), 400

    entries = recipes_from_csv(text)
    session = get_session()
    try:
        recipes = (StoreService.get(session, RECIPES_KEY) or []) + entries
        StoreService.set(session, RECIPES_KEY, recipes)
        session.commit()
        logger.info(f"Imported {len(entries)} recipes ({len(recipes)} total)")
        return jsonify({"imported": len(entries), "total": len(recipes)})
    except Exception as exc:
        session.rollback()
        logger.error(f"Error importing recipes: {exc}")
        return jsonify({"error": f"Failed to import recipes: {exc}"}), 500
    finally:
        session.close()


@api_bp.route("/recipes/export")
def recipes_export():
    session = get_session()
    try:
        recipes = StoreService.get(session, RECIPES_KEY) or []
    finally:
        session.close()
    return _csv_download(recipes_to_csv(recipes), "recipe-lookup-table")


@api_bp.route("/colors/import", methods=["POST"])
def colors_import():
    """POST /colors/import  CSV body; replaces the color table."""
    text = _body_text()
    if not text.strip():
        return jsonify({"error": "empty body"}), 400

    colors = colors_from_csv(text)
    session = get_session()
    try:
        StoreService.set(session, COLORS_KEY, colors)
        session.commit()
        logger.info(f"Imported {len(colors)} colors")
        return jsonify({"imported": len(colors), "total": len(colors)})
    except Exception as exc:
        session.rollback()
        logger.error(f"Error importing colors: {exc}")
        return jsonify({"error": f"Failed to import colors: {exc}"}), 500
    finally:
        session.close()


@api_bp.route("/colors/export")
def colors_export():
    session = get_session()
    try:
        colors = StoreService.get(session, COLORS_KEY) or []
    finally:
        session.close()
    return _csv_download(colors_to_csv(colors), "homage-colors")
