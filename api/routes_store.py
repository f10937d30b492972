"""
api.routes_store - Whole-table load/save endpoints.

Each table is one JSON array in the key-value store.  Loads return an
empty array when nothing has been saved yet; saves overwrite.
"""

import logging

from flask import request, jsonify

from api import api_bp
from db import get_session
from services.store_service import StoreService, DATA_KEY, RECIPES_KEY, COLORS_KEY

logger = logging.getLogger(__name__)


def _load_table(key: str, field: str, label: str):
    session = get_session()
    try:
        value = StoreService.get(session, key)
        if not value:
            logger.info(f"No {label} found in database")
            return jsonify({field: []})
        logger.info(f"Loaded {len(value)} {label} from {key}")
        return jsonify({field: value})
    except Exception as exc:
        logger.error(f"Error loading {label}: {exc}")
        return jsonify({"error": f"Failed to load {label}: {exc}"}), 500
    finally:
        session.close()


def _save_table(key: str, field: str, label: str):
    body = request.get_json(silent=True) or {}
    value = body.get(field) if isinstance(body, dict) else None
    if not isinstance(value, list):
        return jsonify({"error": f"Invalid {field} format"}), 400

    session = get_session()
    try:
        StoreService.set(session, key, value)
        session.commit()
        logger.info(f"Saved {len(value)} {label} to {key}")
        return jsonify({
            "success": True,
            "message": f"Saved {len(value)} {label} successfully",
        })
    except Exception as exc:
        session.rollback()
        logger.error(f"Error saving {label}: {exc}")
        return jsonify({"error": f"Failed to save {field}: {exc}"}), 500
    finally:
        session.close()


@api_bp.route("/health")
def health():
    """GET /health"""
    return jsonify({"status": "ok"})


@api_bp.route("/load-data")
def load_data():
    """GET /load-data → {data: [...]}"""
    return _load_table(DATA_KEY, "data", "rows")


@api_bp.route("/save-data", methods=["POST"])
def save_data():
    """POST /save-data  JSON body: {data: [...]}"""
    return _save_table(DATA_KEY, "data", "rows")


@api_bp.route("/load-recipes")
def load_recipes():
    """GET /load-recipes → {recipes: [...]}"""
    return _load_table(RECIPES_KEY, "recipes", "recipes")


@api_bp.route("/save-recipes", methods=["POST"])
def save_recipes():
    """POST /save-recipes  JSON body: {recipes: [...]}"""
    return _save_table(RECIPES_KEY, "recipes", "recipes")


@api_bp.route("/load-colors")
def load_colors():
    """GET /load-colors → {colors: [...]}"""
    return _load_table(COLORS_KEY, "colors", "colors")


@api_bp.route("/save-colors", methods=["POST"])
def save_colors():
    """POST /save-colors  JSON body: {colors: [...]}"""
    return _save_table(COLORS_KEY, "colors", "colors")
