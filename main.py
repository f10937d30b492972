#!/usr/bin/env python3
"""
ARTDB - Artwork Catalog Administration backend
===============================================

Single-command run:  python main.py

See config.py for all environment-variable tunables.
"""

import logging
from typing import Optional

from flask import Flask, jsonify

import config
from db import init_db, get_session
from api import api_bp


def create_app(overrides: Optional[dict] = None) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    # Row dicts are ordered by CSV column; keep that order on the wire
    app.json.sort_keys = False
    app.config.update(
        ARTDB_DB_URL=config.DB_URL,
        ARTDB_API_TOKEN=config.API_TOKEN,
    )
    if overrides:
        app.config.update(overrides)

    # ── Initialise database ─────────────────────────────────────────
    init_db(app.config["ARTDB_DB_URL"])

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)

    # ── CORS: browser front-ends call the API from another origin ───
    @app.after_request
    def _cors(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PUT, DELETE, OPTIONS"
        response.headers["Access-Control-Max-Age"] = "600"
        return response

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not found"}), 404

    # Routing 405s are raised before a blueprint is matched
    @app.errorhandler(405)
    def _405(e):
        return jsonify({"error": "method not allowed"}), 405

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "internal server error"}), 500

    return app


def _seed_if_empty():
    """Auto-import seed CSV when no artwork table has been stored yet."""
    from services.store_service import StoreService, DATA_KEY

    session = get_session()
    rows = StoreService.get(session, DATA_KEY) or []
    session.close()

    if rows:
        print(f"\n  Database has {len(rows)} rows.")
        return

    if not config.CSV_SEED_PATH.exists():
        print(f"\n  No seed CSV at {config.CSV_SEED_PATH} - starting empty.")
        return

    print(f"\n  Database empty → auto-importing {config.CSV_SEED_PATH.name} …")
    from import_engine import run_import

    with open(config.CSV_SEED_PATH, "rb") as fh:
        report = run_import(fh.read())

    print(f"  Done: {report.total_rows} rows, {report.new_rows} new")
    for err in report.errors[:10]:
        print(f"    Row {err['row']}: {err['reason']}")


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  ARTDB - Artwork Catalog")
    print("=" * 56)

    app = create_app()
    print(f"  Database: {config.DB_URL}")
    if not config.API_TOKEN:
        print("  WARNING: ARTDB_API_TOKEN not set - API is unauthenticated")
    _seed_if_empty()

    print(f"\n  http://{config.HOST}:{config.PORT}{config.API_PREFIX}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
