"""
ARTDB - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path

import dotenv


# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR      = Path(__file__).resolve().parent
dotenv.load_dotenv(BASE_DIR / ".env")

CSV_SEED_PATH = Path(os.environ.get("ARTDB_CSV_SEED", BASE_DIR / "artwork_seed.csv"))

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("ARTDB_DB", f"sqlite:///{BASE_DIR / 'artdb.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST       = os.environ.get("ARTDB_HOST", "0.0.0.0")
PORT       = int(os.environ.get("ARTDB_PORT", "5000"))
DEBUG      = os.environ.get("ARTDB_DEBUG", "0") == "1"
SECRET     = os.environ.get("ARTDB_SECRET", "artdb-dev-key-change-in-prod")
API_PREFIX = os.environ.get("ARTDB_API_PREFIX", "/api/v1")
LOG_LEVEL  = os.environ.get("ARTDB_LOG_LEVEL", "INFO").upper()

# Static bearer token.  Empty string disables the check (local dev).
API_TOKEN = os.environ.get("ARTDB_API_TOKEN", "")

# ── Catalog ────────────────────────────────────────────────────────────
KEY_FIELD        = os.environ.get("ARTDB_KEY_FIELD", "Internal ID")
BLANK_SILO_FIELD = "Blank Silo"
RECIPE_FIELD     = "Recipe"
ENUM_COLUMNS = tuple(
    c.strip()
    for c in os.environ.get("ARTDB_ENUM_COLUMNS", "Blank Silo,Color,Recipe").split(",")
    if c.strip()
)

# ── Client ─────────────────────────────────────────────────────────────
GATEWAY_URL   = os.environ.get("ARTDB_GATEWAY_URL", f"http://127.0.0.1:{PORT}{API_PREFIX}")
HTTP_TIMEOUT  = float(os.environ.get("ARTDB_HTTP_TIMEOUT", "30"))
SAVE_DEBOUNCE = float(os.environ.get("ARTDB_SAVE_DEBOUNCE", "1.0"))
